"""Single-question quiz engine for the letter and Morse quiz modes."""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from . import codec
from .clock import Clock
from .display import Display, Icon
from .playback import MorsePlayer

LOGGER = logging.getLogger(__name__)

PROMPT_PAUSE = 0.5


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int:
        ...


class QuizStateError(RuntimeError):
    """Raised when the quiz is asked to judge or advance in an invalid state."""


class QuestionKind(str, Enum):
    LETTER = "letter"
    MORSE = "morse"


class Verdict(str, Enum):
    CORRECT = "correct"
    WRONG = "wrong"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class QuizQuestion:
    letter: str
    kind: QuestionKind
    serial: int

    @property
    def pattern(self) -> str:
        return codec.pattern_for(self.letter)


class QuizEngine:
    """Hold the pending question and judge answers against it.

    Starting a question replaces the pending one. Judging never advances by
    itself; callers start the next question once feedback has been shown.
    """

    def __init__(
        self,
        *,
        display: Display,
        player: MorsePlayer,
        clock: Clock,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self._display = display
        self._player = player
        self._clock = clock
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._serials = itertools.count(1)
        self._pending: Optional[QuizQuestion] = None
        self._starting = False

    @property
    def pending(self) -> Optional[QuizQuestion]:
        return self._pending

    def start_letter_question(self) -> QuizQuestion:
        question = self._draw(QuestionKind.LETTER)
        self._starting = True
        try:
            self._display.show_text("?")
            self._clock.sleep(PROMPT_PAUSE)
            self._player.play(question.pattern)
            self._display.show_icon(Icon.DIAMOND)
        finally:
            self._starting = False
        return question

    def start_morse_question(self) -> QuizQuestion:
        question = self._draw(QuestionKind.MORSE)
        self._starting = True
        try:
            self._display.show_text(question.letter)
            self._display.show_icon(Icon.DIAMOND)
        finally:
            self._starting = False
        return question

    def judge_letter_answer(self, text: str) -> Verdict:
        question = self._require_pending(QuestionKind.LETTER)
        answer = text[:1].upper()
        verdict = Verdict.CORRECT if answer == question.letter else Verdict.WRONG
        LOGGER.info("Letter answer %r for %s: %s", answer, question.letter, verdict.value)
        return verdict

    def judge_morse_answer(self, text: str) -> Verdict:
        question = self._require_pending(QuestionKind.MORSE)
        if not codec.is_valid_morse_text(text):
            LOGGER.debug("Rejecting malformed Morse answer %r", text)
            return Verdict.MALFORMED
        answer = text.strip()
        verdict = Verdict.CORRECT if answer == question.pattern else Verdict.WRONG
        LOGGER.info("Morse answer %r for %s: %s", answer, question.letter, verdict.value)
        return verdict

    def _draw(self, kind: QuestionKind) -> QuizQuestion:
        if self._starting:
            raise QuizStateError("A new question was requested while one was being started.")
        letter = codec.LETTERS[self._rng.randrange(len(codec.LETTERS))]
        question = QuizQuestion(letter=letter, kind=kind, serial=next(self._serials))
        self._pending = question
        LOGGER.debug("New %s question #%d: %s", kind.value, question.serial, letter)
        return question

    def _require_pending(self, kind: QuestionKind) -> QuizQuestion:
        question = self._pending
        if question is None:
            raise QuizStateError("No quiz question is pending.")
        if question.kind is not kind:
            raise QuizStateError(
                f"The pending question expects a {question.kind.value} answer, not a {kind.value} answer."
            )
        return question


__all__ = [
    "QuestionKind",
    "QuizEngine",
    "QuizQuestion",
    "QuizStateError",
    "RandomSource",
    "Verdict",
]
