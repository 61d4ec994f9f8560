"""Route incoming lines to the converter or quiz for the current mode."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from . import codec
from .audio import ToneGenerator
from .clock import Clock
from .display import Display, Icon
from .modes import Mode, ModeController
from .playback import MorsePlayer
from .quiz import QuizEngine, Verdict

LOGGER = logging.getLogger(__name__)

CORRECT_TONE_HZ = 1200
WRONG_TONE_HZ = 200
CUE_TONE_SECONDS = 0.3
VERDICT_PAUSE = 1.0
SHORT_PAUSE = 0.5


class Outcome(str, Enum):
    IGNORED = "ignored"
    PLAYED = "played"
    DECODED = "decoded"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"
    CORRECT = "correct"
    WRONG = "wrong"


@dataclass(frozen=True)
class DispatchResult:
    outcome: Outcome
    detail: Optional[str] = None


class MessageDispatcher:
    """Handle one received line according to the controller's mode."""

    def __init__(
        self,
        *,
        controller: ModeController,
        quiz: QuizEngine,
        player: MorsePlayer,
        display: Display,
        tone: ToneGenerator,
        clock: Clock,
    ) -> None:
        self._controller = controller
        self._quiz = quiz
        self._player = player
        self._display = display
        self._tone = tone
        self._clock = clock

    def handle_line(self, line: str) -> DispatchResult:
        if not line:
            return DispatchResult(Outcome.IGNORED)

        mode = self._controller.mode
        LOGGER.debug("Line %r in mode %s", line, mode.label)
        if mode is Mode.TEXT_TO_MORSE:
            return self._text_to_morse(line)
        if mode is Mode.QUIZ_LETTER:
            return self._quiz_letter(line)
        if mode is Mode.MORSE_TO_TEXT:
            return self._morse_to_text(line)
        if mode is Mode.QUIZ_MORSE:
            return self._quiz_morse(line)
        raise ValueError(f"Unsupported mode: {mode}")  # pragma: no cover - exhaustive guard

    def _text_to_morse(self, line: str) -> DispatchResult:
        pattern = codec.encode(line)
        self._player.play(pattern)
        return DispatchResult(Outcome.PLAYED, pattern)

    def _quiz_letter(self, line: str) -> DispatchResult:
        question = self._quiz.pending
        if question is None:
            self._quiz.start_letter_question()
            return DispatchResult(Outcome.IGNORED)

        verdict = self._quiz.judge_letter_answer(line)
        if verdict is Verdict.CORRECT:
            self._cue_correct()
        else:
            self._cue_wrong()
            self._display.show_text(f"={question.letter}")
            self._clock.sleep(SHORT_PAUSE)
        self._quiz.start_letter_question()
        return DispatchResult(Outcome(verdict.value), question.letter)

    def _morse_to_text(self, line: str) -> DispatchResult:
        morse = line.strip()
        if not codec.is_valid_morse_text(morse):
            self._cue_failure()
            return DispatchResult(Outcome.MALFORMED, morse)

        symbol = codec.decode(morse)
        if symbol is None:
            self._cue_failure()
            return DispatchResult(Outcome.NOT_FOUND, morse)

        self._display.show_icon(Icon.YES)
        self._clock.sleep(SHORT_PAUSE)
        self._display.show_text(symbol)
        return DispatchResult(Outcome.DECODED, symbol)

    def _quiz_morse(self, line: str) -> DispatchResult:
        question = self._quiz.pending
        if question is None:
            self._quiz.start_morse_question()
            return DispatchResult(Outcome.IGNORED)

        answer = line.strip()
        verdict = self._quiz.judge_morse_answer(answer)
        if verdict is Verdict.MALFORMED:
            self._cue_failure()
            self._display.show_icon(Icon.DIAMOND)
            return DispatchResult(Outcome.MALFORMED, answer)

        if verdict is Verdict.CORRECT:
            self._cue_correct()
        else:
            self._cue_wrong()
            self._display.show_text("=")
            self._player.play(question.pattern)
            self._clock.sleep(SHORT_PAUSE)
        self._quiz.start_morse_question()
        return DispatchResult(Outcome(verdict.value), question.pattern)

    def _cue_correct(self) -> None:
        self._display.show_icon(Icon.YES)
        self._tone.play_tone(CORRECT_TONE_HZ, CUE_TONE_SECONDS)
        self._clock.sleep(VERDICT_PAUSE)

    def _cue_wrong(self) -> None:
        self._display.show_icon(Icon.NO)
        self._tone.play_tone(WRONG_TONE_HZ, CUE_TONE_SECONDS)
        self._clock.sleep(VERDICT_PAUSE)

    def _cue_failure(self) -> None:
        self._display.show_icon(Icon.NO)
        self._clock.sleep(SHORT_PAUSE)


__all__ = ["DispatchResult", "MessageDispatcher", "Outcome"]
