"""The four operating modes and the button-driven transitions between them."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Tuple

from .clock import Clock
from .display import Display
from .quiz import QuizEngine

LOGGER = logging.getLogger(__name__)

LABEL_PAUSE = 0.5


class Mode(str, Enum):
    """Operating mode; the value is the label shown on the display."""

    TEXT_TO_MORSE = "T1"
    QUIZ_LETTER = "Q1"
    MORSE_TO_TEXT = "T2"
    QUIZ_MORSE = "Q2"

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_quiz(self) -> bool:
        return self in (Mode.QUIZ_LETTER, Mode.QUIZ_MORSE)


class Button(str, Enum):
    A = "a"
    B = "b"


# Button A toggles between a converter and its quiz, B between the two groups.
TRANSITIONS: Dict[Tuple[Mode, Button], Mode] = {
    (Mode.TEXT_TO_MORSE, Button.A): Mode.QUIZ_LETTER,
    (Mode.TEXT_TO_MORSE, Button.B): Mode.MORSE_TO_TEXT,
    (Mode.QUIZ_LETTER, Button.A): Mode.TEXT_TO_MORSE,
    (Mode.QUIZ_LETTER, Button.B): Mode.QUIZ_MORSE,
    (Mode.MORSE_TO_TEXT, Button.A): Mode.QUIZ_MORSE,
    (Mode.MORSE_TO_TEXT, Button.B): Mode.TEXT_TO_MORSE,
    (Mode.QUIZ_MORSE, Button.A): Mode.MORSE_TO_TEXT,
    (Mode.QUIZ_MORSE, Button.B): Mode.QUIZ_LETTER,
}


def next_mode(mode: Mode, button: Button) -> Mode:
    return TRANSITIONS[(Mode(mode), Button(button))]


class ModeController:
    """Own the current mode and react to button presses."""

    def __init__(
        self,
        *,
        display: Display,
        quiz: QuizEngine,
        clock: Clock,
        initial: Mode = Mode.TEXT_TO_MORSE,
    ) -> None:
        self._display = display
        self._quiz = quiz
        self._clock = clock
        self._mode = Mode(initial)

    @property
    def mode(self) -> Mode:
        return self._mode

    def press(self, button: Button) -> Mode:
        previous = self._mode
        self._mode = next_mode(previous, button)
        LOGGER.info("Button %s: %s -> %s", Button(button).name, previous.label, self._mode.label)
        self.show_current_mode()
        self._enter(self._mode)
        return self._mode

    def show_current_mode(self) -> None:
        self._display.show_text(self._mode.label)
        self._clock.sleep(LABEL_PAUSE)
        self._display.clear()

    def _enter(self, mode: Mode) -> None:
        if mode is Mode.QUIZ_LETTER:
            self._quiz.start_letter_question()
        elif mode is Mode.QUIZ_MORSE:
            self._quiz.start_morse_question()


__all__ = ["Button", "Mode", "ModeController", "TRANSITIONS", "next_mode"]
