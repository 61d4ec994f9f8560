"""Turn Morse patterns into timed tone and light pulses."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from .clock import Clock
from .codec import WORD_SEPARATOR
from .audio import ToneGenerator
from .display import Display, Icon, Pixel

LOGGER = logging.getLogger(__name__)

DEFAULT_DOT = 0.2
DEFAULT_TONE_HZ = 1000

DOT_PIXELS: Tuple[Pixel, ...] = ((2, 2),)
DASH_PIXELS: Tuple[Pixel, ...] = ((1, 2), (2, 2), (3, 2))


@dataclass(frozen=True)
class Timing:
    """Morse unit durations in seconds, all derived from the dot length."""

    dot: float = DEFAULT_DOT

    def __post_init__(self) -> None:
        if self.dot <= 0:
            raise ValueError("The dot duration must be positive.")

    @property
    def dash(self) -> float:
        return self.dot * 3

    @property
    def element_pause(self) -> float:
        return self.dot

    @property
    def letter_pause(self) -> float:
        return self.dot * 3

    @property
    def word_pause(self) -> float:
        return self.dot * 7


@dataclass(frozen=True)
class SignalEvent:
    """One step of playback: a lit tone pulse or a silent pause."""

    tone: bool
    duration: float
    pixels: Tuple[Pixel, ...] = ()

    @classmethod
    def pulse(cls, duration: float, pixels: Tuple[Pixel, ...]) -> "SignalEvent":
        return cls(tone=True, duration=duration, pixels=pixels)

    @classmethod
    def pause(cls, duration: float) -> "SignalEvent":
        return cls(tone=False, duration=duration)


def schedule(pattern: str, timing: Timing = Timing()) -> List[SignalEvent]:
    """Expand *pattern* into signal events, strictly left to right.

    Every dot or dash is followed by an element pause. A space between
    letters becomes a letter pause and the word separator a word pause.
    Other characters produce nothing.
    """

    events: List[SignalEvent] = []
    for element in pattern:
        if element == ".":
            events.append(SignalEvent.pulse(timing.dot, DOT_PIXELS))
            events.append(SignalEvent.pause(timing.element_pause))
        elif element == "-":
            events.append(SignalEvent.pulse(timing.dash, DASH_PIXELS))
            events.append(SignalEvent.pause(timing.element_pause))
        elif element == " ":
            events.append(SignalEvent.pause(timing.letter_pause))
        elif element == WORD_SEPARATOR:
            events.append(SignalEvent.pause(timing.word_pause))
    return events


def total_duration(events: List[SignalEvent]) -> float:
    return sum(event.duration for event in events)


class MorsePlayer:
    """Play Morse patterns on the display and tone generator.

    Playback blocks the caller until the last pause has elapsed and cannot
    be interrupted.
    """

    def __init__(
        self,
        *,
        display: Display,
        tone: ToneGenerator,
        clock: Clock,
        timing: Timing = Timing(),
        frequency: float = DEFAULT_TONE_HZ,
    ) -> None:
        self._display = display
        self._tone = tone
        self._clock = clock
        self.timing = timing
        self.frequency = frequency

    def play(self, pattern: str) -> List[SignalEvent]:
        events = schedule(pattern, self.timing)
        LOGGER.debug(
            "Playing %r as %d events over %.2fs", pattern, len(events), total_duration(events)
        )
        self._display.show_icon(Icon.EIGHTH_NOTE)
        self._display.clear()
        for event in events:
            self._perform(event)
        self._display.clear()
        return events

    def _perform(self, event: SignalEvent) -> None:
        if event.tone:
            for x, y in event.pixels:
                self._display.plot(x, y)
            self._tone.play_tone(self.frequency, event.duration)
            return
        self._clock.sleep(event.duration)
        self._display.clear()


__all__ = [
    "DASH_PIXELS",
    "DEFAULT_DOT",
    "DEFAULT_TONE_HZ",
    "DOT_PIXELS",
    "MorsePlayer",
    "SignalEvent",
    "Timing",
    "schedule",
    "total_duration",
]
