from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from morse_link.clock import VirtualClock
from morse_link.codec import LETTERS
from morse_link.dispatcher import MessageDispatcher
from morse_link.display import Icon
from morse_link.modes import Mode, ModeController
from morse_link.playback import MorsePlayer, Timing
from morse_link.quiz import QuizEngine


class RecordingDisplay:
    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def show_text(self, text: str) -> None:
        self.calls.append(("text", text))

    def show_icon(self, icon: Icon) -> None:
        self.calls.append(("icon", icon))

    def plot(self, x: int, y: int) -> None:
        self.calls.append(("plot", (x, y)))

    def clear(self) -> None:
        self.calls.append(("clear",))

    def texts(self) -> List[str]:
        return [call[1] for call in self.calls if call[0] == "text"]

    def icons(self) -> List[Icon]:
        return [call[1] for call in self.calls if call[0] == "icon"]


class RecordingTone:
    def __init__(self) -> None:
        self.calls: List[Tuple[float, float]] = []

    def play_tone(self, frequency: float, duration: float) -> None:
        self.calls.append((frequency, duration))


class ScriptedRandom:
    """Draw letters in a fixed order, cycling when the script runs out."""

    def __init__(self, letters: Iterable[str]) -> None:
        self._letters = list(letters) or ["A"]
        self._index = 0
        self.requests: List[int] = []

    def randrange(self, stop: int) -> int:
        self.requests.append(stop)
        letter = self._letters[self._index % len(self._letters)]
        self._index += 1
        return LETTERS.index(letter)


@dataclass
class Rig:
    display: RecordingDisplay
    tone: RecordingTone
    clock: VirtualClock
    rng: ScriptedRandom
    player: MorsePlayer
    quiz: QuizEngine
    controller: ModeController
    dispatcher: MessageDispatcher

    def reset_recordings(self) -> None:
        self.display.calls.clear()
        self.tone.calls.clear()
        self.clock.sleeps.clear()


@pytest.fixture
def make_rig() -> Callable[..., Rig]:
    def _make(letters: Iterable[str] = "A", *, dot: float = 0.2, initial: Mode = Mode.TEXT_TO_MORSE) -> Rig:
        display = RecordingDisplay()
        tone = RecordingTone()
        clock = VirtualClock()
        rng = ScriptedRandom(letters)
        player = MorsePlayer(display=display, tone=tone, clock=clock, timing=Timing(dot=dot))
        quiz = QuizEngine(display=display, player=player, clock=clock, rng=rng)
        controller = ModeController(display=display, quiz=quiz, clock=clock, initial=initial)
        dispatcher = MessageDispatcher(
            controller=controller,
            quiz=quiz,
            player=player,
            display=display,
            tone=tone,
            clock=clock,
        )
        return Rig(display, tone, clock, rng, player, quiz, controller, dispatcher)

    return _make


@pytest.fixture
def rig(make_rig) -> Rig:
    return make_rig()
