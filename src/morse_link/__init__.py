"""Morse code converter and trainer for a two-button indicator device.

Text sent over a serial link is played back as Morse tones and light
pulses, Morse sent back is decoded, and two quiz modes drill letters and
patterns. The pieces can be used on their own::

    from morse_link import encode, decode

    encode("SOS")  # '... --- ...'
    decode(".-")   # 'A'

:class:`~morse_link.app.TrainerApplication` wires everything to a serial
port, the console and an audio device.
"""

from __future__ import annotations

from .app import TrainerApplication
from .codec import (
    MORSE_TABLE,
    UnknownSymbolError,
    decode,
    encode,
    is_valid_morse_text,
    pattern_for,
    unsupported_characters,
)
from .config import AppConfig, ConfigError, load_config
from .dispatcher import DispatchResult, MessageDispatcher, Outcome
from .modes import Button, Mode, ModeController, next_mode
from .playback import MorsePlayer, SignalEvent, Timing, schedule
from .quiz import QuizEngine, QuizQuestion, QuizStateError, Verdict
from .transport import LinkError, LinkNotFoundError, SerialLink

__all__ = [
    "AppConfig",
    "Button",
    "ConfigError",
    "DispatchResult",
    "LinkError",
    "LinkNotFoundError",
    "MORSE_TABLE",
    "MessageDispatcher",
    "Mode",
    "ModeController",
    "MorsePlayer",
    "Outcome",
    "QuizEngine",
    "QuizQuestion",
    "QuizStateError",
    "SerialLink",
    "SignalEvent",
    "Timing",
    "TrainerApplication",
    "UnknownSymbolError",
    "Verdict",
    "decode",
    "encode",
    "is_valid_morse_text",
    "load_config",
    "next_mode",
    "pattern_for",
    "schedule",
    "unsupported_characters",
]

__version__ = "0.1.0"
