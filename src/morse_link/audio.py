"""Blocking tone output for Morse playback and quiz feedback."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from .clock import Clock, SystemClock

LOGGER = logging.getLogger(__name__)

DEFAULT_SAMPLERATE = 48000
DEFAULT_VOLUME = 0.5
_RAMP_SECONDS = 0.004


class AudioBackendUnavailableError(RuntimeError):
    """Raised when sounddevice cannot reach a usable PortAudio output."""


class ToneGenerator(Protocol):
    def play_tone(self, frequency: float, duration: float) -> None:
        ...


def _require_sounddevice() -> Any:
    try:
        import sounddevice  # type: ignore[import-not-found]
    except ModuleNotFoundError as exc:  # pragma: no cover - import guard
        raise ModuleNotFoundError(
            "sounddevice is required for audible playback. "
            "Install it with 'pip install sounddevice' or run with --mute."
        ) from exc
    except OSError as exc:
        raise AudioBackendUnavailableError(
            "sounddevice could not load the PortAudio library. "
            "Install PortAudio for your platform or run with --mute."
        ) from exc
    return sounddevice


def synthesise_tone(
    frequency: float,
    duration: float,
    *,
    samplerate: int = DEFAULT_SAMPLERATE,
    volume: float = DEFAULT_VOLUME,
):
    """Return a mono float32 sine burst with short attack and release ramps."""

    import numpy as np

    frames = max(int(round(duration * samplerate)), 0)
    t = np.arange(frames, dtype=np.float32) / float(samplerate)
    wave = np.sin(2.0 * np.pi * float(frequency) * t, dtype=np.float32)

    ramp = min(int(_RAMP_SECONDS * samplerate), frames // 2)
    envelope = np.ones(frames, dtype=np.float32)
    if ramp > 0:
        rise = np.linspace(0.0, 1.0, ramp, dtype=np.float32)
        envelope[:ramp] = rise
        envelope[frames - ramp :] = rise[::-1]

    level = max(0.0, min(1.0, float(volume)))
    return (wave * envelope * level).astype(np.float32)


class SoundDeviceTone:
    """Play tones on the default output device and wait for them to finish."""

    def __init__(
        self,
        *,
        samplerate: int = DEFAULT_SAMPLERATE,
        volume: float = DEFAULT_VOLUME,
        device: Optional[int | str] = None,
    ) -> None:
        self._sd = _require_sounddevice()
        self.samplerate = samplerate
        self.volume = volume
        self.device = device
        try:
            self._sd.query_devices(device, kind="output")
        except Exception as exc:
            raise AudioBackendUnavailableError(
                f"No usable audio output device ({exc})."
            ) from exc

    def play_tone(self, frequency: float, duration: float) -> None:
        if duration <= 0:
            return
        samples = synthesise_tone(
            frequency, duration, samplerate=self.samplerate, volume=self.volume
        )
        LOGGER.debug("Tone %.0fHz for %.3fs", frequency, duration)
        self._sd.play(samples, self.samplerate, device=self.device)
        self._sd.wait()


class SilentTone:
    """Tone generator that only lets the duration pass."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or SystemClock()

    def play_tone(self, frequency: float, duration: float) -> None:
        self._clock.sleep(duration)


__all__ = [
    "AudioBackendUnavailableError",
    "SilentTone",
    "SoundDeviceTone",
    "ToneGenerator",
    "synthesise_tone",
]
