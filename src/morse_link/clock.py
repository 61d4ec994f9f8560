"""Blocking clocks used for every pause the device makes."""

from __future__ import annotations

import time
from typing import List, Protocol


class Clock(Protocol):
    def sleep(self, seconds: float) -> None:
        ...


class SystemClock:
    """Wall-clock pauses through :func:`time.sleep`."""

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)


class VirtualClock:
    """Clock that records pauses instead of waiting for them."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += max(seconds, 0.0)


__all__ = ["Clock", "SystemClock", "VirtualClock"]
