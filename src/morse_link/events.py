"""Input events and the queue that serialises them onto one consumer."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from threading import Condition
from typing import Deque, Hashable, Optional, Union

from .modes import Button

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ButtonPressed:
    button: Button


@dataclass(frozen=True)
class LineReceived:
    text: str


@dataclass(frozen=True)
class ConnectionChanged:
    connected: bool


@dataclass(frozen=True)
class Shutdown:
    reason: str = ""


Event = Union[ButtonPressed, LineReceived, ConnectionChanged, Shutdown]


def _source_of(event: Event) -> Optional[Hashable]:
    """Return the coalescing key for *event*, or ``None`` when it always queues."""

    if isinstance(event, ButtonPressed):
        return ("button", event.button)
    if isinstance(event, ConnectionChanged):
        return "connection"
    return None


class EventQueue:
    """Thread-safe FIFO with at most one pending event per button and link.

    A second press of a button that is still waiting is dropped. A newer
    connection change drops the pending one and queues behind everything
    posted before it. Received lines and
    shutdown requests are always queued.
    """

    def __init__(self) -> None:
        self._events: Deque[Event] = deque()
        self._condition = Condition()

    def __len__(self) -> int:
        with self._condition:
            return len(self._events)

    def post(self, event: Event) -> bool:
        source = _source_of(event)
        with self._condition:
            if source is not None:
                for index, pending in enumerate(self._events):
                    if _source_of(pending) != source:
                        continue
                    if isinstance(event, ConnectionChanged):
                        del self._events[index]
                        break
                    LOGGER.debug("Dropping %s; one is already pending", event)
                    return False
            self._events.append(event)
            self._condition.notify()
            return True

    def get(self, timeout: Optional[float] = None) -> Optional[Event]:
        with self._condition:
            if not self._events:
                self._condition.wait(timeout)
            if not self._events:
                return None
            return self._events.popleft()


__all__ = [
    "ButtonPressed",
    "ConnectionChanged",
    "Event",
    "EventQueue",
    "LineReceived",
    "Shutdown",
]
