"""Keyboard stand-in for the two buttons and, optionally, the link."""

from __future__ import annotations

import logging
import sys
from threading import Thread
from typing import IO, Optional

from .events import ButtonPressed, ConnectionChanged, EventQueue, LineReceived, Shutdown
from .modes import Button

LOGGER = logging.getLogger(__name__)

COMMAND_PREFIX = ":"
QUIT_COMMANDS = {"q", "quit", "exit"}
_BUTTON_COMMANDS = {
    "a": Button.A,
    "b": Button.B,
}


def parse_console_line(line: str, *, forward_lines: bool):
    """Translate one console line into an event, or ``None`` to ignore it.

    ``:a`` and ``:b`` press the buttons and ``:q`` quits. Other text becomes
    a received line when *forward_lines* is set.
    """

    text = line.rstrip("\r\n")
    stripped = text.strip()
    if stripped.startswith(COMMAND_PREFIX):
        command = stripped[len(COMMAND_PREFIX) :].strip().lower()
        if command in _BUTTON_COMMANDS:
            return ButtonPressed(_BUTTON_COMMANDS[command])
        if command in QUIT_COMMANDS:
            return Shutdown("quit requested")
        raise ValueError(f"Unknown command '{stripped}'. Supported commands: :a, :b, :q")
    if not text:
        return None
    if forward_lines:
        return LineReceived(text)
    raise ValueError("Messages arrive over the serial link; use :a, :b or :q here")


class ConsoleInput:
    """Read console lines on a background thread and post events.

    With ``forward_lines`` the console also acts as the link: it reports
    itself connected on start and passes ordinary lines through, and the end
    of input shuts the trainer down. Otherwise the serial link is the input
    and reaching the end of the stream only stops the reader.
    """

    def __init__(
        self,
        queue: EventQueue,
        *,
        stream: Optional[IO[str]] = None,
        forward_lines: bool = False,
    ) -> None:
        self._queue = queue
        self._stream = stream
        self.forward_lines = forward_lines
        self._thread: Optional[Thread] = None

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        if self.forward_lines:
            self._queue.post(ConnectionChanged(connected=True))
        self._thread = Thread(target=self._run, name="ConsoleInput", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        stream = self._stream if self._stream is not None else sys.stdin
        for line in stream:
            try:
                event = parse_console_line(line, forward_lines=self.forward_lines)
            except ValueError as exc:
                LOGGER.error("%s", exc)
                continue
            if event is None:
                continue
            self._queue.post(event)
            if isinstance(event, Shutdown):
                return
        if not self.forward_lines:
            LOGGER.debug("Console input closed; buttons are no longer available")
            return
        self._queue.post(Shutdown("end of console input"))


__all__ = ["ConsoleInput", "parse_console_line"]
