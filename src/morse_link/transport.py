"""Line-oriented serial link to the paired phone or terminal."""

from __future__ import annotations

import logging
from threading import Event, Lock, Thread, current_thread
from typing import Any, List, Optional

from .events import ConnectionChanged, EventQueue, LineReceived

LOGGER = logging.getLogger(__name__)

DEFAULT_BAUDRATE = 115200
DEFAULT_READ_TIMEOUT = 0.1
DEFAULT_RECONNECT_INTERVAL = 1.0
LINE_DELIMITER = b"\n"


class LinkError(RuntimeError):
    """Raised when the serial link fails in a way the reader cannot recover from."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class LinkNotFoundError(LinkError):
    """Raised when the serial port cannot be opened and waiting is disabled."""


def _require_serial() -> Any:
    try:
        import serial  # type: ignore[import-not-found]
    except ModuleNotFoundError as exc:  # pragma: no cover - import guard
        raise ModuleNotFoundError(
            "pyserial is required to talk to the Morse link. "
            "Install it with 'pip install pyserial'."
        ) from exc
    return serial


def split_lines(buffer: bytearray) -> List[str]:
    """Remove every complete line from *buffer* and return the non-empty ones.

    Lines are decoded as UTF-8 with replacement characters and lose their
    ``\\r\\n`` terminator. A trailing partial line stays in the buffer.
    """

    lines: List[str] = []
    while True:
        index = buffer.find(LINE_DELIMITER)
        if index == -1:
            return lines
        raw = bytes(buffer[:index])
        del buffer[: index + 1]
        text = raw.decode("utf-8", errors="replace").rstrip("\r")
        if text:
            lines.append(text)


class SerialLink:
    """Read lines from a serial port on a background thread.

    Every received line is posted to the event queue as
    :class:`~morse_link.events.LineReceived`. Opening and losing the port are
    posted as :class:`~morse_link.events.ConnectionChanged`. When the port goes
    away the reader keeps retrying every ``reconnect_interval`` seconds unless
    ``wait_for_device`` is disabled.
    """

    def __init__(
        self,
        queue: EventQueue,
        *,
        port: str,
        baudrate: int = DEFAULT_BAUDRATE,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        reconnect_interval: float = DEFAULT_RECONNECT_INTERVAL,
        wait_for_device: bool = True,
        auto_start: bool = False,
    ) -> None:
        self._queue = queue
        self.port = port
        self.baudrate = baudrate
        self.read_timeout = read_timeout
        self.reconnect_interval = max(reconnect_interval, 0.05)
        self._wait_for_device = wait_for_device

        self._serial_mod: Any | None = None
        self._serial: Any | None = None
        self._buffer = bytearray()
        self._state_lock = Lock()
        self._pending_exception: Optional[LinkError] = None
        self._stop_event = Event()
        self._thread: Optional[Thread] = None

        if auto_start:
            self.start()

    @property
    def connected(self) -> bool:
        return self._serial is not None

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._load_serial()
        with self._state_lock:
            self._pending_exception = None
        self._stop_event.clear()
        self._thread = Thread(target=self._run, name="SerialLink", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        worker = self._thread
        if worker and worker.is_alive() and worker is not current_thread():
            worker.join()
        self._thread = None
        self._close_port()

    close = stop

    def __enter__(self) -> "SerialLink":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def raise_for_error(self) -> None:
        """Re-raise a fatal error recorded by the reader thread, if any."""

        with self._state_lock:
            pending = self._pending_exception
        if pending is not None:
            raise pending

    def poll_once(self) -> bool:
        """Open the port if needed and read what is available.

        Returns ``False`` when the port could not be opened or was lost during
        this call.
        """

        self._load_serial()
        if self._serial is None and not self._open():
            return False
        try:
            chunk = self._serial.read(max(1, self._serial.in_waiting or 0))
        except (self._serial_mod.SerialException, OSError) as exc:
            LOGGER.warning("Serial link on %s was lost: %s", self.port, exc)
            self._lost()
            return False
        if chunk:
            self._buffer.extend(chunk)
            for line in split_lines(self._buffer):
                LOGGER.debug("Received line %r", line)
                self._queue.post(LineReceived(line))
        return True

    def _load_serial(self) -> Any:
        if self._serial_mod is None:
            self._serial_mod = _require_serial()
        return self._serial_mod

    def _run(self) -> None:
        waiting_logged = False
        while not self._stop_event.is_set():
            try:
                if self.poll_once():
                    waiting_logged = False
                    continue
            except LinkError as exc:
                self._record_exception(exc)
                return
            except Exception as exc:  # pragma: no cover - defensive worker guard
                self._record_exception(LinkError("Serial link reader failed.", cause=exc))
                return
            if not waiting_logged:
                LOGGER.info("Waiting for serial port %s to become available...", self.port)
                waiting_logged = True
            self._stop_event.wait(self.reconnect_interval)

    def _open(self) -> bool:
        serial_mod = self._serial_mod
        try:
            handle = serial_mod.Serial(
                port=self.port, baudrate=self.baudrate, timeout=self.read_timeout
            )
        except (serial_mod.SerialException, OSError) as exc:
            if not self._wait_for_device:
                raise LinkNotFoundError(
                    f"Unable to open serial port {self.port}. "
                    "Ensure the device is paired and the port exists.",
                    cause=exc,
                ) from exc
            LOGGER.debug("Opening %s failed: %s", self.port, exc)
            return False
        self._serial = handle
        self._buffer.clear()
        LOGGER.info("Serial link open on %s at %d baud", self.port, self.baudrate)
        self._queue.post(ConnectionChanged(connected=True))
        return True

    def _lost(self) -> None:
        self._close_port()
        self._queue.post(ConnectionChanged(connected=False))
        if not self._wait_for_device:
            raise LinkError(f"Serial link on {self.port} was lost.")

    def _close_port(self) -> None:
        handle = self._serial
        self._serial = None
        self._buffer.clear()
        if handle is None:
            return
        try:
            handle.close()
        except Exception:  # pragma: no cover - best effort cleanup
            LOGGER.debug("Failed to close serial port %s", self.port, exc_info=True)

    def _record_exception(self, exc: LinkError) -> None:
        with self._state_lock:
            if self._pending_exception is None:
                self._pending_exception = exc
        LOGGER.error("Serial link stopped: %s", exc.cause or exc)
        self._stop_event.set()


__all__ = [
    "DEFAULT_BAUDRATE",
    "LinkError",
    "LinkNotFoundError",
    "SerialLink",
    "split_lines",
]
