"""Morse converter and trainer driven by a serial link and two buttons."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Iterable, Optional

from .audio import AudioBackendUnavailableError, SilentTone, SoundDeviceTone, ToneGenerator
from .clock import Clock, SystemClock
from .config import AppConfig, ConfigError, load_config
from .console import ConsoleInput
from .dispatcher import DispatchResult, MessageDispatcher
from .display import ConsoleDisplay, Display, Icon
from .events import ButtonPressed, ConnectionChanged, Event, EventQueue, LineReceived, Shutdown
from .modes import ModeController
from .playback import MorsePlayer, Timing
from .quiz import QuizEngine, RandomSource
from .transport import LinkError, SerialLink

LOGGER = logging.getLogger(__name__)

STARTUP_TEXT = "READY"
STARTUP_PAUSE = 0.5
CONNECTION_GLYPH_PAUSE = 1.0
_POLL_INTERVAL = 0.25


class TrainerApplication:
    """Wire the converter, quiz and mode controller to their inputs.

    All events are handled one at a time on the thread that calls
    :meth:`run`; producers only ever post to the event queue.
    """

    def __init__(
        self,
        config: AppConfig,
        *,
        display: Optional[Display] = None,
        tone: Optional[ToneGenerator] = None,
        clock: Optional[Clock] = None,
        rng: Optional[RandomSource] = None,
        queue: Optional[EventQueue] = None,
    ) -> None:
        self.config = config
        self.queue = queue or EventQueue()
        self.clock = clock or SystemClock()
        self.display = display or ConsoleDisplay()
        self.tone = tone or _create_tone(config, self.clock)
        if rng is None:
            rng = random.Random(config.seed)

        self.player = MorsePlayer(
            display=self.display,
            tone=self.tone,
            clock=self.clock,
            timing=Timing(dot=config.dot),
            frequency=config.tone_hz,
        )
        self.quiz = QuizEngine(display=self.display, player=self.player, clock=self.clock, rng=rng)
        self.controller = ModeController(display=self.display, quiz=self.quiz, clock=self.clock)
        self.dispatcher = MessageDispatcher(
            controller=self.controller,
            quiz=self.quiz,
            player=self.player,
            display=self.display,
            tone=self.tone,
            clock=self.clock,
        )
        self._link: Optional[SerialLink] = None

    def startup(self) -> None:
        self.display.show_text(STARTUP_TEXT)
        self.clock.sleep(STARTUP_PAUSE)
        self.display.show_text(self.controller.mode.label)

    def handle(self, event: Event) -> Optional[DispatchResult]:
        """Process one event to completion.

        Returns the dispatch result for received lines and ``None`` for
        everything else.
        """

        if isinstance(event, LineReceived):
            return self.dispatcher.handle_line(event.text)
        if isinstance(event, ButtonPressed):
            self.controller.press(event.button)
            return None
        if isinstance(event, ConnectionChanged):
            self._connection_changed(event.connected)
            return None
        if isinstance(event, Shutdown):
            return None
        raise ValueError(f"Unsupported event: {event!r}")  # pragma: no cover - exhaustive guard

    def process(self, events: Iterable[Event]) -> None:
        for event in events:
            if isinstance(event, Shutdown):
                return
            self._handle_safely(event)

    def run(self) -> None:
        LOGGER.info("Starting Morse trainer")
        console = ConsoleInput(self.queue, forward_lines=self.config.port is None)
        if self.config.port is not None:
            self._link = SerialLink(
                self.queue,
                port=self.config.port,
                baudrate=self.config.baudrate,
                reconnect_interval=self.config.reconnect_interval,
            )
        self.startup()
        try:
            if self._link is not None:
                self._link.start()
            console.start()
            self._loop()
        except KeyboardInterrupt:
            LOGGER.info("Stopping Morse trainer")
        finally:
            if self._link is not None:
                self._link.stop()
            self.display.clear()

    def _loop(self) -> None:
        while True:
            if self._link is not None:
                self._link.raise_for_error()
            event = self.queue.get(timeout=_POLL_INTERVAL)
            if event is None:
                continue
            if isinstance(event, Shutdown):
                LOGGER.info("Shutting down: %s", event.reason or "requested")
                return
            self._handle_safely(event)

    def _handle_safely(self, event: Event) -> None:
        try:
            self.handle(event)
        except Exception:
            LOGGER.exception("Error while handling %s", event)

    def _connection_changed(self, connected: bool) -> None:
        LOGGER.info("Link %s", "connected" if connected else "disconnected")
        self.display.show_icon(Icon.YES if connected else Icon.NO)
        self.clock.sleep(CONNECTION_GLYPH_PAUSE)
        self.display.clear()
        if connected:
            self.controller.show_current_mode()


def _create_tone(config: AppConfig, clock: Clock) -> ToneGenerator:
    if config.mute:
        return SilentTone(clock)
    return SoundDeviceTone()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="morse-link", description=__doc__)
    parser.add_argument("--config", type=Path, default=None, help="JSON configuration file")
    parser.add_argument(
        "--port",
        default=None,
        help="Serial port of the paired link (e.g. /dev/rfcomm0). Omit to type messages here.",
    )
    parser.add_argument("--baudrate", type=int, default=None, help="Serial baud rate")
    parser.add_argument("--dot", type=float, default=None, help="Dot length in seconds")
    parser.add_argument("--tone", dest="tone_hz", type=float, default=None, help="Playback tone in Hz")
    parser.add_argument(
        "--mute",
        action="store_const",
        const=True,
        default=None,
        help="Do not open an audio device; tones become silent pauses",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for quiz letters")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging verbosity (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def build_config(args: argparse.Namespace) -> AppConfig:
    config = load_config(args.config) if args.config is not None else AppConfig()
    return config.with_overrides(
        {
            "port": args.port,
            "baudrate": args.baudrate,
            "dot": args.dot,
            "tone_hz": args.tone_hz,
            "mute": args.mute,
            "seed": args.seed,
        }
    )


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    log_level = getattr(logging, str(args.log_level).upper(), logging.INFO)
    logging.basicConfig(level=log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = build_config(args)
        app = TrainerApplication(config)
        app.run()
    except (ConfigError, LinkError, AudioBackendUnavailableError) as exc:
        LOGGER.error("%s", exc)
        sys.exit(1)


__all__ = ["TrainerApplication", "build_config", "main"]
