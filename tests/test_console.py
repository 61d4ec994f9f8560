import io
import logging

import pytest

from morse_link.console import ConsoleInput, parse_console_line
from morse_link.events import ButtonPressed, ConnectionChanged, EventQueue, LineReceived, Shutdown
from morse_link.modes import Button


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        (":a\n", ButtonPressed(Button.A)),
        (" :B ", ButtonPressed(Button.B)),
        (":q", Shutdown("quit requested")),
        ("hello world\n", LineReceived("hello world")),
        (".- -\r\n", LineReceived(".- -")),
        ("\n", None),
    ],
)
def test_parse_console_line(line: str, expected) -> None:
    assert parse_console_line(line, forward_lines=True) == expected


def test_parse_rejects_unknown_command() -> None:
    with pytest.raises(ValueError):
        parse_console_line(":z", forward_lines=True)


def test_plain_text_needs_forwarding() -> None:
    with pytest.raises(ValueError):
        parse_console_line("sos", forward_lines=False)


def test_console_input_posts_events_until_end_of_input() -> None:
    queue = EventQueue()
    stream = io.StringIO(":a\nsos\n:x\n:b\n")
    console = ConsoleInput(queue, stream=stream, forward_lines=True)

    console.start()
    console._thread.join(2.0)

    events = []
    while (event := queue.get(timeout=0)) is not None:
        events.append(event)
    assert events == [
        ConnectionChanged(connected=True),
        ButtonPressed(Button.A),
        LineReceived("sos"),
        ButtonPressed(Button.B),
        Shutdown("end of console input"),
    ]


def test_console_input_stops_at_quit() -> None:
    queue = EventQueue()
    console = ConsoleInput(queue, stream=io.StringIO(":q\n:a\n"))

    console.start()
    console._thread.join(2.0)

    assert queue.get(timeout=0) == Shutdown("quit requested")
    assert queue.get(timeout=0) is None


def test_end_of_input_is_quiet_when_the_serial_link_is_the_input(caplog) -> None:
    queue = EventQueue()
    console = ConsoleInput(queue, stream=io.StringIO(""), forward_lines=False)

    with caplog.at_level(logging.DEBUG, logger="morse_link.console"):
        console.start()
        console._thread.join(2.0)

    assert not console._thread.is_alive()
    assert len(queue) == 0
    assert "Console input closed" in caplog.text
