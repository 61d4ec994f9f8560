import threading

from morse_link.events import (
    ButtonPressed,
    ConnectionChanged,
    EventQueue,
    LineReceived,
    Shutdown,
)
from morse_link.modes import Button


def _drain(queue: EventQueue) -> list:
    events = []
    while True:
        event = queue.get(timeout=0)
        if event is None:
            return events
        events.append(event)


def test_lines_queue_in_order() -> None:
    queue = EventQueue()
    for text in ("one", "two", "three"):
        assert queue.post(LineReceived(text))

    assert _drain(queue) == [LineReceived("one"), LineReceived("two"), LineReceived("three")]


def test_button_presses_coalesce_per_button() -> None:
    queue = EventQueue()

    assert queue.post(ButtonPressed(Button.A))
    assert not queue.post(ButtonPressed(Button.A))
    assert queue.post(ButtonPressed(Button.B))
    assert len(queue) == 2

    assert queue.get(timeout=0) == ButtonPressed(Button.A)
    assert queue.post(ButtonPressed(Button.A))
    assert _drain(queue) == [ButtonPressed(Button.B), ButtonPressed(Button.A)]


def test_newer_connection_change_supersedes_pending_one_in_arrival_order() -> None:
    queue = EventQueue()
    queue.post(ConnectionChanged(connected=True))
    queue.post(LineReceived("hi"))
    queue.post(ConnectionChanged(connected=False))

    assert len(queue) == 2
    assert _drain(queue) == [LineReceived("hi"), ConnectionChanged(connected=False)]


def test_shutdown_is_always_queued() -> None:
    queue = EventQueue()
    queue.post(Shutdown("one"))
    queue.post(Shutdown("two"))

    assert len(queue) == 2


def test_get_times_out_when_empty() -> None:
    assert EventQueue().get(timeout=0.01) is None


def test_get_wakes_for_other_thread() -> None:
    queue = EventQueue()
    producer = threading.Timer(0.05, queue.post, args=(LineReceived("late"),))
    producer.start()
    try:
        assert queue.get(timeout=2.0) == LineReceived("late")
    finally:
        producer.cancel()
