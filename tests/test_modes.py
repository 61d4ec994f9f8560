import itertools

import pytest

from morse_link.display import Icon
from morse_link.modes import TRANSITIONS, Button, Mode, next_mode
from morse_link.quiz import QuestionKind

T1 = Mode.TEXT_TO_MORSE
Q1 = Mode.QUIZ_LETTER
T2 = Mode.MORSE_TO_TEXT
Q2 = Mode.QUIZ_MORSE


@pytest.mark.parametrize(
    ("mode", "button", "expected"),
    [
        (T1, Button.A, Q1),
        (T1, Button.B, T2),
        (Q1, Button.A, T1),
        (Q1, Button.B, Q2),
        (T2, Button.A, Q2),
        (T2, Button.B, T1),
        (Q2, Button.A, T2),
        (Q2, Button.B, Q1),
    ],
)
def test_transition_table(mode: Mode, button: Button, expected: Mode) -> None:
    assert next_mode(mode, button) is expected


def test_table_is_total() -> None:
    assert set(TRANSITIONS) == set(itertools.product(Mode, Button))


@pytest.mark.parametrize("mode", list(Mode))
@pytest.mark.parametrize("button", list(Button))
def test_same_button_twice_returns(mode: Mode, button: Button) -> None:
    assert next_mode(next_mode(mode, button), button) is mode


def test_any_button_sequence_stays_within_modes() -> None:
    for start in Mode:
        for presses in itertools.product(Button, repeat=6):
            mode = start
            for button in presses:
                mode = next_mode(mode, button)
                assert mode in Mode


def test_labels() -> None:
    assert [mode.label for mode in Mode] == ["T1", "Q1", "T2", "Q2"]
    assert [mode.is_quiz for mode in Mode] == [False, True, False, True]


def test_controller_cycles_back_to_start(rig) -> None:
    visited = [rig.controller.press(button) for button in (Button.A, Button.B, Button.A, Button.B)]

    assert visited == [Q1, Q2, T2, T1]
    assert rig.controller.mode is T1


def test_entering_letter_quiz_shows_label_then_starts_question(make_rig) -> None:
    rig = make_rig("E")

    rig.controller.press(Button.A)

    assert rig.display.calls[:3] == [("text", "Q1"), ("clear",), ("text", "?")]
    assert rig.clock.sleeps[0] == 0.5
    assert rig.quiz.pending.kind is QuestionKind.LETTER
    assert rig.tone.calls == [(1000, 0.2)]
    assert rig.display.calls[-1] == ("icon", Icon.DIAMOND)


def test_entering_morse_quiz_starts_morse_question(make_rig) -> None:
    rig = make_rig("M", initial=T2)

    rig.controller.press(Button.A)

    assert rig.controller.mode is Q2
    assert rig.quiz.pending.kind is QuestionKind.MORSE
    assert rig.display.texts() == ["Q2", "M"]


def test_entering_morse_quiz_from_letter_quiz(make_rig) -> None:
    rig = make_rig("K", initial=Q1)

    rig.controller.press(Button.B)

    assert rig.controller.mode is Q2
    assert rig.quiz.pending.kind is QuestionKind.MORSE
    assert rig.quiz.pending.letter == "K"
    assert rig.display.texts() == ["Q2", "K"]
    assert rig.tone.calls == []
    assert rig.display.calls[-1] == ("icon", Icon.DIAMOND)


def test_entering_letter_quiz_from_morse_quiz(make_rig) -> None:
    rig = make_rig("E", initial=Q2)

    rig.controller.press(Button.B)

    assert rig.controller.mode is Q1
    assert rig.quiz.pending.kind is QuestionKind.LETTER
    assert rig.quiz.pending.letter == "E"
    assert rig.display.texts() == ["Q1", "?"]
    assert rig.tone.calls == [(1000, 0.2)]
    assert rig.display.calls[-1] == ("icon", Icon.DIAMOND)


def test_leaving_a_quiz_starts_nothing(make_rig) -> None:
    rig = make_rig(initial=Q1)

    rig.controller.press(Button.A)

    assert rig.controller.mode is T1
    assert rig.quiz.pending is None
    assert rig.display.calls == [("text", "T1"), ("clear",)]
