from __future__ import annotations

import pytest

from pigeonfarm.models import Message
from pigeonfarm.notifications.base import ConsolePresentation, NullPresentation
from pigeonfarm.scheduler.dispatch import ImmediateDispatcher, QueueDispatcher
from pigeonfarm.ui.screens import Screen


def test_null_presentation_never_selects() -> None:
    selected: list[int] = []
    message = Message(id=1, text="Hi", buttons=({"title": "OK"},))

    NullPresentation().present(Screen(name="home"), message, selected.append)

    assert selected == []


def test_button_titles_fall_back_to_label() -> None:
    message = Message(id=1, text="Hi", buttons=({"title": "OK"}, {"label": "Later"}, {}))

    assert message.button_titles() == ["OK", "Later", ""]


def test_dispatchers_run_callbacks() -> None:
    calls: list[str] = []
    ImmediateDispatcher().call_soon(lambda: calls.append("now"))
    queued = QueueDispatcher()
    queued.call_soon(lambda: calls.append("later"))

    assert calls == ["now"]
    assert queued.process_pending() == 1
    assert queued.process_pending() == 0
    assert calls == ["now", "later"]


def _console_message() -> Message:
    return Message(id=4, text="Update available", title="News", buttons=({"title": "Later"}, {"title": "Open"}))


@pytest.mark.parametrize(("choice", "expected"), [("2", [1]), (" 1 ", [0]), ("3", []), ("0", []), ("", []), ("x", [])])
def test_console_presentation_selects_valid_choice(choice: str, expected: list[int], capsys) -> None:
    selected: list[int] = []
    prompts: list[str] = []

    def read_choice(prompt: str) -> str:
        prompts.append(prompt)
        return choice

    ConsolePresentation(read_choice=read_choice).present(Screen(name="home"), _console_message(), selected.append)

    assert selected == expected
    assert len(prompts) == 1
    output = capsys.readouterr().out
    assert "News" in output
    assert "Update available" in output
    assert "[2] Open" in output


def test_console_presentation_without_buttons_does_not_prompt(capsys) -> None:
    prompts: list[str] = []
    selected: list[int] = []

    ConsolePresentation(read_choice=lambda prompt: prompts.append(prompt) or "1").present(
        Screen(name="home"), Message(id=5, text="Just so you know"), selected.append
    )

    assert prompts == []
    assert selected == []
    assert capsys.readouterr().out == "Just so you know\n"
