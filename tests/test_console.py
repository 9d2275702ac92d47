# tests/test_console.py

from __future__ import annotations

import io

import pytest

from assignment_tracker.connectors.console_connector import ConsolePresenter, run_console_loop


def _feed(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> None:
    it = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


def test_console_runs_commands_and_rerenders(state, monkeypatch, capsys) -> None:
    _feed(monkeypatch, ["add 2026-10-19 high Essay", "", "/status", "/bogus", "/exit", "/list"])
    out = io.StringIO()

    run_console_loop(state, ConsolePresenter(out))

    printed = capsys.readouterr().out
    assert "Assignment added." in printed
    assert "Unknown command: /bogus" in printed
    assert "Today: 1" in printed
    # initial empty board, then the board after /add; /exit stops before /list
    boards = out.getvalue()
    assert boards.count("Board (2026-10-19)") == 2
    assert "Essay" in boards
    assert len(state.tasks) == 1


def test_console_survives_handler_crash(state, monkeypatch, capsys) -> None:
    from assignment_tracker.cli import commands

    def boom(state, args):
        raise RuntimeError("boom")

    monkeypatch.setitem(commands.registry._handlers, "boom", boom)
    _feed(monkeypatch, ["/boom"])

    run_console_loop(state, ConsolePresenter(io.StringIO()))

    assert "Internal error while handling a command." in capsys.readouterr().out
