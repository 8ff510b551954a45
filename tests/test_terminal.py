"""Tests for the output side of ablet.terminal.ProcessTerminal."""

from __future__ import annotations

from pathlib import Path

import pytest

from ablet.style import SGR_RESET, Color, Style
from ablet.terminal import ProcessTerminal


class TestProcessTerminalOutput:
    def test_output_is_queued_until_flush(self, capsys: pytest.CaptureFixture[str]) -> None:
        term = ProcessTerminal()
        term.move_cursor(0, 0)
        term.print_styled("hi", Style())
        assert capsys.readouterr().out == ""
        term.flush()
        assert capsys.readouterr().out == "\x1b[1;1Hhi"

    def test_move_cursor_is_one_based(self, capsys: pytest.CaptureFixture[str]) -> None:
        term = ProcessTerminal()
        term.move_cursor(4, 9)
        term.flush()
        assert capsys.readouterr().out == "\x1b[5;10H"

    def test_styled_text(self, capsys: pytest.CaptureFixture[str]) -> None:
        term = ProcessTerminal()
        term.print_styled("ok", Style(fg=Color.GREEN))
        term.flush()
        assert capsys.readouterr().out == f"\x1b[32mok{SGR_RESET}"

    def test_clear(self, capsys: pytest.CaptureFixture[str]) -> None:
        term = ProcessTerminal()
        term.clear()
        term.flush()
        assert capsys.readouterr().out == "\x1b[2J\x1b[H"

    def test_flush_empties_queue(self, capsys: pytest.CaptureFixture[str]) -> None:
        term = ProcessTerminal()
        term.print_styled("once", Style())
        term.flush()
        term.flush()
        assert capsys.readouterr().out == "once"

    def test_write_log(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        log = tmp_path / "frames.log"
        term = ProcessTerminal(write_log_path=str(log))
        term.print_styled("frame 1", Style())
        term.flush()
        term.print_styled("frame 2", Style())
        term.flush()
        assert log.read_text() == "frame 1frame 2"

    def test_screen_modes(self, capsys: pytest.CaptureFixture[str]) -> None:
        term = ProcessTerminal()
        term.enter_alternate_screen()
        term.hide_cursor()
        term.show_cursor()
        term.leave_alternate_screen()
        assert capsys.readouterr().out == "\x1b[?1049h\x1b[?25l\x1b[?25h\x1b[?1049l"
