"""Tests for ablet.stdin_buffer.StdinBuffer."""

from __future__ import annotations

import asyncio

import pytest

from ablet.stdin_buffer import (
    BRACKETED_PASTE_END,
    BRACKETED_PASTE_START,
    ESC,
    StdinBuffer,
    classify_sequence,
    extract_complete_sequences,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class Collector:
    """Collects emitted data/paste events for assertions."""

    def __init__(self) -> None:
        self.data: list[str] = []
        self.pastes: list[str] = []

    def on_data(self, d: str) -> None:
        self.data.append(d)

    def on_paste(self, d: str) -> None:
        self.pastes.append(d)


def make_buffer(timeout: float = 0.01) -> tuple[StdinBuffer, Collector]:
    buf = StdinBuffer(timeout=timeout)
    col = Collector()
    buf.on_data(col.on_data)
    buf.on_paste(col.on_paste)
    return buf, col


# ---------------------------------------------------------------------------
# Sequence classification
# ---------------------------------------------------------------------------


class TestClassifySequence:
    @pytest.mark.parametrize(
        "data",
        [
            f"{ESC}[A",
            f"{ESC}[1;5C",
            f"{ESC}[3~",
            f"{ESC}OP",
            f"{ESC}a",
            f"{ESC}[<0;10;5M",
            f"{ESC}[M abc"[:6],
            f"{ESC}]0;title\x07",
            f"{ESC}Pdata{ESC}\\",
        ],
    )
    def test_complete(self, data: str) -> None:
        assert classify_sequence(data) == "complete"

    @pytest.mark.parametrize(
        "data",
        [
            ESC,
            f"{ESC}[",
            f"{ESC}[1;",
            f"{ESC}O",
            f"{ESC}[<0;10",
            f"{ESC}]0;title",
            f"{ESC}[M a",
        ],
    )
    def test_incomplete(self, data: str) -> None:
        assert classify_sequence(data) == "incomplete"

    def test_not_escape(self) -> None:
        assert classify_sequence("a") == "not-escape"


class TestExtractCompleteSequences:
    def test_plain_chars(self) -> None:
        assert extract_complete_sequences("abc") == (["a", "b", "c"], "")

    def test_mixed(self) -> None:
        assert extract_complete_sequences(f"a{ESC}[Ab") == (["a", f"{ESC}[A", "b"], "")

    def test_remainder(self) -> None:
        assert extract_complete_sequences(f"a{ESC}[1;") == (["a"], f"{ESC}[1;")


# ---------------------------------------------------------------------------
# Processing
# ---------------------------------------------------------------------------


class TestProcess:
    def test_initial_state(self) -> None:
        buf = StdinBuffer()
        assert buf.get_buffer() == ""
        assert not buf.in_paste

    def test_regular_chars(self) -> None:
        buf, col = make_buffer()
        buf.process("ab")
        assert col.data == ["a", "b"]

    def test_split_sequence_without_loop_flushes(self) -> None:
        buf, col = make_buffer()
        buf.process(f"{ESC}[")
        assert col.data == [f"{ESC}["]
        assert buf.get_buffer() == ""

    def test_bracketed_paste(self) -> None:
        buf, col = make_buffer()
        buf.process(f"x{BRACKETED_PASTE_START}hello\nworld{BRACKETED_PASTE_END}y")
        assert col.data == ["x", "y"]
        assert col.pastes == ["hello\nworld"]
        assert not buf.in_paste

    def test_paste_across_chunks(self) -> None:
        buf, col = make_buffer()
        buf.process(f"{BRACKETED_PASTE_START}part one ")
        assert buf.in_paste
        buf.process(f"part two{BRACKETED_PASTE_END}")
        assert col.pastes == ["part one part two"]
        assert not buf.in_paste

    def test_clear(self) -> None:
        buf, col = make_buffer()
        buf.process(BRACKETED_PASTE_START)
        buf.clear()
        assert not buf.in_paste
        assert buf.flush() == []


class TestAsyncProcess:
    @pytest.mark.asyncio
    async def test_split_sequence_completes(self) -> None:
        buf, col = make_buffer()
        buf.process(ESC)
        assert col.data == []
        buf.process("[A")
        assert col.data == [f"{ESC}[A"]

    @pytest.mark.asyncio
    async def test_lone_escape_times_out(self) -> None:
        buf, col = make_buffer(timeout=0.01)
        buf.process(ESC)
        assert col.data == []
        await asyncio.sleep(0.05)
        assert col.data == [ESC]

    @pytest.mark.asyncio
    async def test_destroy_cancels_timeout(self) -> None:
        buf, col = make_buffer(timeout=0.01)
        buf.process(ESC)
        buf.destroy()
        await asyncio.sleep(0.05)
        assert col.data == []
