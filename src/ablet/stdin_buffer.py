"""Reassembly of raw stdin chunks into complete input sequences.

Reads from a raw-mode terminal can split an escape sequence across chunks
(``ESC`` in one read, ``[A`` in the next).  ``StdinBuffer`` holds partial
sequences back until they complete, or until a short timeout says the lone
``ESC`` really was the escape key.  Bracketed paste content is collected
separately and emitted in one piece.
"""

from __future__ import annotations

import asyncio
import re
from typing import Callable, Literal

__all__ = [
    "ESC",
    "BRACKETED_PASTE_START",
    "BRACKETED_PASTE_END",
    "StdinBuffer",
    "classify_sequence",
    "extract_complete_sequences",
]

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"

SequenceStatus = Literal["complete", "incomplete", "not-escape"]

_SGR_MOUSE_RE = re.compile(r"^<\d+;\d+;\d+[Mm]$")

# introducer -> terminators of string-type sequences
_STRING_TERMINATORS: dict[str, tuple[str, ...]] = {
    "]": (f"{ESC}\\", "\x07"),  # OSC
    "P": (f"{ESC}\\",),  # DCS
    "_": (f"{ESC}\\",),  # APC
}


def _classify_csi(data: str) -> SequenceStatus:
    if len(data) < 3:
        return "incomplete"
    payload = data[2:]
    if not 0x40 <= ord(payload[-1]) <= 0x7E:
        return "incomplete"
    if payload.startswith("<"):
        # SGR mouse reports end in M/m but so can their partial prefixes
        return "complete" if _SGR_MOUSE_RE.match(payload) else "incomplete"
    return "complete"


def classify_sequence(data: str) -> SequenceStatus:
    """Tell whether *data* is a complete escape sequence."""
    if not data.startswith(ESC):
        return "not-escape"
    if len(data) == 1:
        return "incomplete"

    introducer = data[1]
    if introducer == "[":
        if data.startswith(f"{ESC}[M"):
            # legacy X10 mouse: ESC [ M plus three bytes
            return "complete" if len(data) >= 6 else "incomplete"
        return _classify_csi(data)
    if introducer in _STRING_TERMINATORS:
        if data.endswith(_STRING_TERMINATORS[introducer]):
            return "complete"
        return "incomplete"
    if introducer == "O":
        # SS3: ESC O plus one final character
        return "complete" if len(data) >= 3 else "incomplete"
    # meta key: ESC plus a character
    return "complete"


def extract_complete_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete sequences and an incomplete remainder."""
    sequences: list[str] = []
    pos = 0
    while pos < len(buffer):
        if buffer[pos] != ESC:
            sequences.append(buffer[pos])
            pos += 1
            continue

        end = pos + 1
        while end <= len(buffer):
            if classify_sequence(buffer[pos:end]) != "incomplete":
                break
            end += 1
        else:
            return sequences, buffer[pos:]
        sequences.append(buffer[pos:end])
        pos = end

    return sequences, ""


class StdinBuffer:
    """Buffers stdin input and emits complete sequences and pastes."""

    def __init__(self, *, timeout: float = 0.01) -> None:
        self._buffer: str = ""
        self._timeout: float = timeout
        self._timeout_handle: asyncio.TimerHandle | None = None
        self._paste_buffer: str | None = None

        self._on_data: Callable[[str], None] | None = None
        self._on_paste: Callable[[str], None] | None = None

    def on_data(self, callback: Callable[[str], None]) -> None:
        self._on_data = callback

    def on_paste(self, callback: Callable[[str], None]) -> None:
        self._on_paste = callback

    @property
    def in_paste(self) -> bool:
        return self._paste_buffer is not None

    def get_buffer(self) -> str:
        return self._buffer

    def _emit_data(self, data: str) -> None:
        if self._on_data:
            self._on_data(data)

    def _emit_paste(self, data: str) -> None:
        if self._on_paste:
            self._on_paste(data)

    def _cancel_timeout(self) -> None:
        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None

    def process(self, data: str) -> None:
        """Feed a chunk of input."""
        self._cancel_timeout()

        if self._paste_buffer is not None:
            self._paste_buffer += data
            self._finish_paste()
            return

        self._buffer += data
        start = self._buffer.find(BRACKETED_PASTE_START)
        if start != -1:
            before = self._buffer[:start]
            self._paste_buffer = self._buffer[start + len(BRACKETED_PASTE_START):]
            self._buffer = ""
            for sequence in extract_complete_sequences(before)[0]:
                self._emit_data(sequence)
            self._finish_paste()
            return

        sequences, self._buffer = extract_complete_sequences(self._buffer)
        for sequence in sequences:
            self._emit_data(sequence)

        if self._buffer:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                # No event loop -- nothing can complete the sequence later
                for sequence in self.flush():
                    self._emit_data(sequence)
                return
            self._timeout_handle = loop.call_later(self._timeout, self._flush_timeout)

    def _finish_paste(self) -> None:
        assert self._paste_buffer is not None
        end = self._paste_buffer.find(BRACKETED_PASTE_END)
        if end == -1:
            return
        content = self._paste_buffer[:end]
        remaining = self._paste_buffer[end + len(BRACKETED_PASTE_END):]
        self._paste_buffer = None
        self._emit_paste(content)
        if remaining:
            self.process(remaining)

    def _flush_timeout(self) -> None:
        self._timeout_handle = None
        for sequence in self.flush():
            self._emit_data(sequence)

    def flush(self) -> list[str]:
        """Give up on the pending partial sequence and return it as-is."""
        self._cancel_timeout()
        if not self._buffer:
            return []
        sequences = [self._buffer]
        self._buffer = ""
        return sequences

    def clear(self) -> None:
        self._cancel_timeout()
        self._buffer = ""
        self._paste_buffer = None

    def destroy(self) -> None:
        self.clear()
