"""Event handlers used by :meth:`ablet.ablet.Ablet.edit_prompt`.

A handler inspects one event and the prompt buffer, edits the buffer as it
sees fit, and returns ``None`` to keep going or a completion value to end
the prompt.
"""

from __future__ import annotations

import enum
from typing import Protocol, TypeVar

from ablet.buffer import Buffer
from ablet.events import Event, KeyEvent, PasteEvent

__all__ = ["EventHandler", "LineResult", "SimpleLineHandler"]

T_co = TypeVar("T_co", covariant=True)


class EventHandler(Protocol[T_co]):
    def handle(self, event: Event, buffer: Buffer) -> T_co | None: ...


class LineResult(enum.Enum):
    LINE_DONE = "line_done"
    ABORT = "abort"


class SimpleLineHandler:
    """Single-line editing: type, paste, move, backspace, Enter, Ctrl+C."""

    def handle(self, event: Event, buffer: Buffer) -> LineResult | None:
        if isinstance(event, PasteEvent):
            buffer.insert_text_at_cursor(event.text)
            return None
        if not isinstance(event, KeyEvent):
            return None

        if event.ctrl and event.code == "c":
            return LineResult.ABORT
        if event.code == "enter":
            return LineResult.LINE_DONE
        if event.code == "backspace":
            buffer.delete_char_before_cursor()
        elif event.code == "left":
            buffer.move_cursor_by(-1)
        elif event.code == "right":
            buffer.move_cursor_by(1)
        elif event.char is not None:
            buffer.insert_char_at_cursor(event.char)
        return None
