"""A lock-guarded owner of one styled text value.

Several buffers may hold the same ``Document``; holding a reference shares
state.  Every method takes the document lock for the duration of a single
edit or read and never calls out while holding it.
"""

from __future__ import annotations

import threading

from ablet.atext import AText, TextLike
from ablet.geometry import Range

__all__ = ["Document", "count_lines"]


def count_lines(text: str) -> int:
    """Number of lines, not counting an empty line after a final newline."""
    if not text:
        return 0
    return text.count("\n") + (0 if text.endswith("\n") else 1)


class Document:
    def __init__(self, content: TextLike | None = None) -> None:
        self._lock = threading.Lock()
        self._content = AText() if content is None else AText.coerce(content)

    def __len__(self) -> int:
        with self._lock:
            return len(self._content)

    def __repr__(self) -> str:
        return f"Document({self.text()!r})"

    # -- reads -------------------------------------------------------------

    def text(self) -> str:
        with self._lock:
            return self._content.text

    def snapshot(self) -> AText:
        """A copy of the current content, detached from the document."""
        with self._lock:
            return self._content.copy()

    def line_count(self) -> int:
        with self._lock:
            return count_lines(self._content.text)

    # -- edits -------------------------------------------------------------

    def append(self, text: TextLike) -> None:
        with self._lock:
            self._content.append(text)

    def add_line(self, text: TextLike) -> None:
        """Append *text* as a newline-terminated record."""
        with self._lock:
            self._content.append(text)
            self._content.push_char("\n")

    def replace_range(self, range_: Range, new_text: TextLike) -> None:
        with self._lock:
            self._content.replace_range(range_, new_text)

    def replace(self, content: TextLike) -> AText:
        """Swap in *content*, returning the previous value."""
        new_content = AText.coerce(content)
        with self._lock:
            old, self._content = self._content, new_content
        return old

    def take(self) -> AText:
        """Extract the content, leaving the document empty."""
        return self.replace(AText())
