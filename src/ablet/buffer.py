"""Buffers: a document reference plus the view state used to render it.

Rendering combines three sources per visible line: the document's style runs,
the view's selections (via the ``Range`` overlap algebra) and the cursor.
It works on detached copies of the view and the document content, so no
lock is held while drawing.

Locking: a ``Buffer`` guards its ``View`` with its own lock and its
``Document`` guards its content.  Edits read the cursor, edit the document
and then move the cursor under the buffer lock; the two locks are never held
together.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from typing import Sequence

from ablet.atext import AText, StyledRange, TextLike
from ablet.document import Document
from ablet.geometry import Overlap, Range, Rect, Size
from ablet.style import CURSOR_STYLE, highlighted
from ablet.terminal import Surface

__all__ = [
    "Selection",
    "BufferPosition",
    "View",
    "Buffer",
    "get_line_ranges",
    "line_selections",
    "resolve_selections",
    "render_view",
]


@dataclass(frozen=True)
class Selection:
    """A highlighted range of document text, independent of the cursor."""

    range: Range

    @classmethod
    def of(cls, start: int, end: int) -> Selection:
        return cls(Range(start, end))


@dataclass(frozen=True, order=True)
class BufferPosition:
    """A row/column position inside a document's text."""

    row: int
    col: int

    def to_text_pos(self, source: Document | str) -> int:
        """Code-point index of this position.

        Rows past the last line map to the end of the text; columns are
        clamped to their line.
        """
        text = source.text() if isinstance(source, Document) else source
        lines = get_line_ranges(text)
        if self.row >= len(lines):
            return len(text)
        line = lines[self.row]
        return min(line.start + max(self.col, 0), line.end)


@dataclass
class View:
    """Cursor, selections and scroll position of one buffer.

    ``offset`` is the index of the first visible line, so it always
    coincides with a line start.
    """

    cursor: int = 0
    selections: list[Selection] = field(default_factory=list)
    offset: int = 0
    cursor_visible: bool = False
    last_rendered_size: Size | None = None

    def copy(self) -> View:
        return replace(self, selections=list(self.selections))


# ---------------------------------------------------------------------------
# Rendering algorithm
# ---------------------------------------------------------------------------


def get_line_ranges(text: str) -> list[Range]:
    """Ranges of every line, terminators excluded.

    There is always at least one range; text ending in a newline yields a
    final empty line.
    """
    res: list[Range] = []
    start = 0
    for i, ch in enumerate(text):
        if ch == "\n":
            res.append(Range(start, i))
            start = i + 1
    res.append(Range(start, len(text)))
    return res


def line_selections(selections: Sequence[Range], line: Range) -> list[Range]:
    """The parts of *selections* that fall inside *line*."""
    res = []
    for selection in selections:
        part = selection.intersection(line)
        if part is not None:
            res.append(part)
    return res


def _peel_selections(
    segment: StyledRange, selections: Sequence[Range]
) -> list[StyledRange]:
    # base case: nothing left to overlay
    if not selections:
        return [segment]

    current, rest = selections[0], selections[1:]
    overlap = segment.range.overlap_with(current)

    if overlap.kind is Overlap.NONE:
        return _peel_selections(segment, rest)
    if overlap.kind is Overlap.COMPLETE:
        # selections don't overlap, so no other one can touch this segment
        return [StyledRange(segment.range, highlighted(segment.style))]

    fragments = [StyledRange(overlap.foreign, highlighted(segment.style))]
    for remainder in (overlap.old_l, overlap.old_r):
        if remainder is not None:
            fragments.extend(_peel_selections(segment.with_range(remainder), rest))
    return fragments


def resolve_selections(
    segment: StyledRange, selections: Sequence[Range]
) -> list[StyledRange]:
    """Split *segment* into plain and highlighted fragments, ordered by start."""
    fragments = _peel_selections(segment, selections)
    fragments.sort(key=lambda f: f.range.start)
    return fragments


def _print_fragment(
    surface: Surface, text: str, fragment: StyledRange, view: View
) -> None:
    rng = fragment.range
    if not (view.cursor_visible and rng.contains(view.cursor)):
        surface.print_styled(text[rng.as_slice()], fragment.style)
        return

    pre_cursor, _ = rng.split_at(view.cursor)
    if pre_cursor is not None:
        surface.print_styled(text[pre_cursor.as_slice()], fragment.style)
    surface.print_styled(text[view.cursor], CURSOR_STYLE)
    post_cursor = rng.with_start(view.cursor + 1)
    if not post_cursor.is_empty:
        surface.print_styled(text[post_cursor.as_slice()], fragment.style)


def render_view(view: View, content: AText, rect: Rect, surface: Surface) -> None:
    """Draw *content* as seen through *view* into *rect*.

    A cursor on a line end is drawn as a blank cell after the line only when
    the line is fully visible and shorter than the pane; a line that exactly
    fills the pane width shows no end-of-line cursor.
    """
    text = content.text
    selections = [s.range for s in view.selections]
    visible = get_line_ranges(text)[view.offset:view.offset + rect.height]

    for i, line in enumerate(visible):
        clipped = line.shortened_to(rect.width)
        surface.move_cursor(rect.row + i, rect.col)

        selected = line_selections(selections, clipped)
        for segment in content.get_styled_segments(clipped):
            for fragment in resolve_selections(segment, selected):
                _print_fragment(surface, text, fragment, view)

        # a cursor on the line terminator (or at the end of the text) is
        # drawn as one blank cell after the line
        if (
            view.cursor_visible
            and view.cursor == line.end
            and clipped.end == line.end
            and len(clipped) < rect.width
        ):
            surface.print_styled(" ", CURSOR_STYLE)


# ---------------------------------------------------------------------------
# Buffer
# ---------------------------------------------------------------------------


class Buffer:
    """A document reference plus a view, guarded by the buffer's own lock.

    Several buffers may reference the same document, e.g. two panes
    mirroring one log.
    """

    def __init__(self, document: Document | None = None, view: View | None = None) -> None:
        self._lock = threading.Lock()
        self.document: Document = document if document is not None else Document()
        self._view: View = view if view is not None else View()

    @classmethod
    def from_text(cls, text: TextLike) -> Buffer:
        return cls(Document(text))

    def __repr__(self) -> str:
        return f"Buffer(document={self.document!r}, cursor={self.cursor})"

    # -- view accessors ----------------------------------------------------

    @property
    def view(self) -> View:
        """A copy of the current view state."""
        with self._lock:
            return self._view.copy()

    @property
    def cursor(self) -> int:
        with self._lock:
            return self._view.cursor

    @property
    def selections(self) -> list[Selection]:
        with self._lock:
            return list(self._view.selections)

    @property
    def scroll_offset(self) -> int:
        with self._lock:
            return self._view.offset

    def set_cursor_visible(self, visible: bool) -> None:
        with self._lock:
            self._view.cursor_visible = visible

    def set_scroll_offset(self, line: int) -> None:
        if line < 0:
            raise ValueError(f"scroll offset must be a line index, got {line}")
        with self._lock:
            self._view.offset = line

    def add_selection(self, selection: Selection | Range) -> None:
        """Add a selection; it must not overlap an existing one."""
        if isinstance(selection, Range):
            selection = Selection(selection)
        with self._lock:
            for existing in self._view.selections:
                if existing.range.intersection(selection.range) is not None:
                    raise ValueError(
                        f"selection {selection.range} overlaps {existing.range}"
                    )
            self._view.selections.append(selection)

    def clear_selections(self) -> None:
        with self._lock:
            self._view.selections.clear()

    # -- rendering ---------------------------------------------------------

    def render_at(self, rect: Rect, surface: Surface) -> None:
        with self._lock:
            view = self._view.copy()
            self._view.last_rendered_size = rect.size
        render_view(view, self.document.snapshot(), rect, surface)

    def scroll_down(self) -> None:
        """Scroll so that the last screenful of lines is visible."""
        line_count = self.document.line_count()
        with self._lock:
            size = self._view.last_rendered_size
            if size is not None:
                self._view.offset = max(0, line_count - size.height)

    # -- cursor ------------------------------------------------------------

    def set_cursor(self, index: int) -> None:
        length = len(self.document)
        with self._lock:
            self._view.cursor = max(0, min(index, length))

    def move_cursor_by(self, delta: int) -> None:
        length = len(self.document)
        with self._lock:
            self._view.cursor = max(0, min(self._view.cursor + delta, length))

    def move_cursor_to(self, position: BufferPosition) -> None:
        self.set_cursor(position.to_text_pos(self.document))

    # -- edits -------------------------------------------------------------

    def _clamped_cursor(self) -> int:
        # another buffer on the same document may have shortened it
        return min(self.cursor, len(self.document))

    def insert_char_at_cursor(self, char: str) -> None:
        self.insert_text_at_cursor(char)

    def insert_text_at_cursor(self, text: TextLike) -> None:
        atext = AText.coerce(text)
        pos = self._clamped_cursor()
        self.document.replace_range(Range(pos, pos), atext)
        with self._lock:
            self._view.cursor = pos + len(atext)

    def delete_char_before_cursor(self) -> None:
        pos = self._clamped_cursor()
        if pos == 0:
            with self._lock:
                self._view.cursor = 0
            return
        self.document.replace_range(Range(pos - 1, pos), "")
        with self._lock:
            self._view.cursor = pos - 1

    def add_line(self, text: TextLike) -> None:
        """Append a line to the document and tail it."""
        self.document.add_line(text)
        self.scroll_down()

    def take_text(self) -> AText:
        """Empty the document, reset the cursor and return the old content."""
        old = self.document.take()
        with self._lock:
            self._view.cursor = 0
            self._view.offset = 0
            self._view.selections.clear()
        return old
