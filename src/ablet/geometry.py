"""Cell geometry: positions, sizes, rectangles and half-open ranges.

All values are immutable and hashable so that they can key mappings (the
layout engine maps ``Rect`` to buffers).  ``Range`` carries the interval
algebra used when overlaying selections on styled text.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace

__all__ = [
    "Position",
    "Size",
    "Rect",
    "Range",
    "Overlap",
    "OverlapResult",
    "rect",
]


# ---------------------------------------------------------------------------
# Grid coordinates
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class Position:
    """A cell position, ``row`` first."""

    row: int = 0
    col: int = 0


@dataclass(frozen=True, order=True)
class Size:
    """A cell extent: ``width`` columns by ``height`` rows."""

    width: int = 0
    height: int = 0

    def with_width(self, width: int) -> Size:
        return replace(self, width=width)

    def with_height(self, height: int) -> Size:
        return replace(self, height=height)


@dataclass(frozen=True, order=True)
class Rect:
    pos: Position
    size: Size

    @property
    def row(self) -> int:
        return self.pos.row

    @property
    def col(self) -> int:
        return self.pos.col

    @property
    def width(self) -> int:
        return self.size.width

    @property
    def height(self) -> int:
        return self.size.height

    def cells(self) -> set[Position]:
        """Every cell covered by the rectangle."""
        return {
            Position(r, c)
            for r in range(self.row, self.row + self.height)
            for c in range(self.col, self.col + self.width)
        }


def rect(row: int, col: int, width: int, height: int) -> Rect:
    """Shorthand constructor: ``rect(row, col, width, height)``."""
    return Rect(Position(row, col), Size(width, height))


# ---------------------------------------------------------------------------
# Overlap classification
# ---------------------------------------------------------------------------


class Overlap(enum.Enum):
    """How a foreign range covers a range.

    ``LEFT``: the foreign range covers a prefix, a suffix remains.
    ``RIGHT``: the foreign range covers a suffix, a prefix remains.
    ``INNER``: the foreign range sits strictly inside, both ends remain.
    """

    NONE = "none"
    COMPLETE = "complete"
    LEFT = "left"
    RIGHT = "right"
    INNER = "inner"


@dataclass(frozen=True)
class OverlapResult:
    """Outcome of :meth:`Range.overlap_with`.

    ``foreign`` is the covered part (clipped to the range).  ``old_l`` and
    ``old_r`` are the uncovered parts left and right of it, when present.
    """

    kind: Overlap
    foreign: Range | None = None
    old_l: Range | None = None
    old_r: Range | None = None


# ---------------------------------------------------------------------------
# Range
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class Range:
    """Half-open interval ``[start, end)``."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"range start {self.start} is after end {self.end}")

    def __len__(self) -> int:
        return self.end - self.start

    def __iter__(self):
        return iter(range(self.start, self.end))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def as_slice(self) -> slice:
        return slice(self.start, self.end)

    def contains(self, index: int) -> bool:
        return self.start <= index < self.end

    def shortened_to(self, width: int) -> Range:
        """Keep ``start``, cut the range down to at most *width* units."""
        return Range(self.start, min(self.end, self.start + max(width, 0)))

    def with_start(self, start: int) -> Range:
        return Range(start, self.end)

    def with_end(self, end: int) -> Range:
        return Range(self.start, end)

    def split_at(self, index: int) -> tuple[Range | None, Range | None]:
        """Split at the absolute coordinate *index*.

        At or before ``start`` the whole range is returned on the right, at
        or after ``end`` it is returned on the left.
        """
        if index <= self.start:
            return None, self
        if index >= self.end:
            return self, None
        return Range(self.start, index), Range(index, self.end)

    def intersection(self, other: Range) -> Range | None:
        """The common part of both ranges, or ``None`` when it is empty."""
        start = max(self.start, other.start)
        end = min(self.end, other.end)
        if start >= end:
            return None
        return Range(start, end)

    def overlap_with(self, foreign: Range) -> OverlapResult:
        """Classify how *foreign* covers this range."""
        covered = self.intersection(foreign)
        if covered is None:
            return OverlapResult(Overlap.NONE)

        if covered == self:
            return OverlapResult(Overlap.COMPLETE, foreign=covered)
        if covered.start == self.start:
            return OverlapResult(
                Overlap.LEFT,
                foreign=covered,
                old_r=Range(covered.end, self.end),
            )
        if covered.end == self.end:
            return OverlapResult(
                Overlap.RIGHT,
                foreign=covered,
                old_l=Range(self.start, covered.start),
            )
        return OverlapResult(
            Overlap.INNER,
            foreign=covered,
            old_l=Range(self.start, covered.start),
            old_r=Range(covered.end, self.end),
        )
