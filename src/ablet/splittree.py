"""Layout engine: partition a rectangle into a tree of panes.

A ``Split`` lists sized children along one axis; a child is either a leaf
(a buffer to render) or a nested split laid out along the perpendicular
axis.  ``compute_rects`` is a pure function of the tree and the available
area.  It returns ``None`` when some pane would end up smaller than the
minimum size, so that callers can show a "too small" notice instead.

Splits are replaced wholesale; there are no handles to interior nodes.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from ablet.geometry import Position, Rect, Size

if TYPE_CHECKING:
    from ablet.buffer import Buffer

__all__ = [
    "Orientation",
    "Proportion",
    "Fixed",
    "SizeSpec",
    "Leaf",
    "Branch",
    "SplitContent",
    "Split",
    "SplitTree",
    "SplitMap",
    "BorderInfo",
    "BorderMap",
    "MIN_SPLIT_SIZE",
]

logger = logging.getLogger(__name__)

MIN_SPLIT_SIZE = Size(1, 1)


class Orientation(enum.Enum):
    """Axis along which a split arranges its children.

    ``VERTICAL`` stacks children top to bottom with horizontal separators;
    ``HORIZONTAL`` places them side by side with vertical separators.
    """

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"

    def flip(self) -> Orientation:
        if self is Orientation.VERTICAL:
            return Orientation.HORIZONTAL
        return Orientation.VERTICAL


# ---------------------------------------------------------------------------
# Size specs and contents
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Proportion:
    """A share of the space left after fixed children are served."""

    weight: int


@dataclass(frozen=True)
class Fixed:
    """An exact number of cells along the split axis."""

    cells: int


SizeSpec = Union[Proportion, Fixed]


@dataclass(frozen=True)
class Leaf:
    buffer: Buffer


@dataclass(frozen=True)
class Branch:
    split: Split


SplitContent = Union[Leaf, Branch]


# ---------------------------------------------------------------------------
# Border map
# ---------------------------------------------------------------------------


@dataclass
class BorderInfo:
    in_vertical_border: bool = False
    in_horizontal_border: bool = False

    @property
    def is_border(self) -> bool:
        return self.in_vertical_border or self.in_horizontal_border


class BorderMap:
    """A grid, parallel to the laid-out area, flagging separator cells."""

    def __init__(self, size: Size) -> None:
        self._cells = [
            [BorderInfo() for _ in range(size.width)] for _ in range(size.height)
        ]

    @property
    def size(self) -> Size:
        height = len(self._cells)
        width = len(self._cells[0]) if height else 0
        return Size(width, height)

    def __getitem__(self, pos: Position) -> BorderInfo:
        return self._cells[pos.row][pos.col]

    def rows(self) -> list[list[BorderInfo]]:
        return self._cells

    def update(self, inner: BorderMap, pos: Position) -> None:
        """Copy *inner* into this map with its origin at *pos*."""
        for row, cells in enumerate(inner.rows()):
            for col, info in enumerate(cells):
                self._cells[pos.row + row][pos.col + col] = info

    def add_vertical(self, pos: Position, length: int) -> None:
        for i in range(length):
            self._cells[pos.row + i][pos.col].in_vertical_border = True

    def add_horizontal(self, pos: Position, length: int) -> None:
        for i in range(length):
            self._cells[pos.row][pos.col + i].in_horizontal_border = True

    def border_cells(self) -> set[Position]:
        return {
            Position(row, col)
            for row, cells in enumerate(self._cells)
            for col, info in enumerate(cells)
            if info.is_border
        }


@dataclass
class SplitMap:
    """Result of a successful layout.

    ``rects`` maps each leaf's rectangle to its buffer; ``border_map`` is
    sized to the laid-out area.
    """

    rects: dict[Rect, Buffer]
    border_map: BorderMap
    size: Size


# ---------------------------------------------------------------------------
# Split
# ---------------------------------------------------------------------------


@dataclass
class Split:
    sizes: list[SizeSpec]
    content: list[SplitContent] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.content:
            raise ValueError("a split needs at least one child")
        if len(self.sizes) != len(self.content):
            raise ValueError(
                f"{len(self.sizes)} size specs for {len(self.content)} children"
            )
        for spec in self.sizes:
            amount = spec.weight if isinstance(spec, Proportion) else spec.cells
            if amount < 0:
                raise ValueError(f"negative size spec {spec!r}")
        weights = [s.weight for s in self.sizes if isinstance(s, Proportion)]
        if weights and sum(weights) <= 0:
            raise ValueError("proportion weights must sum to more than zero")

    def _extents(self, available: int) -> list[int] | None:
        """Cells allotted to each child along the axis, separators included."""
        extents = [0] * len(self.sizes)
        reserved = 0
        for i, spec in enumerate(self.sizes):
            if isinstance(spec, Fixed):
                extents[i] = spec.cells + (1 if i > 0 else 0)
                reserved += extents[i]

        remaining = available - reserved
        if remaining < 0:
            return None

        proportional = [
            i for i, spec in enumerate(self.sizes) if isinstance(spec, Proportion)
        ]
        total_weight = sum(self.sizes[i].weight for i in proportional)
        for i in proportional:
            extents[i] = remaining * self.sizes[i].weight // total_weight

        leftover = available - sum(extents)
        extents[proportional[-1] if proportional else -1] += leftover
        return extents

    def compute_rects(
        self,
        rect: Rect,
        orientation: Orientation,
        min_size: Size = MIN_SPLIT_SIZE,
    ) -> SplitMap | None:
        vertical = orientation is Orientation.VERTICAL
        extents = self._extents(rect.height if vertical else rect.width)
        if extents is None:
            logger.debug("fixed sizes exceed %s", rect)
            return None

        rects: dict[Rect, Buffer] = {}
        border_map = BorderMap(rect.size)
        offset = 0
        for i, (content, extent) in enumerate(zip(self.content, extents)):
            if vertical:
                pos = Position(offset, 0)
                size = Size(rect.width, extent)
            else:
                pos = Position(0, offset)
                size = Size(extent, rect.height)
            offset += extent

            # every child but the first gives up its first row/col to a separator
            if i > 0 and extent > 0:
                if vertical:
                    border_map.add_horizontal(pos, size.width)
                    pos = Position(pos.row + 1, pos.col)
                    size = size.with_height(size.height - 1)
                else:
                    border_map.add_vertical(pos, size.height)
                    pos = Position(pos.row, pos.col + 1)
                    size = size.with_width(size.width - 1)

            if size.width < min_size.width or size.height < min_size.height:
                logger.debug("child %d of split gets %s, below minimum", i, size)
                return None

            # positions so far are relative to this split's origin
            child_rect = Rect(Position(rect.row + pos.row, rect.col + pos.col), size)
            if isinstance(content, Leaf):
                rects[child_rect] = content.buffer
            else:
                inner = content.split.compute_rects(
                    child_rect, orientation.flip(), min_size
                )
                if inner is None:
                    return None
                border_map.update(inner.border_map, pos)
                rects.update(inner.rects)

        return SplitMap(rects=rects, border_map=border_map, size=rect.size)


@dataclass
class SplitTree:
    """A root split plus the orientation of its top level."""

    root: Split
    orientation: Orientation = Orientation.VERTICAL

    def compute_rects(
        self, size: Size | tuple[int, int], min_size: Size = MIN_SPLIT_SIZE
    ) -> SplitMap | None:
        """Lay the tree out over an area of *size* (``(width, height)``)."""
        if not isinstance(size, Size):
            size = Size(*size)
        return self.root.compute_rects(Rect(Position(0, 0), size), self.orientation, min_size)

    def buffers(self) -> list[Buffer]:
        """Every leaf buffer, in tree order (duplicates kept)."""
        res: list[Buffer] = []
        pending: list[SplitContent] = list(self.root.content)
        while pending:
            content = pending.pop(0)
            if isinstance(content, Leaf):
                res.append(content.buffer)
            else:
                pending[0:0] = content.split.content  # extend at front
        return res
