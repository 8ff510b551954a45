"""Declarative construction of split trees.

::

    tree = split_tree("vertical", [
        (2, [
            (1, log_buffer),
            (1, log_buffer),
        ]),
        (Fixed(3), status_buffer),
    ])

Sizes are ``int`` weights (``Proportion``), ``Proportion`` or ``Fixed``.
Contents are buffers (leaves), nested lists of pairs (branches, laid out
along the perpendicular axis) or ready-made ``Split`` objects.
"""

from __future__ import annotations

from typing import Any, Sequence, Tuple, Union

from ablet.splittree import (
    Branch,
    Fixed,
    Leaf,
    Orientation,
    Proportion,
    SizeSpec,
    Split,
    SplitContent,
    SplitTree,
)

__all__ = ["split_tree", "split"]

SizeLike = Union[int, Proportion, Fixed]
PaneDef = Tuple[SizeLike, Any]


def _size_spec(size: SizeLike) -> SizeSpec:
    if isinstance(size, (Proportion, Fixed)):
        return size
    if isinstance(size, bool) or not isinstance(size, int):
        raise TypeError(f"expected an int, Proportion or Fixed, got {size!r}")
    return Proportion(size)


def _content(content: Any) -> SplitContent:
    if isinstance(content, (Leaf, Branch)):
        return content
    if isinstance(content, Split):
        return Branch(content)
    if isinstance(content, (list, tuple)):
        return Branch(split(content))
    return Leaf(content)


def split(children: Sequence[PaneDef]) -> Split:
    """Build one ``Split`` from ``(size, content)`` pairs."""
    sizes: list[SizeSpec] = []
    contents: list[SplitContent] = []
    for size, content in children:
        sizes.append(_size_spec(size))
        contents.append(_content(content))
    return Split(sizes, contents)


def split_tree(
    orientation: Orientation | str, children: Sequence[PaneDef]
) -> SplitTree:
    """Build a ``SplitTree`` whose top level is laid out along *orientation*."""
    if isinstance(orientation, str):
        orientation = Orientation(orientation.lower())
    return SplitTree(split(children), orientation)
