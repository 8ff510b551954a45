"""Attributed text: a string plus a compact per-position style attribution.

``AText`` keeps a deduplicated table of ``Style`` values and one optional
table index per code point.  Splitting prunes and renumbers the table on each
side; appending merges tables by structural equality.  Text is indexed by
code point.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import groupby
from typing import Iterable, Optional, Union

from ablet.geometry import Range
from ablet.style import Style

__all__ = ["AText", "StyledRange", "TextLike", "styled"]


@dataclass(frozen=True)
class StyledRange:
    """A sub-range of text rendered with a single resolved style."""

    range: Range
    style: Style

    def with_range(self, range_: Range) -> StyledRange:
        return StyledRange(range_, self.style)


class AText:
    """Styled text with a deduplicated style table."""

    __slots__ = ("text", "style_map", "styles")

    def __init__(
        self,
        text: str = "",
        style_map: list[int | None] | None = None,
        styles: list[Style] | None = None,
    ) -> None:
        if style_map is None:
            style_map = [None] * len(text)
        styles = list(styles) if styles is not None else []
        if len(style_map) != len(text):
            raise ValueError(
                f"style map has {len(style_map)} entries for {len(text)} characters"
            )
        for index in style_map:
            if index is not None and not 0 <= index < len(styles):
                raise ValueError(f"style index {index} out of range")
        if len(set(styles)) != len(styles):
            raise ValueError("style table has duplicate entries")

        self.text: str = text
        self.style_map: list[int | None] = list(style_map)
        self.styles: list[Style] = styles

    # -- construction ------------------------------------------------------

    @classmethod
    def styled(cls, text: str, style: Style | None) -> AText:
        """Text where every character carries *style*."""
        if style is None or not text:
            return cls(text)
        return cls(text, [0] * len(text), [style])

    @classmethod
    def coerce(cls, value: TextLike) -> AText:
        """Accept ``str``, ``AText`` or a ``(text, style)`` pair.

        An ``AText`` is returned as a copy so that the caller keeps
        ownership of its own value.
        """
        if isinstance(value, AText):
            return value.copy()
        if isinstance(value, str):
            return cls(value)
        if isinstance(value, tuple) and len(value) == 2:
            text, style = value
            return cls.styled(text, style)
        raise TypeError(f"cannot build styled text from {type(value).__name__}")

    @classmethod
    def from_multiple(cls, parts: Iterable[TextLike]) -> AText:
        res = cls()
        for part in parts:
            res.append(part)
        return res

    def copy(self) -> AText:
        return AText(self.text, self.style_map, self.styles)

    # -- basic protocol ----------------------------------------------------

    def __len__(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return (
            f"AText(text={self.text!r}, style_map={self.style_map!r}, "
            f"styles={self.styles!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AText):
            return NotImplemented
        return (
            self.text == other.text
            and self.resolved_styles() == other.resolved_styles()
        )

    __hash__ = None  # mutable

    def __add__(self, other: TextLike) -> AText:
        res = self.copy()
        res.append(other)
        return res

    def __radd__(self, other: TextLike) -> AText:
        res = AText.coerce(other)
        res.append(self)
        return res

    def __iadd__(self, other: TextLike) -> AText:
        self.append(other)
        return self

    def plain(self) -> str:
        return self.text

    def style_at(self, index: int) -> Style | None:
        entry = self.style_map[index]
        return None if entry is None else self.styles[entry]

    def resolved_styles(self) -> list[Style | None]:
        """The style of every position, independent of table layout."""
        return [None if i is None else self.styles[i] for i in self.style_map]

    # -- mutation ----------------------------------------------------------

    def _style_index(self, style: Style) -> int:
        for i, existing in enumerate(self.styles):
            if existing == style:
                return i
        self.styles.append(style)
        return len(self.styles) - 1

    def append(self, other: TextLike) -> None:
        """Concatenate *other*, merging its styles into this table."""
        other = other if isinstance(other, AText) else AText.coerce(other)
        mapping = [self._style_index(style) for style in other.styles]

        new_entries = [None if i is None else mapping[i] for i in other.style_map]
        self.text += other.text
        self.style_map.extend(new_entries)

    def push_char(self, char: str, style: Style | None = None) -> None:
        if len(char) != 1:
            raise ValueError(f"expected a single character, got {char!r}")
        self.text += char
        self.style_map.append(None if style is None else self._style_index(style))

    def split_at(self, index: int) -> tuple[AText | None, AText | None]:
        """Split into two independently owned values.

        ``0`` gives ``(None, self)``, an index at or past the end gives
        ``(self, None)``.  Each side keeps only the styles it references.
        """
        if index <= 0:
            return None, self
        if index >= len(self.text):
            return self, None

        left = _reduced(self.text[:index], self.style_map[:index], self.styles)
        right = _reduced(self.text[index:], self.style_map[index:], self.styles)
        return left, right

    def replace_range(self, range_: Range, new_text: TextLike) -> None:
        """Replace ``range_`` with *new_text*.

        An empty range at 0 prepends; a range starting at or past the end
        appends.  Everything else is rebuilt from the parts left of
        ``range_.start`` and right of ``range_.end``.
        """
        new_text = AText.coerce(new_text)

        if range_.is_empty and range_.start == 0:
            new_text.append(self)
            self._assign(new_text)
        elif range_.start >= len(self.text):
            self.append(new_text)
        else:
            left, _ = self.copy().split_at(range_.start)
            _, right = self.copy().split_at(range_.end)

            res = left if left is not None else AText()
            res.append(new_text)
            if right is not None:
                res.append(right)
            self._assign(res)

    def _assign(self, other: AText) -> None:
        self.text = other.text
        self.style_map = other.style_map
        self.styles = other.styles

    # -- queries -----------------------------------------------------------

    def get_styled_segments(self, query: Range) -> list[StyledRange]:
        """Run-length encode the styles over *query* (a single line).

        Ranges are absolute; ``None`` entries resolve to ``Style()``.
        """
        if query.start >= len(self.text):
            return []
        query = query.with_end(min(query.end, len(self.text)))
        res: list[StyledRange] = []
        start = query.start
        for entry, run in groupby(self.style_map[query.as_slice()]):
            end = start + sum(1 for _ in run)
            style = Style() if entry is None else self.styles[entry]
            res.append(StyledRange(Range(start, end), style))
            start = end
        return res


TextLike = Union[AText, str, tuple[str, Optional[Style]]]


def styled(text: str, style: Style | None) -> AText:
    """``AText.styled`` as a function."""
    return AText.styled(text, style)


def _reduced(
    text: str, style_map: list[int | None], styles: list[Style]
) -> AText:
    """Build an ``AText`` keeping only the referenced entries of *styles*."""
    used = set(i for i in style_map if i is not None)
    mapping: dict[int, int] = {}
    new_styles: list[Style] = []
    for old_index, style in enumerate(styles):
        if old_index in used:
            mapping[old_index] = len(new_styles)
            new_styles.append(style)
    new_map = [None if i is None else mapping[i] for i in style_map]
    return AText(text, new_map, new_styles)
