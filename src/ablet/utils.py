"""Display-width helpers for status text.

Layout and buffer clipping work in code points; these helpers are only used
for the orchestrator's own messages, which must fit the terminal width
regardless of the characters in them.
"""

from __future__ import annotations

import unicodedata

import grapheme
import wcwidth as _wcwidth

__all__ = ["visible_width", "truncate_to_width"]


def _grapheme_width(g: str) -> int:
    """Terminal width of one grapheme cluster."""
    if not g:
        return 0

    cp = ord(g[0])
    if len(g) == 1:
        if cp < 0x20 or 0x7F <= cp <= 0x9F:
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    # emoji presentation selector, ZWJ sequences, skin tones, flags
    for ch in g:
        code = ord(ch)
        if code in (0xFE0F, 0x200D) or 0x1F3FB <= code <= 0x1F3FF or 0x1F1E6 <= code <= 0x1F1FF:
            return 2
    if cp >= 0x1F000:
        return 2
    if unicodedata.category(g[0]) in ("Mn", "Me", "Cf"):
        return 0
    return max(_wcwidth.wcwidth(g[0]), 0)


def visible_width(text: str) -> int:
    """Number of terminal columns *text* occupies."""
    if text.isascii() and text.isprintable():
        return len(text)
    return sum(_grapheme_width(g) for g in grapheme.graphemes(text))


def truncate_to_width(
    text: str,
    max_width: int,
    ellipsis: str = "...",
    pad: bool = False,
) -> str:
    """Cut *text* to at most *max_width* columns at a grapheme boundary.

    When cut, *ellipsis* is appended and counts towards the width.  With
    *pad*, the result is right-padded with spaces to exactly *max_width*.
    """
    if max_width <= 0:
        return ""

    width = visible_width(text)
    if width > max_width:
        target = max_width - visible_width(ellipsis)
        if target <= 0:
            return _take_columns(ellipsis, max_width)
        text = _take_columns(text, target) + ellipsis
        width = visible_width(text)

    if pad and width < max_width:
        text += " " * (max_width - width)
    return text


def _take_columns(text: str, max_cols: int) -> str:
    result: list[str] = []
    cols = 0
    for g in grapheme.graphemes(text):
        w = _grapheme_width(g)
        if cols + w > max_cols:
            break
        result.append(g)
        cols += w
    return "".join(result)
