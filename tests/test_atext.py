"""Tests for ablet.atext.AText."""

from __future__ import annotations

import pytest

from ablet.atext import AText, StyledRange, styled
from ablet.geometry import Range
from ablet.style import Color, Style

GREEN = Style(fg=Color.GREEN)
RED = Style(fg=Color.RED)
BOLD = Style().bold()


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_plain(self) -> None:
        text = AText("hello")
        assert text.plain() == "hello"
        assert text.style_map == [None] * 5
        assert text.styles == []

    def test_styled(self) -> None:
        text = styled("hi", GREEN)
        assert text.style_map == [0, 0]
        assert text.styles == [GREEN]

    def test_styled_with_none_is_plain(self) -> None:
        assert AText.styled("hi", None).styles == []

    def test_validates_map_length(self) -> None:
        with pytest.raises(ValueError):
            AText("abc", [None, None])

    def test_validates_style_indices(self) -> None:
        with pytest.raises(ValueError):
            AText("ab", [0, 1], [GREEN])

    def test_rejects_duplicate_styles(self) -> None:
        with pytest.raises(ValueError):
            AText("ab", [0, 1], [GREEN, GREEN])

    def test_coerce(self) -> None:
        assert AText.coerce("x") == AText("x")
        assert AText.coerce(("x", RED)) == styled("x", RED)

    def test_coerce_copies(self) -> None:
        original = AText("x")
        copy = AText.coerce(original)
        copy.append("y")
        assert original.plain() == "x"

    def test_coerce_rejects_other_types(self) -> None:
        with pytest.raises(TypeError):
            AText.coerce(42)  # type: ignore[arg-type]

    def test_from_multiple(self) -> None:
        text = AText.from_multiple([("a", RED), "b", styled("c", RED)])
        assert text.plain() == "abc"
        assert text.styles == [RED]
        assert text.resolved_styles() == [RED, None, RED]

    def test_not_hashable(self) -> None:
        with pytest.raises(TypeError):
            hash(AText("x"))


# ---------------------------------------------------------------------------
# Append and style table dedup
# ---------------------------------------------------------------------------


class TestAppend:
    def test_dedups_equal_styles(self) -> None:
        text = styled("a", GREEN)
        text.append(styled("b", Style(fg=Color.GREEN)))
        text.append(styled("c", RED))
        text.append(styled("d", GREEN))
        assert text.styles == [GREEN, RED]
        assert text.style_map == [0, 0, 1, 0]

    def test_resolved_styles_survive_any_append_order(self) -> None:
        parts = [("a", RED), ("b", None), ("c", GREEN), ("d", RED), ("e", BOLD)]
        text = AText()
        for part in parts:
            text.append(part)
        assert text.resolved_styles() == [style for _, style in parts]
        assert len(text.styles) == len(set(text.styles))

    def test_append_self(self) -> None:
        text = styled("ab", RED)
        text.append(text)
        assert text.plain() == "abab"
        assert text.resolved_styles() == [RED] * 4

    def test_push_char(self) -> None:
        text = AText("a")
        text.push_char("b", GREEN)
        text.push_char("\n")
        assert text.plain() == "ab\n"
        assert text.resolved_styles() == [None, GREEN, None]

    def test_push_char_rejects_strings(self) -> None:
        with pytest.raises(ValueError):
            AText().push_char("ab")

    def test_operators(self) -> None:
        text = styled("a", RED) + "b"
        assert text.plain() == "ab"
        text += ("c", GREEN)
        assert text.resolved_styles() == [RED, None, GREEN]
        assert ("z" + styled("y", RED)).plain() == "zy"


# ---------------------------------------------------------------------------
# split_at
# ---------------------------------------------------------------------------


class TestSplitAt:
    def test_hello_world(self) -> None:
        text = styled("hello ", GREEN)
        text.append("world")
        left, right = text.split_at(6)
        assert left is not None and right is not None
        assert left.plain() == "hello "
        assert left.styles == [GREEN]
        assert right.plain() == "world"
        assert right.styles == []
        assert right.resolved_styles() == [None] * 5

    def test_renumbers_indices(self) -> None:
        text = AText.from_multiple([("ab", RED), ("cd", GREEN)])
        _, right = text.split_at(2)
        assert right is not None
        assert right.styles == [GREEN]
        assert right.style_map == [0, 0]

    def test_bounds(self) -> None:
        text = AText("abc")
        assert text.split_at(0) == (None, text)
        left, right = text.split_at(3)
        assert left is text and right is None
        left, right = text.split_at(10)
        assert left is text and right is None

    @pytest.mark.parametrize("index", [1, 2, 3, 4, 5])
    def test_append_reconstructs(self, index: int) -> None:
        text = AText.from_multiple([("ab", RED), "c", ("de", GREEN), ("f", RED)])
        left, right = text.split_at(index)
        assert left is not None and right is not None
        joined = left + right
        assert joined == text
        assert joined.plain() == text.plain()


# ---------------------------------------------------------------------------
# replace_range
# ---------------------------------------------------------------------------


class TestReplaceRange:
    def test_prepend(self) -> None:
        text = AText.from_multiple([("Hello", BOLD), " world"])
        text.replace_range(Range(0, 0), "Oh, ")
        assert text.plain() == "Oh, Hello world"
        assert text.resolved_styles() == [None] * 4 + [BOLD] * 5 + [None] * 6

    def test_append_at_end(self) -> None:
        text = AText("abc")
        text.replace_range(Range(3, 3), ("d", RED))
        assert text.plain() == "abcd"
        assert text.style_at(3) == RED

    def test_past_end_appends(self) -> None:
        text = AText("abc")
        text.replace_range(Range(7, 9), "x")
        assert text.plain() == "abcx"

    def test_middle(self) -> None:
        text = styled("abcdef", RED)
        text.replace_range(Range(2, 4), ("XY", GREEN))
        assert text.plain() == "abXYef"
        assert text.resolved_styles() == [RED, RED, GREEN, GREEN, RED, RED]

    def test_delete(self) -> None:
        text = AText("abcdef")
        text.replace_range(Range(1, 3), "")
        assert text.plain() == "adef"

    def test_delete_prefix(self) -> None:
        text = AText("abcdef")
        text.replace_range(Range(0, 2), "")
        assert text.plain() == "cdef"

    def test_insert_in_middle(self) -> None:
        text = AText("ac")
        text.replace_range(Range(1, 1), "b")
        assert text.plain() == "abc"

    def test_replace_to_end(self) -> None:
        text = AText("abcdef")
        text.replace_range(Range(4, 6), "Z")
        assert text.plain() == "abcdZ"

    @pytest.mark.parametrize("start,end", [(0, 2), (1, 4), (3, 6), (0, 6), (2, 2)])
    def test_replacing_with_own_content_is_noop(self, start: int, end: int) -> None:
        text = AText.from_multiple([("ab", RED), "cd", ("ef", GREEN)])
        before = text.copy()
        part = AText(text.text[start:end], text.style_map[start:end], text.styles)
        text.replace_range(Range(start, end), part)
        assert text == before

    def test_prunes_unused_styles(self) -> None:
        text = AText.from_multiple([("ab", RED), ("cd", GREEN)])
        text.replace_range(Range(0, 2), "xy")
        assert text.styles == [GREEN]


# ---------------------------------------------------------------------------
# Styled segments
# ---------------------------------------------------------------------------


class TestStyledSegments:
    def test_runs(self) -> None:
        text = AText.from_multiple([("ab", RED), "cd", ("e", RED)])
        assert text.get_styled_segments(Range(0, 5)) == [
            StyledRange(Range(0, 2), RED),
            StyledRange(Range(2, 4), Style()),
            StyledRange(Range(4, 5), RED),
        ]

    def test_absolute_positions(self) -> None:
        text = AText.from_multiple(["abc", ("def", GREEN)])
        assert text.get_styled_segments(Range(2, 5)) == [
            StyledRange(Range(2, 3), Style()),
            StyledRange(Range(3, 5), GREEN),
        ]

    def test_query_clipped_to_text(self) -> None:
        assert AText("abc").get_styled_segments(Range(1, 10)) == [
            StyledRange(Range(1, 3), Style())
        ]
        assert AText("abc").get_styled_segments(Range(5, 9)) == []

    def test_empty_query(self) -> None:
        assert AText("abc").get_styled_segments(Range(1, 1)) == []
