"""Tests for ablet.utils width helpers."""

from __future__ import annotations

from ablet.utils import truncate_to_width, visible_width


class TestVisibleWidth:
    def test_ascii(self) -> None:
        assert visible_width("hello") == 5
        assert visible_width("") == 0

    def test_wide_chars(self) -> None:
        assert visible_width("日本") == 4

    def test_combining_marks(self) -> None:
        assert visible_width("e\u0301") == 1

    def test_emoji(self) -> None:
        assert visible_width("👍") == 2


class TestTruncateToWidth:
    def test_fits(self) -> None:
        assert truncate_to_width("short", 10) == "short"

    def test_cut_with_ellipsis(self) -> None:
        assert truncate_to_width("hello world", 8) == "hello..."

    def test_zero_width(self) -> None:
        assert truncate_to_width("hello", 0) == ""

    def test_narrower_than_ellipsis(self) -> None:
        assert truncate_to_width("hello", 2) == ".."

    def test_pad(self) -> None:
        assert truncate_to_width("ab", 5, pad=True) == "ab   "

    def test_wide_chars_not_split(self) -> None:
        result = truncate_to_width("日本語テキスト", 6, ellipsis="")
        assert result == "日本語"
        assert visible_width(truncate_to_width("日本語", 5, ellipsis="")) == 4

    def test_too_small_message(self) -> None:
        message = "The terminal window is too small to render the ui, please enlarge"
        result = truncate_to_width(message, 20)
        assert visible_width(result) <= 20
        assert result.startswith("The terminal")
