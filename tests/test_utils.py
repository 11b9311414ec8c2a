"""
Unit tests for paging, version token and search text helpers.
"""
from talkstore.config import PAGE_SIZE
from talkstore.utils import new_version, normalize_search_text, page_offset, page_range, unique_tags


class TestPageOffset:
    """Tests for 1-based page to offset conversion."""

    def test_first_page(self):
        assert page_offset(1) == 0

    def test_second_page(self):
        assert page_offset(2) == PAGE_SIZE

    def test_zero_and_negative_clamp_to_first_page(self):
        assert page_offset(0) == 0
        assert page_offset(-3) == 0

    def test_custom_page_size(self):
        assert page_offset(3, page_size=10) == 20


class TestPageRange:
    """Tests for inclusive row ranges."""

    def test_first_page(self):
        assert page_range(1, page_size=10) == (0, 9)

    def test_consecutive_pages_touch(self):
        _, end = page_range(1)
        start, _ = page_range(2)
        assert start == end + 1


class TestNewVersion:
    def test_tokens_are_unique(self):
        assert len({new_version() for _ in range(100)}) == 100

    def test_token_is_opaque_hex(self):
        token = new_version()
        assert len(token) == 32
        int(token, 16)


class TestUniqueTags:
    """Tests for tag normalisation."""

    def test_keeps_first_seen_order(self):
        assert unique_tags(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]

    def test_strips_and_drops_blank(self):
        assert unique_tags([" python ", "", "  ", "python"]) == ["python"]

    def test_none(self):
        assert unique_tags(None) == []


class TestNormalizeSearchText:
    def test_collapses_whitespace(self):
        assert normalize_search_text("  async \n  python\t") == "async python"

    def test_blank(self):
        assert normalize_search_text("   ") == ""
        assert normalize_search_text(None) == ""
