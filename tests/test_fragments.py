"""Tests for fragment extraction."""

import pytest

from smart_recall.query.fragments import extract_fragments


class TestExtractFragments:
    """Test splitting queries into fragments."""

    def test_comma_separated(self):
        """Test splitting on commas."""
        assert extract_fragments("blue folder, last week, something about AI") == [
            "blue folder",
            "last week",
            "something about ai",
        ]

    def test_semicolons_and_commas(self):
        """Test mixed separators keep their original order."""
        assert extract_fragments("Charts;maybe from John ,  last month") == [
            "charts",
            "maybe from john",
            "last month",
        ]

    def test_empty_pieces_dropped(self):
        """Test that empty pieces between separators are dropped."""
        assert extract_fragments("red, , ;notes") == ["red", "notes"]

    @pytest.mark.parametrize(
        "query,expected",
        [
            ("marketing presentation", ["marketing presentation"]),
            ("  Marketing Presentation  ", ["marketing presentation"]),
            ("SINGLE", ["single"]),
        ],
    )
    def test_single_phrase(self, query, expected):
        """Test that a query without separators stays whole."""
        assert extract_fragments(query) == expected

    def test_single_piece_with_trailing_separator(self):
        """Test that one non-empty piece returns the whole query."""
        assert extract_fragments("Blue folder, ") == ["blue folder,"]

    def test_only_separators_never_empty(self):
        """Test that non-empty input never yields an empty list."""
        assert extract_fragments(";,") == [";,"]
