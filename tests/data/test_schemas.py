"""
Tests for data/schemas.py - verse and reference schemas.
"""
import dataclasses
import json

import pytest

from core.errors import InvalidReferenceFormat
from data.schemas import (
    ScoredCandidate,
    SearchResult,
    Verse,
    VerseReference,
    parse_reference,
    validate_reference,
)


class TestVerse:
    """Tests for the Verse schema."""

    def test_reference_and_str(self):
        verse = Verse("John", 11, 35, "Jesus wept.")
        assert verse.reference == "John 11:35"
        assert str(verse) == "John 11:35 Jesus wept."

    def test_frozen(self):
        verse = Verse("John", 11, 35, "Jesus wept.")
        with pytest.raises(dataclasses.FrozenInstanceError):
            verse.text = "changed"

    def test_same_reference_ignores_book_case(self):
        assert Verse("John", 3, 16, "a").same_reference(Verse("JOHN", 3, 16, "b"))
        assert not Verse("John", 3, 16, "a").same_reference(Verse("John", 3, 17, "a"))

    def test_matches(self):
        assert Verse("Song of Solomon", 2, 4, "x").matches(VerseReference("song of solomon", 2, 4))

    def test_to_json(self):
        data = json.loads(Verse("Ruth", 1, 16, "whither thou goest").to_json())
        assert data == {"book": "Ruth", "chapter": 1, "verse": 16, "text": "whither thou goest"}


class TestReferences:
    """Tests for reference parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("John 3:16", VerseReference("John", 3, 16)),
        ("1 Kings 2:3", VerseReference("1 Kings", 2, 3)),
        ("Song of Solomon 2:4", VerseReference("Song of Solomon", 2, 4)),
        ("  john 3:16  ", VerseReference("john", 3, 16)),
    ])
    def test_parse(self, text, expected):
        assert parse_reference(text) == expected

    @pytest.mark.parametrize("text", ["John", "John 3", "John 3:", "John3:16", "3:16", "John 3:16-18"])
    def test_invalid(self, text):
        assert not validate_reference(text)
        with pytest.raises(InvalidReferenceFormat) as exc_info:
            parse_reference(text)
        assert exc_info.value.reference == text

    def test_validate_non_string(self):
        assert not validate_reference(None)


class TestResults:
    """Tests for result schemas."""

    def test_scored_candidate_to_dict(self):
        candidate = ScoredCandidate(Verse("John", 3, 17, "text"), 0.4)
        assert candidate.to_dict() == {"reference": "John 3:17", "text": "text", "score": 0.4}

    def test_search_result(self):
        result = SearchResult(query="love", terms=["love"], verses=[Verse("John", 3, 16, "loved")])
        assert result.count == 1
        assert result.to_dict()["verses"][0]["verse"] == 16
