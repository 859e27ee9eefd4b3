"""
SCRIPTOR - Data Schemas

Normalized schemas for verses, references and scored results.
Every component of the system exchanges data through these types.
"""
import re
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Tuple
import json

from core.errors import InvalidReferenceFormat


# =============================================================================
# REFERENCE PATTERNS
# =============================================================================

# "Genesis 1:1", "1 Kings 2:3", "Song of Solomon 2:4"
REFERENCE_PATTERN = re.compile(r"^(?P<book>.+?)\s(?P<chapter>\d+):(?P<verse>\d+)$")


# =============================================================================
# VERSE SCHEMA
# =============================================================================

@dataclass(frozen=True)
class Verse:
    """
    A single verse of the loaded corpus.

    Example:
    {
        "book": "John",
        "chapter": 3,
        "verse": 16,
        "text": "For God so loved the world..."
    }

    Instances are immutable; identity is ``(book, chapter, verse)`` with the
    book compared case-insensitively.
    """
    book: str
    chapter: int
    verse: int
    text: str

    @property
    def reference(self) -> str:
        """Human-readable reference, e.g. ``John 3:16``."""
        return f"{self.book} {self.chapter}:{self.verse}"

    @property
    def key(self) -> Tuple[str, int, int]:
        """Identity key with the book folded to lowercase."""
        return (self.book.lower(), self.chapter, self.verse)

    def same_reference(self, other: "Verse") -> bool:
        """True when both verses share book (ignoring case), chapter and verse."""
        return self.key == other.key

    def matches(self, reference: "VerseReference") -> bool:
        """True when this verse is the one a parsed reference points at."""
        return (
            self.book.lower() == reference.book.lower()
            and self.chapter == reference.chapter
            and self.verse == reference.verse
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def __str__(self) -> str:
        return f"{self.reference} {self.text}"


# =============================================================================
# REFERENCE SCHEMA
# =============================================================================

@dataclass(frozen=True)
class VerseReference:
    """A parsed ``Book Chapter:Verse`` reference. Book case is preserved."""
    book: str
    chapter: int
    verse: int

    def __str__(self) -> str:
        return f"{self.book} {self.chapter}:{self.verse}"


def parse_reference(reference: str) -> VerseReference:
    """
    Parse a ``Book Chapter:Verse`` string.

    Surrounding whitespace is ignored; everything else, including the case of
    the book name, is kept as given.

    Raises:
        InvalidReferenceFormat: if the string does not match the pattern
    """
    match = REFERENCE_PATTERN.match(reference.strip())
    if not match:
        raise InvalidReferenceFormat(reference)

    return VerseReference(
        book=match.group("book"),
        chapter=int(match.group("chapter")),
        verse=int(match.group("verse")),
    )


def format_reference(book: str, chapter: int, verse: int) -> str:
    """Format a reference as ``Book Chapter:Verse``."""
    return f"{book} {chapter}:{verse}"


def validate_reference(reference: str) -> bool:
    """Check whether a string is a well-formed reference."""
    if not isinstance(reference, str):
        return False
    return REFERENCE_PATTERN.match(reference.strip()) is not None


# =============================================================================
# RESULT SCHEMAS
# =============================================================================

@dataclass(frozen=True)
class ScoredCandidate:
    """
    A verse paired with its similarity to a source verse.

    ``score`` is a fraction in [0, 1] for the Jaccard metric and a
    non-negative count of matching n-grams for the n-gram metric.
    """
    verse: Verse
    score: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"reference": self.verse.reference, "text": self.verse.text, "score": self.score}


@dataclass
class SearchResult:
    """Outcome of a keyword search."""
    query: str
    terms: List[str]
    verses: List[Verse] = field(default_factory=list)
    synonyms_applied: bool = False
    book_filter: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.verses)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "query": self.query,
            "terms": list(self.terms),
            "synonyms_applied": self.synonyms_applied,
            "book_filter": self.book_filter,
            "verses": [v.to_dict() for v in self.verses],
        }
