"""
SCRIPTOR - Engines Module

Query engines over an in-memory corpus:
- cross_reference: similarity-ranked cross references for a source verse
- search: reference lookup, keyword search and random verse
"""

from ml.engines.cross_reference import (
    CrossReferenceResult,
    NO_SIGNIFICANT_WORDS,
    find_cross_references,
    find_source_verse,
    no_results_note,
    rank_candidates,
)
from ml.engines.search import (
    lookup_verse,
    random_verse,
    search_terms,
    search_verses,
)

__all__ = [
    # Cross references
    "CrossReferenceResult",
    "NO_SIGNIFICANT_WORDS",
    "find_cross_references",
    "find_source_verse",
    "no_results_note",
    "rank_candidates",
    # Search
    "lookup_verse",
    "random_verse",
    "search_terms",
    "search_verses",
]
