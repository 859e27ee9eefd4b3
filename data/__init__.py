"""
SCRIPTOR - Data Module

Schemas, corpus loaders and the synonym configuration.

Architecture:
- schemas.py: Verse, VerseReference and result dataclasses
- corpus.py: tab-delimited and JSON corpus loaders with format detection
- synonyms.py: ``key: a, b, c`` thesaurus loader and default file
"""

from data.schemas import (
    Verse,
    VerseReference,
    ScoredCandidate,
    SearchResult,
    REFERENCE_PATTERN,
    parse_reference,
    format_reference,
    validate_reference,
)
from data.corpus import (
    Corpus,
    TRANSLATIONS,
    load_corpus,
    load_text_corpus,
    load_json_corpus,
    parse_text_corpus,
    parse_json_corpus,
    is_json_format,
    translation_path,
)
from data.synonyms import (
    SynonymMap,
    DEFAULT_SYNONYMS_CONTENT,
    parse_synonyms,
    load_synonyms,
    create_default_synonyms_file,
)

__all__ = [
    # Schemas
    "Verse",
    "VerseReference",
    "ScoredCandidate",
    "SearchResult",
    "REFERENCE_PATTERN",
    "parse_reference",
    "format_reference",
    "validate_reference",
    # Corpus
    "Corpus",
    "TRANSLATIONS",
    "load_corpus",
    "load_text_corpus",
    "load_json_corpus",
    "parse_text_corpus",
    "parse_json_corpus",
    "is_json_format",
    "translation_path",
    # Synonyms
    "SynonymMap",
    "DEFAULT_SYNONYMS_CONTENT",
    "parse_synonyms",
    "load_synonyms",
    "create_default_synonyms_file",
]
