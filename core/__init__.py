"""
SCRIPTOR - Core Module

Foundational pieces shared by every other package. Kept free of
dependencies on the rest of SCRIPTOR so it can be imported from anywhere.

Usage:
    from core import ScriptorError, VerseNotFound

    try:
        verse = lookup_verse(corpus, "John 3:16")
    except VerseNotFound as e:
        print(e.message)
"""

from core.errors import (
    ScriptorError,
    InvalidReferenceFormat,
    VerseNotFound,
    InvalidMetricSpec,
    CorpusLoadError,
    SynonymConfigError,
    EmptyQueryError,
    ErrorSeverity,
)

__all__ = [
    "ScriptorError",
    "InvalidReferenceFormat",
    "VerseNotFound",
    "InvalidMetricSpec",
    "CorpusLoadError",
    "SynonymConfigError",
    "EmptyQueryError",
    "ErrorSeverity",
]
