"""
SCRIPTOR - Verse Lookup and Keyword Search

Reference lookup, substring keyword search (optionally synonym-expanded)
and random verse selection over an in-memory corpus.
"""
import random
from typing import Iterable, List, Optional, Sequence

from core.errors import CorpusLoadError, EmptyQueryError, VerseNotFound
from data.schemas import SearchResult, Verse, parse_reference
from data.synonyms import SynonymMap
from ml.synonym_expander import expand_query
from observability.logging import get_logger
from observability.tracing import create_span


logger = get_logger("scriptor.ml.engines.search")


def lookup_verse(corpus: Iterable[Verse], reference: str) -> Verse:
    """
    Find the verse a ``Book Chapter:Verse`` reference points at.

    Raises:
        InvalidReferenceFormat: if the reference is malformed
        VerseNotFound: if no verse matches
    """
    parsed = parse_reference(reference)
    for verse in corpus:
        if verse.matches(parsed):
            return verse
    raise VerseNotFound(str(parsed))


def search_terms(query: str, synonyms: Optional[SynonymMap], use_synonyms: bool) -> List[str]:
    """Terms a query searches for: synonym-expanded, or the raw words."""
    if use_synonyms:
        return expand_query(query, synonyms or {})
    return query.split()


def search_verses(
    corpus: Iterable[Verse],
    query: str,
    synonyms: Optional[SynonymMap] = None,
    use_synonyms: bool = False,
    case_sensitive: bool = False,
    book_filter: Optional[str] = None,
    limit: Optional[int] = None,
) -> SearchResult:
    """
    Substring search for any of the query's terms.

    Args:
        corpus: Verses to scan, in order
        query: Free-text query; whitespace separates terms
        synonyms: Synonym map used when ``use_synonyms`` is set
        use_synonyms: Expand each query word into its synonym group
        case_sensitive: Match case exactly
        book_filter: Only scan books whose name contains this (ignoring case)
        limit: Stop after this many matches

    Raises:
        EmptyQueryError: if the query is blank
    """
    if not query or not query.strip():
        raise EmptyQueryError()

    terms = search_terms(query, synonyms, use_synonyms)
    needles = terms if case_sensitive else [t.lower() for t in terms]
    book_needle = book_filter.lower() if book_filter else None

    result = SearchResult(
        query=query,
        terms=terms,
        synonyms_applied=use_synonyms and len(terms) > len(query.split()),
        book_filter=book_filter,
    )

    with create_span("scriptor.search", attributes={"query": query}, tracer_name=__name__) as span:
        for verse in corpus:
            if book_needle and book_needle not in verse.book.lower():
                continue

            haystack = verse.text if case_sensitive else verse.text.lower()
            if any(needle in haystack for needle in needles):
                result.verses.append(verse)
                if limit is not None and len(result.verses) >= limit:
                    break

        span.set_attribute("matches", result.count)

    logger.info("Search finished", query=query, terms=len(terms), matches=result.count)
    return result


def random_verse(corpus: Sequence[Verse], rng: Optional[random.Random] = None) -> Verse:
    """
    Pick a verse uniformly at random.

    Pass a seeded ``random.Random`` for reproducible picks.

    Raises:
        CorpusLoadError: if the corpus is empty
    """
    if len(corpus) == 0:
        raise CorpusLoadError("Cannot pick a random verse from an empty corpus")
    rng = rng or random.Random()
    return corpus[rng.randrange(len(corpus))]
