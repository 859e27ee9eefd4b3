"""
SCRIPTOR - Cross-Reference Engine

Ranks every verse of a corpus by its similarity to a source verse.

Algorithm:
    1. Parse the source reference (``Book Chapter:Verse``).
    2. Find the source verse (book compared case-insensitively).
    3. Stop with an empty result if the source has no significant words.
    4. Score every other verse with the active metric and keep those that
       qualify (Jaccard: score >= threshold; n-gram: at least one match).
    5. Sort by score, highest first. The sort is stable, so equal scores
       keep corpus order.
    6. Truncate to ``limit`` when one is given.

The corpus and synonym map are only read. Everything computed for a query
lives in this call.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from core.errors import VerseNotFound
from data.schemas import ScoredCandidate, Verse, parse_reference
from data.synonyms import SynonymMap
from ml.metrics.similarity import MetricConfig, build_metric
from ml.tokenizer import extract_words
from observability.logging import get_logger
from observability.tracing import create_span


logger = get_logger("scriptor.ml.engines.cross_reference")

NO_SIGNIFICANT_WORDS = "No significant words found in source verse."


@dataclass
class CrossReferenceResult:
    """
    Ranked cross references for one source verse.

    ``note`` explains an empty result (no significant words in the source,
    or no candidate qualified); it is None when candidates were found.
    """
    source: Verse
    metric: MetricConfig
    use_synonyms: bool = False
    candidates: List[ScoredCandidate] = field(default_factory=list)
    note: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.candidates

    def __len__(self) -> int:
        return len(self.candidates)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "source": self.source.to_dict(),
            "metric": self.metric.kind.value,
            "threshold": None if self.metric.is_ngram else self.metric.threshold,
            "n": self.metric.n if self.metric.is_ngram else None,
            "use_synonyms": self.use_synonyms,
            "candidates": [c.to_dict() for c in self.candidates],
            "note": self.note,
        }


def no_results_note(metric: MetricConfig) -> str:
    """Suggestion shown when nothing qualified."""
    if metric.is_ngram:
        return (
            f"No cross-references found sharing a {metric.n}-gram. "
            "Try a smaller n-gram size or a Jaccard threshold instead."
        )
    return (
        f"No cross-references found with similarity >= {metric.threshold * 100:.1f}%. "
        f"Try lowering the --similarity threshold (default: 0.3)."
    )


def find_source_verse(corpus: Iterable[Verse], reference: str) -> Verse:
    """
    Resolve a reference string to a verse of the corpus.

    Raises:
        InvalidReferenceFormat: if the reference is malformed
        VerseNotFound: if no verse matches
    """
    parsed = parse_reference(reference)
    for verse in corpus:
        if verse.matches(parsed):
            return verse
    raise VerseNotFound(str(parsed), message="Source verse not found.")


def rank_candidates(candidates: List[ScoredCandidate], limit: Optional[int] = None) -> List[ScoredCandidate]:
    """Stable sort by score descending, then truncate to ``limit``."""
    ranked = sorted(candidates, key=lambda c: c.score, reverse=True)
    if limit is not None:
        ranked = ranked[:max(limit, 0)]
    return ranked


def find_cross_references(
    corpus: Iterable[Verse],
    synonyms: SynonymMap,
    source_reference: str,
    metric_config: Union[MetricConfig, str, None] = None,
    use_synonyms: bool = False,
    limit: Optional[int] = None,
) -> CrossReferenceResult:
    """
    Find verses similar to the verse at ``source_reference``.

    Args:
        corpus: Verses to search, in corpus order
        synonyms: Synonym map used when ``use_synonyms`` is set
        source_reference: Reference of the source verse, e.g. ``John 3:16``
        metric_config: A MetricConfig, an n-gram spec such as ``"2-gram"``,
            or None for Jaccard at the default threshold
        use_synonyms: Expand words (or n-grams) through the synonym map
        limit: Keep at most this many candidates

    Returns:
        CrossReferenceResult with candidates ordered by score

    Raises:
        InvalidReferenceFormat: if the reference is malformed
        VerseNotFound: if the source verse is not in the corpus
    """
    verses = corpus if isinstance(corpus, (list, tuple)) else list(corpus)
    metric = build_metric(metric_config, synonyms, use_synonyms)

    with create_span(
        "scriptor.cross_references",
        attributes={
            "source": source_reference,
            "metric": metric.config.kind.value,
            "use_synonyms": use_synonyms,
        },
        tracer_name=__name__,
    ) as span:
        source = find_source_verse(verses, source_reference)
        result = CrossReferenceResult(source=source, metric=metric.config, use_synonyms=use_synonyms)

        if not extract_words(source.text):
            result.note = NO_SIGNIFICANT_WORDS
            logger.info("Source verse has no significant words", source=source.reference)
            return result

        source_repr = metric.prepare(source.text)
        scored = []
        for verse in verses:
            if verse.same_reference(source):
                continue
            score = metric.score(source_repr, metric.prepare(verse.text))
            if metric.qualifies(score):
                scored.append(ScoredCandidate(verse=verse, score=score))

        result.candidates = rank_candidates(scored, limit)
        if result.is_empty:
            result.note = no_results_note(metric.config)

        span.set_attribute("qualifying", len(scored))
        span.set_attribute("returned", len(result.candidates))
        logger.info(
            "Cross references ranked",
            source=source.reference,
            metric=metric.config.describe(),
            use_synonyms=use_synonyms,
            qualifying=len(scored),
            returned=len(result.candidates),
        )
        return result
