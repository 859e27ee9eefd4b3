"""
Tests for ml/engines/cross_reference.py - cross-reference ranking.
"""
import pytest

from core.errors import InvalidReferenceFormat, VerseNotFound
from data.schemas import ScoredCandidate, Verse
from ml.engines.cross_reference import (
    NO_SIGNIFICANT_WORDS,
    find_cross_references,
    find_source_verse,
    no_results_note,
    rank_candidates,
)
from ml.metrics.similarity import MetricConfig, MetricKind


# =============================================================================
# End-to-end scenarios
# =============================================================================

class TestJaccardScenarios:
    """John 3:16 against John 3:17."""

    def test_low_threshold_reports_neighbour(self, scenario_corpus):
        result = find_cross_references(
            scenario_corpus, {}, "John 3:16", MetricConfig.jaccard(0.1)
        )
        assert len(result) == 1
        candidate = result.candidates[0]
        assert candidate.verse.reference == "John 3:17"
        assert candidate.score == pytest.approx(0.4)
        assert result.note is None

    def test_high_threshold_is_empty_not_error(self, scenario_corpus):
        result = find_cross_references(
            scenario_corpus, {}, "John 3:16", MetricConfig.jaccard(0.5)
        )
        assert result.is_empty
        assert "No cross-references found with similarity >= 50.0%" in result.note

    def test_default_metric_is_jaccard(self, scenario_corpus):
        result = find_cross_references(scenario_corpus, {}, "John 3:16")
        assert result.metric.kind == MetricKind.JACCARD
        assert result.metric.threshold == 0.3
        assert len(result) == 1


class TestNGramScenarios:
    """Bigram matching."""

    def test_shepherd_excludes_rock(self):
        corpus = [
            Verse("Psalms", 23, 1, "the lord is my shepherd"),
            Verse("Psalms", 18, 2, "the lord is my rock"),
        ]
        result = find_cross_references(corpus, {}, "Psalms 23:1", "2-gram")
        assert result.is_empty
        assert "2-gram" in result.note

    def test_synonyms_bridge_bigrams(self):
        corpus = [
            Verse("Psalms", 23, 1, "the lord is my shepherd"),
            Verse("Psalms", 121, 5, "the lord is thy keeper"),
        ]
        synonyms = {"shepherd": ["shepherd", "keeper"]}
        result = find_cross_references(
            corpus, synonyms, "Psalms 23:1", MetricConfig.ngram(2), use_synonyms=True
        )
        assert [c.verse.reference for c in result.candidates] == ["Psalms 121:5"]
        assert result.candidates[0].score == 1.0

    def test_invalid_spec_falls_back_to_jaccard(self, scenario_corpus):
        result = find_cross_references(scenario_corpus, {}, "John 3:16", "banana")
        assert result.metric.kind == MetricKind.JACCARD
        assert result.metric.threshold == 0.3
        assert len(result) == 1


# =============================================================================
# Ranking rules
# =============================================================================

class TestRanking:
    """Ordering, truncation and exclusion."""

    def test_source_excluded_even_with_duplicate_text(self):
        corpus = [
            Verse("John", 3, 16, "For God so loved the world"),
            Verse("john", 3, 16, "For God so loved the world"),
            Verse("Romans", 5, 8, "God loved the world"),
        ]
        result = find_cross_references(corpus, {}, "JOHN 3:16", MetricConfig.jaccard(0.0))
        assert [c.verse.reference for c in result.candidates] == ["Romans 5:8"]

    def test_sorted_by_score(self, sample_verses):
        result = find_cross_references(sample_verses, {}, "John 3:16", MetricConfig.jaccard(0.0))
        scores = [c.score for c in result.candidates]
        assert scores == sorted(scores, reverse=True)
        assert result.candidates[0].verse.reference == "John 3:17"

    def test_ties_keep_corpus_order(self):
        corpus = [
            Verse("Genesis", 1, 1, "light"),
            Verse("Genesis", 1, 2, "light darkness"),
            Verse("Genesis", 1, 3, "light water"),
            Verse("Genesis", 1, 4, "light earth"),
        ]
        result = find_cross_references(corpus, {}, "Genesis 1:1", MetricConfig.jaccard(0.1))
        assert [c.verse.verse for c in result.candidates] == [2, 3, 4]

    def test_limit(self, sample_verses):
        result = find_cross_references(
            sample_verses, {}, "John 3:16", MetricConfig.jaccard(0.0), limit=2
        )
        assert len(result) == 2

    def test_rank_candidates(self):
        a = ScoredCandidate(Verse("A", 1, 1, "a"), 0.2)
        b = ScoredCandidate(Verse("B", 1, 1, "b"), 0.9)
        c = ScoredCandidate(Verse("C", 1, 1, "c"), 0.2)
        assert rank_candidates([a, b, c]) == [b, a, c]
        assert rank_candidates([a, b, c], limit=1) == [b]
        assert rank_candidates([a, b, c], limit=0) == []

    def test_synonyms_raise_score(self, sample_verses, sample_synonyms):
        plain = find_cross_references(sample_verses, {}, "Psalms 23:1", MetricConfig.jaccard(0.0))
        expanded = find_cross_references(
            sample_verses, sample_synonyms, "Psalms 23:1", MetricConfig.jaccard(0.0), use_synonyms=True
        )
        plain_scores = {c.verse.reference: c.score for c in plain.candidates}
        expanded_scores = {c.verse.reference: c.score for c in expanded.candidates}
        assert expanded_scores["Genesis 1:1"] > plain_scores["Genesis 1:1"]


# =============================================================================
# Source verse errors and empty outcomes
# =============================================================================

class TestSourceVerse:
    """Source lookup and the empty-source outcome."""

    def test_invalid_reference(self, scenario_corpus):
        with pytest.raises(InvalidReferenceFormat):
            find_cross_references(scenario_corpus, {}, "John three sixteen")

    def test_not_found(self, scenario_corpus):
        with pytest.raises(VerseNotFound) as exc_info:
            find_cross_references(scenario_corpus, {}, "John 3:18")
        assert exc_info.value.message == "Source verse not found."

    def test_book_case_insensitive(self, scenario_corpus):
        assert find_source_verse(scenario_corpus, " john 3:17 ").verse == 17

    def test_no_significant_words(self):
        corpus = [
            Verse("John", 11, 35, "And it was so."),
            Verse("John", 11, 36, "Behold how he loved him"),
        ]
        result = find_cross_references(corpus, {}, "John 11:35", MetricConfig.jaccard(0.0))
        assert result.is_empty
        assert result.note == NO_SIGNIFICANT_WORDS

    def test_to_dict(self, scenario_corpus):
        data = find_cross_references(scenario_corpus, {}, "John 3:16", MetricConfig.jaccard(0.1)).to_dict()
        assert data["source"]["verse"] == 16
        assert data["metric"] == "jaccard"
        assert data["candidates"][0]["reference"] == "John 3:17"


def test_no_results_note_mentions_default():
    assert "(default: 0.3)" in no_results_note(MetricConfig.jaccard(0.8))
