"""
SCRIPTOR - Similarity Metrics

Jaccard word-set similarity and n-gram phrase overlap used to rank
cross references.
"""

from .similarity import (
    DEFAULT_THRESHOLD,
    MetricKind,
    MetricConfig,
    SimilarityMetric,
    JaccardMetric,
    NGramMetric,
    build_metric,
    clamp_threshold,
    parse_ngram_size,
    parse_metric_spec,
    calculate_jaccard_similarity,
    word_set,
    generate_ngrams,
    ngram_variants,
    has_ngram_match,
    count_ngram_matches,
)

__all__ = [
    "DEFAULT_THRESHOLD",
    "MetricKind",
    "MetricConfig",
    "SimilarityMetric",
    "JaccardMetric",
    "NGramMetric",
    "build_metric",
    "clamp_threshold",
    "parse_ngram_size",
    "parse_metric_spec",
    "calculate_jaccard_similarity",
    "word_set",
    "generate_ngrams",
    "ngram_variants",
    "has_ngram_match",
    "count_ngram_matches",
]
