"""
SCRIPTOR - Similarity Metrics

Two interchangeable ways of scoring how similar two verses are.

Jaccard:
    score = |A ∩ B| / |A ∪ B| over the significant-word sets of both verses
    (optionally synonym-expanded). A fraction in [0, 1]; a candidate
    qualifies when score >= threshold.

N-gram:
    Each verse becomes the set of its contiguous n-word runs of significant
    words (optionally expanded into synonym variants). The score is the
    number of distinct source variants found in the candidate's set; a
    candidate qualifies when at least one variant is shared.

The active metric is described by a ``MetricConfig``; ``parse_metric_spec``
builds one from user input such as ``"2-gram"`` and falls back to Jaccard at
0.3 when the input cannot be parsed.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, FrozenSet, List, Optional, Protocol, Sequence, Set, Union

from core.errors import InvalidMetricSpec
from data.synonyms import SynonymMap
from ml.synonym_expander import NGram, NGramExpansion, expand, expand_ngram
from ml.tokenizer import extract_words, significant_words
from observability.logging import get_logger


logger = get_logger("scriptor.ml.metrics.similarity")

DEFAULT_THRESHOLD = 0.3

# "2-gram", "3gram", "2 gram", "4-grams", or a bare "2"
NGRAM_SPEC_PATTERN = re.compile(r"^\s*(\d+)\s*(?:-?\s*grams?)?\s*$", re.IGNORECASE)


class MetricKind(str, Enum):
    """Available similarity metrics."""
    JACCARD = "jaccard"
    NGRAM = "ngram"


@dataclass(frozen=True)
class MetricConfig:
    """
    The similarity metric chosen for a query.

    Attributes:
        kind: Which metric scores candidates
        threshold: Minimum Jaccard score, in [0, 1] (Jaccard only)
        n: N-gram size (n-gram only)
        expansion: N-gram synonym expansion rule (n-gram only)
    """
    kind: MetricKind = MetricKind.JACCARD
    threshold: float = DEFAULT_THRESHOLD
    n: int = 2
    expansion: NGramExpansion = NGramExpansion.INCREMENTAL

    @classmethod
    def jaccard(cls, threshold: float = DEFAULT_THRESHOLD) -> "MetricConfig":
        return cls(kind=MetricKind.JACCARD, threshold=clamp_threshold(threshold))

    @classmethod
    def ngram(
        cls,
        n: int,
        expansion: NGramExpansion = NGramExpansion.INCREMENTAL,
    ) -> "MetricConfig":
        if n <= 0:
            raise InvalidMetricSpec(str(n))
        return cls(kind=MetricKind.NGRAM, n=n, expansion=expansion)

    @property
    def is_ngram(self) -> bool:
        return self.kind == MetricKind.NGRAM

    def describe(self) -> str:
        """Short human-readable description, e.g. ``2-gram`` or ``similarity >= 30.0%``."""
        if self.is_ngram:
            return f"{self.n}-gram"
        return f"similarity >= {self.threshold * 100:.1f}%"


# =============================================================================
# PARSING
# =============================================================================

def clamp_threshold(threshold: float) -> float:
    """Clamp a Jaccard threshold into [0, 1], warning when it was out of range."""
    clamped = min(1.0, max(0.0, float(threshold)))
    if clamped != threshold:
        logger.warning("Similarity threshold out of range, clamped", requested=threshold, used=clamped)
    return clamped


def parse_ngram_size(spec: str) -> int:
    """
    Parse an n-gram size from strings like ``"2-gram"`` or ``"3gram"``.

    Raises:
        InvalidMetricSpec: if the string is not an n-gram spec or n < 1
    """
    match = NGRAM_SPEC_PATTERN.match(spec or "")
    if not match:
        raise InvalidMetricSpec(spec)
    n = int(match.group(1))
    if n < 1:
        raise InvalidMetricSpec(spec)
    return n


def parse_metric_spec(
    spec: Optional[str] = None,
    threshold: Optional[float] = None,
    expansion: NGramExpansion = NGramExpansion.INCREMENTAL,
) -> MetricConfig:
    """
    Build a metric from user input. Never raises.

    No spec selects Jaccard with ``threshold`` (default 0.3). An n-gram spec
    selects the n-gram metric. An unparsable spec is reported as a warning
    and replaced by Jaccard at the default threshold.
    """
    if spec is None or not spec.strip():
        return MetricConfig.jaccard(DEFAULT_THRESHOLD if threshold is None else threshold)

    try:
        return MetricConfig.ngram(parse_ngram_size(spec), expansion=expansion)
    except InvalidMetricSpec as e:
        logger.warning(
            "Invalid n-gram specification, falling back to Jaccard",
            spec=spec,
            error_code=e.error_code,
            threshold=DEFAULT_THRESHOLD,
        )
        return MetricConfig.jaccard(DEFAULT_THRESHOLD)


# =============================================================================
# JACCARD
# =============================================================================

def calculate_jaccard_similarity(words1: AbstractSet[str], words2: AbstractSet[str]) -> float:
    """
    Jaccard index of two word sets.

    Returns 0.0 when either set is empty.
    """
    if not words1 or not words2:
        return 0.0

    union = len(words1 | words2)
    if union == 0:
        return 0.0
    return len(words1 & words2) / union


def word_set(text: str, synonyms: SynonymMap, use_synonyms: bool) -> FrozenSet[str]:
    """Significant words of ``text``, expanded through ``synonyms`` when enabled."""
    words = extract_words(text)
    if use_synonyms:
        return expand(words, synonyms)
    return words


# =============================================================================
# N-GRAMS
# =============================================================================

def generate_ngrams(words: Sequence[str], n: int) -> List[NGram]:
    """Contiguous runs of ``n`` words, one per start position."""
    if n <= 0 or len(words) < n:
        return []
    return [tuple(words[i:i + n]) for i in range(len(words) - n + 1)]


def ngram_variants(
    text: str,
    n: int,
    synonyms: SynonymMap,
    use_synonyms: bool,
    expansion: NGramExpansion = NGramExpansion.INCREMENTAL,
) -> Set[NGram]:
    """Every n-gram of ``text`` plus, when enabled, all of their synonym variants."""
    ngrams = generate_ngrams(significant_words(text), n)
    if not use_synonyms:
        return set(ngrams)

    variants: Set[NGram] = set()
    for ngram in ngrams:
        variants |= expand_ngram(ngram, synonyms, expansion)
    return variants


def has_ngram_match(source: AbstractSet[NGram], target: AbstractSet[NGram]) -> bool:
    """True when the two variant sets share at least one n-gram."""
    return not source.isdisjoint(target)


def count_ngram_matches(source: AbstractSet[NGram], target: AbstractSet[NGram]) -> int:
    """Number of distinct source variants present in the target set."""
    return sum(1 for ngram in source if ngram in target)


# =============================================================================
# METRIC STRATEGIES
# =============================================================================

class SimilarityMetric(Protocol):
    """Scoring strategy used by the cross-reference ranker."""

    config: MetricConfig

    def prepare(self, text: str) -> AbstractSet:
        """Per-verse representation compared by ``score``."""
        ...

    def score(self, source: AbstractSet, target: AbstractSet) -> float:
        ...

    def qualifies(self, score: float) -> bool:
        ...


class JaccardMetric:
    """Jaccard similarity over (optionally expanded) significant-word sets."""

    def __init__(self, config: MetricConfig, synonyms: SynonymMap, use_synonyms: bool = False):
        self.config = config
        self.synonyms = synonyms
        self.use_synonyms = use_synonyms

    def prepare(self, text: str) -> FrozenSet[str]:
        return word_set(text, self.synonyms, self.use_synonyms)

    def score(self, source: AbstractSet[str], target: AbstractSet[str]) -> float:
        return calculate_jaccard_similarity(source, target)

    def qualifies(self, score: float) -> bool:
        return score >= self.config.threshold


class NGramMetric:
    """Count of shared n-gram variants."""

    def __init__(self, config: MetricConfig, synonyms: SynonymMap, use_synonyms: bool = False):
        self.config = config
        self.synonyms = synonyms
        self.use_synonyms = use_synonyms

    def prepare(self, text: str) -> Set[NGram]:
        return ngram_variants(
            text,
            self.config.n,
            self.synonyms,
            self.use_synonyms,
            self.config.expansion,
        )

    def score(self, source: AbstractSet[NGram], target: AbstractSet[NGram]) -> float:
        if not has_ngram_match(source, target):
            return 0.0
        return float(count_ngram_matches(source, target))

    def qualifies(self, score: float) -> bool:
        return score > 0


def build_metric(
    config: Union[MetricConfig, str, None],
    synonyms: SynonymMap,
    use_synonyms: bool = False,
) -> Union[JaccardMetric, NGramMetric]:
    """Create the scoring strategy for a metric config or raw spec string."""
    if not isinstance(config, MetricConfig):
        config = parse_metric_spec(config)

    if config.is_ngram:
        return NGramMetric(config, synonyms, use_synonyms)
    return JaccardMetric(config, synonyms, use_synonyms)
