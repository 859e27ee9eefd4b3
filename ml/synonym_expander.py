"""
SCRIPTOR - Synonym Expander

Expands words, n-grams and search queries through an injected synonym map
(lowercase term -> list of equivalent lowercase terms, normally including
the term itself). A term without an entry maps only to itself.

Two n-gram expansion rules exist:

INCREMENTAL (default):
    Start from the literal n-gram. Visit positions left to right; at each
    position with a synonym group, take every variation collected so far and
    add a copy with that single position replaced by each synonym.

CARTESIAN:
    Every combination of every position's group, as given in the map.

The rules agree whenever each group contains its own key. They differ for
hand-written groups that omit the key: INCREMENTAL always keeps the literal
words available, CARTESIAN only uses what the group lists. CARTESIAN must be
requested explicitly.
"""
from enum import Enum
from itertools import product
from typing import FrozenSet, Iterable, List, Set, Tuple

from data.synonyms import SynonymMap
from ml.tokenizer import strip_token

NGram = Tuple[str, ...]


class NGramExpansion(str, Enum):
    """How n-grams are expanded into their variants."""
    INCREMENTAL = "incremental"
    CARTESIAN = "cartesian"


def synonyms_for(word: str, synonyms: SynonymMap) -> List[str]:
    """The word's synonym group, or ``[word]`` when it has none."""
    group = synonyms.get(word)
    if not group:
        return [word]
    return list(group)


def expand(words: Iterable[str], synonyms: SynonymMap) -> FrozenSet[str]:
    """
    Union of every word's synonym group.

    Words without a group are kept unchanged, so the result always contains
    each unmapped input word and each mapped word's full group.
    """
    expanded: Set[str] = set()
    for word in words:
        group = synonyms.get(word)
        if group:
            expanded.update(group)
        else:
            expanded.add(word)
    return frozenset(expanded)


def expand_ngram(
    ngram: NGram,
    synonyms: SynonymMap,
    expansion: NGramExpansion = NGramExpansion.INCREMENTAL,
) -> Set[NGram]:
    """
    All variants of an n-gram under synonym substitution.

    >>> sorted(expand_ngram(("lord", "shepherd"), {"lord": ["lord", "god"]}))
    [('god', 'shepherd'), ('lord', 'shepherd')]
    """
    if expansion == NGramExpansion.CARTESIAN:
        return set(product(*(synonyms_for(word, synonyms) for word in ngram)))

    variations: Set[NGram] = {tuple(ngram)}
    for position, word in enumerate(ngram):
        group = synonyms.get(word)
        if not group:
            continue
        # Snapshot: variants added at this position are not re-expanded here
        for variation in list(variations):
            for synonym in group:
                variant = variation[:position] + (synonym,) + variation[position + 1:]
                variations.add(variant)
    return variations


def expand_query(query: str, synonyms: SynonymMap) -> List[str]:
    """
    Search terms for a free-text query.

    Each whitespace token is lowercased and trimmed of non-alphabetic edges,
    then replaced by its synonym group when it has one. Tokens that trim to
    nothing are dropped. The result is sorted and deduplicated.

    >>> expand_query("Love, peace!", {"love": ["love", "charity"]})
    ['charity', 'love', 'peace']
    """
    terms: Set[str] = set()
    for token in query.split():
        word = strip_token(token.lower())
        if not word:
            continue
        group = synonyms.get(word)
        if group:
            terms.update(group)
        else:
            terms.add(word)
    return sorted(terms)
