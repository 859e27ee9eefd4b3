"""
SCRIPTOR - Tokenizer and Stop-word Filter

Turns raw verse text into the "significant" words the similarity metrics
compare. A token is significant when, after lowercasing and trimming
non-alphabetic characters from both ends, it is longer than two characters
and is not a stop word.
"""
from typing import FrozenSet, List

# Common English and archaic English function words
STOP_WORDS: FrozenSet[str] = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "but", "by", "for", "from",
    "has", "he", "in", "is", "it", "its", "of", "on", "that", "the", "to",
    "was", "will", "with", "shall", "unto", "thee", "thou", "thy", "ye",
    "hath", "his", "her", "him", "them", "they", "their", "all", "not",
    "which", "there", "this", "these", "those", "when", "who", "what",
    "into", "upon", "out", "up", "have", "had", "do", "did", "done",
    "said", "came", "went", "been", "were", "being",
})

MIN_WORD_LENGTH = 3


def strip_token(token: str) -> str:
    """Trim leading and trailing non-alphabetic characters; inner ones stay."""
    start, end = 0, len(token)
    while start < end and not token[start].isalpha():
        start += 1
    while end > start and not token[end - 1].isalpha():
        end -= 1
    return token[start:end]


def is_significant(word: str) -> bool:
    """True for a normalized token that survives the length and stop-word filters."""
    return len(word) >= MIN_WORD_LENGTH and word not in STOP_WORDS


def significant_words(text: str) -> List[str]:
    """
    Significant words of ``text`` in source order, duplicates kept.

    >>> significant_words("The LORD is my shepherd; I shall not want.")
    ['lord', 'shepherd', 'want']
    """
    words = []
    for token in text.lower().split():
        word = strip_token(token)
        if word and is_significant(word):
            words.append(word)
    return words


def extract_words(text: str) -> FrozenSet[str]:
    """
    Deduplicated set of significant words of ``text``.

    >>> sorted(extract_words("For God so loved the world"))
    ['god', 'loved', 'world']
    """
    return frozenset(significant_words(text))
