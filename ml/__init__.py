"""
SCRIPTOR - Text Similarity

Components:
- tokenizer: significant-word extraction and stop-word filtering
- synonym_expander: word, n-gram and query expansion through a synonym map
- metrics: Jaccard and n-gram similarity
- engines: cross-reference ranking, lookup and keyword search
"""

from ml.tokenizer import STOP_WORDS, extract_words, significant_words
from ml.synonym_expander import NGramExpansion, expand, expand_ngram, expand_query

__all__ = [
    "STOP_WORDS",
    "extract_words",
    "significant_words",
    "NGramExpansion",
    "expand",
    "expand_ngram",
    "expand_query",
]
