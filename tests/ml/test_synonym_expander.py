"""
Tests for ml/synonym_expander.py - word, n-gram and query expansion.
"""
from ml.synonym_expander import NGramExpansion, expand, expand_ngram, expand_query, synonyms_for


class TestExpand:
    """Tests for word-set expansion."""

    def test_mapped_words_replaced_by_group(self, sample_synonyms):
        assert expand({"god", "world"}, sample_synonyms) == {"god", "lord", "almighty", "world"}

    def test_unmapped_words_kept(self):
        assert expand({"world"}, {}) == {"world"}

    def test_group_without_key(self):
        assert expand({"lamb"}, {"lamb": ["sheep"]}) == {"sheep"}

    def test_synonyms_for(self, sample_synonyms):
        assert synonyms_for("god", sample_synonyms) == ["god", "lord", "almighty"]
        assert synonyms_for("world", sample_synonyms) == ["world"]


class TestExpandNGram:
    """Tests for n-gram variant generation."""

    def test_no_synonyms(self):
        assert expand_ngram(("lord", "shepherd"), {}) == {("lord", "shepherd")}

    def test_single_position(self):
        variants = expand_ngram(("lord", "rock"), {"lord": ["lord", "god"]})
        assert variants == {("lord", "rock"), ("god", "rock")}

    def test_incremental_covers_combinations(self):
        synonyms = {"lord": ["lord", "god"], "shepherd": ["shepherd", "pastor"]}
        variants = expand_ngram(("lord", "shepherd"), synonyms)
        assert variants == {
            ("lord", "shepherd"),
            ("god", "shepherd"),
            ("lord", "pastor"),
            ("god", "pastor"),
        }

    def test_incremental_keeps_literal_when_group_omits_key(self):
        synonyms = {"lord": ["god"], "rock": ["stone"]}
        variants = expand_ngram(("lord", "rock"), synonyms, NGramExpansion.INCREMENTAL)
        assert variants == {
            ("lord", "rock"),
            ("god", "rock"),
            ("lord", "stone"),
            ("god", "stone"),
        }

    def test_cartesian_uses_groups_as_given(self):
        synonyms = {"lord": ["god"], "rock": ["stone"]}
        variants = expand_ngram(("lord", "rock"), synonyms, NGramExpansion.CARTESIAN)
        assert variants == {("god", "stone")}

    def test_variants_keep_length(self, sample_synonyms):
        for variant in expand_ngram(("god", "love", "world"), sample_synonyms):
            assert len(variant) == 3


class TestExpandQuery:
    """Tests for search-term expansion."""

    def test_sorted_and_deduplicated(self, sample_synonyms):
        assert expand_query("Love god", sample_synonyms) == [
            "almighty", "charity", "god", "lord", "love", "loved", "loveth",
        ]

    def test_punctuation_trimmed(self):
        assert expand_query("peace, joy!", {}) == ["joy", "peace"]

    def test_tokens_that_trim_to_nothing_are_dropped(self):
        assert expand_query("-- love ...", {}) == ["love"]

    def test_blank_query(self):
        assert expand_query("   ", {}) == []
