"""
Tests for the rule-based French lemmatizer.
"""

import pytest

from holomem.core.lemmatizer import lemmatize


class TestLemmatize:

    @pytest.mark.parametrize(
        "word, lemma",
        [
            ("bateaux", "bateau"),
            ("journaux", "journal"),
            ("chats", "chat"),
            ("parlaient", "parler"),
            ("finissent", "finir"),
            ("parlé", "parler"),
        ],
    )
    def test_suffix_rules(self, word, lemma):
        assert lemmatize(word) == lemma

    def test_short_words_unchanged(self):
        assert lemmatize("Dog") == "Dog"
        assert lemmatize("les") == "les"

    def test_double_s_not_stripped(self):
        assert lemmatize("bass") == "bass"

    def test_no_rule_matches(self):
        assert lemmatize("Poodle") == "Poodle"
        assert lemmatize("Animal") == "Animal"

    def test_idempotent_on_lemma(self):
        assert lemmatize(lemmatize("chats")) == "chat"
