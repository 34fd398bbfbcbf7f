"""
Tests for PromptClassifier.

Validates:
1. Keyword rules and their priority
2. Prototype similarity routing
3. AMBIGUOUS fallback below the confidence threshold
"""

import pytest

from holomem.conversation.classifier import (
    PROTOTYPE_PHRASES,
    PromptClassifier,
    QueryType,
)


@pytest.fixture
def classifier(encoder):
    return PromptClassifier(encoder)


class TestKeywordRules:
    """Test deterministic keyword routing."""

    @pytest.mark.parametrize("prompt", ["Who are you?", "what are you exactly", "Qui es-tu ?"])
    def test_identity(self, classifier, prompt):
        result = classifier.classify(prompt)
        assert result.query_type == QueryType.INTROSPECTIVE
        assert result.matched_rule == "identity"
        assert result.confidence == 1.0

    def test_introspective(self, classifier):
        result = classifier.classify("Do you feel lonely sometimes?")
        assert result.query_type == QueryType.INTROSPECTIVE
        assert result.matched_rule == "introspective"

    @pytest.mark.parametrize(
        "prompt",
        ["What is the capital of France?", "explain gravity", "Qui était Socrate ?"],
    )
    def test_factual_starters(self, classifier, prompt):
        result = classifier.classify(prompt)
        assert result.query_type == QueryType.FACTUAL
        assert result.matched_rule == "factual_starter"

    @pytest.mark.parametrize("prompt", ["Hello there", "bonjour mon ami", "salut !"])
    def test_social(self, classifier, prompt):
        assert classifier.analyze_prompt(prompt) == QueryType.SOCIAL

    def test_identity_beats_factual(self, classifier):
        """'who are you' also opens like a factual question."""
        assert classifier.classify("who are you").matched_rule == "identity"

    def test_is_factual_question(self):
        assert PromptClassifier.is_factual_question("Where is Paris?")
        assert PromptClassifier.is_factual_question("WHERE IS Paris?")
        # Leading whitespace is not stripped
        assert not PromptClassifier.is_factual_question("  Where is Paris?")
        assert not PromptClassifier.is_factual_question("Paris is where?")


class TestPrototypes:
    """Test similarity-based routing."""

    def test_one_prototype_per_type(self, classifier):
        assert set(classifier.prototypes) == set(PROTOTYPE_PHRASES)
        assert QueryType.AMBIGUOUS not in classifier.prototypes

    def test_creative_prompt(self, classifier):
        result = classifier.classify("Write a poem about the sea")
        assert result.query_type == QueryType.CREATIVE
        assert result.matched_rule is None
        assert set(result.all_scores) == {"introspective", "factual", "creative", "social"}
        assert result.confidence == result.all_scores["creative"]

    def test_empty_prompt_is_ambiguous(self, classifier):
        result = classifier.classify("")
        assert result.query_type == QueryType.AMBIGUOUS
        assert result.confidence == 0.0

    def test_high_threshold_is_ambiguous(self, encoder):
        strict = PromptClassifier(encoder, threshold=0.99)
        result = strict.classify("Write a poem about the sea")
        assert result.query_type == QueryType.AMBIGUOUS
        assert result.confidence == max(result.all_scores.values())

    def test_rebuild_prototypes(self, encoder, classifier):
        before = classifier.prototypes[QueryType.CREATIVE]
        encoder.build_document_frequency([])
        classifier.rebuild_prototypes()
        after = classifier.prototypes[QueryType.CREATIVE]
        assert after.concepts == before.concepts
