"""
Prompt classification by holographic prototypes.

A prompt is routed by deterministic keyword rules first (identity
questions, introspection, factual question starters, greetings). When
no rule fires, the prompt is raw-encoded and compared against one
prototype trace per query type; the most similar prototype wins if its
similarity clears a small threshold.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from holomem.config.constants import CLASSIFIER_CONFIDENCE_THRESHOLD
from holomem.memory.encoder import HolographicEncoder
from holomem.memory.trace import HolographicTrace

logger = logging.getLogger(__name__)


class QueryType(Enum):
    """Prompt categories."""

    INTROSPECTIVE = "introspective"  # "Who are you?", "What can you do?"
    FACTUAL = "factual"  # "What is...?", "Who was...?"
    CREATIVE = "creative"  # "Write a poem...", "Imagine..."
    SOCIAL = "social"  # "How are you?", "Hello."
    AMBIGUOUS = "ambiguous"


@dataclass
class ClassificationResult:
    """Result of prompt classification."""

    query_type: QueryType
    confidence: float
    all_scores: Dict[str, float]
    matched_rule: Optional[str] = None

    def __repr__(self) -> str:
        return f"ClassificationResult({self.query_type.value}, conf={self.confidence:.2f})"


# Prototype phrases. Raw encoding keeps function words, which is where
# most of the signal for question types lives.
PROTOTYPE_PHRASES = {
    QueryType.INTROSPECTIVE: (
        "Who are you? Tell me about yourself. What is your purpose? "
        "Describe your nature. What are your capabilities? What are you made of?"
    ),
    QueryType.FACTUAL: (
        "what is who is where is when is why is how is what was who was "
        "tell me about explain define describe the history of the process of "
        "the meaning of facts information data E=mc2 speed of light socrates "
        "quoi qui où quand comment pourquoi est était étaient sont fait "
        "expliquer définir décrire dis-moi sur le fondateur l'histoire "
        "le processus la signification de les faits les informations"
    ),
    QueryType.CREATIVE: (
        "Imagine a world where... Create a story about... Write a poem that "
        "captures the feeling of... Compose a song about... What if...? "
        "Invent a concept."
    ),
    QueryType.SOCIAL: (
        "how are you comment vas-tu how's it going what's up hello hi hey "
        "salut bonjour good morning good afternoon good evening greetings "
        "farewell bye goodbye thank you thanks joke"
    ),
}

IDENTITY_KEYWORDS = (
    "who are you", "what are you", "qui es-tu", "quel est ton nom",
)

INTROSPECTIVE_KEYWORDS = (
    "do you feel", "what do you think", "penses-tu", "ressens-tu",
)

SOCIAL_KEYWORDS = ("hello", "how are you", "bonjour", "salut")

FACTUAL_STARTERS = (
    # English
    "what is", "what are", "what's", "what was", "what were",
    "who is", "who are", "who's", "who was", "who were",
    "where is", "where are", "where was", "where were",
    "when is", "when are", "when was", "when were",
    "why is", "why are", "why was", "why were",
    "how is", "how are", "how was", "how were",
    "explain", "define", "describe", "tell me about",
    # French
    "qu'est-ce que", "qu'est ce que", "c'est quoi", "qu'est-ce qu'est",
    "qu'est que c'est", "qui est", "qui était", "qui sont", "qui étaient",
    "où est", "où était", "où sont", "où étaient", "quand est-ce que",
    "quand était", "pourquoi est-ce que", "comment est", "explique",
    "définis", "décris", "parle-moi de",
)


class PromptClassifier:
    """
    Classifies prompts into QueryType categories.

    Prototypes are encoded at construction; call rebuild_prototypes()
    after the encoder's document-frequency table changes so the
    prototypes live in the same TF-IDF space as new prompts.

    Example:
        >>> classifier = PromptClassifier(encoder)
        >>> classifier.classify("What is the speed of light?").query_type
        <QueryType.FACTUAL: 'factual'>
    """

    def __init__(
        self,
        encoder: HolographicEncoder,
        threshold: float = CLASSIFIER_CONFIDENCE_THRESHOLD,
    ):
        self._encoder = encoder
        self._threshold = threshold
        self._prototypes: Dict[QueryType, HolographicTrace] = {}
        self.rebuild_prototypes()

    def rebuild_prototypes(self) -> None:
        """Re-encode prototypes with the encoder's current state."""
        self._prototypes = {
            query_type: self._encoder.encode_raw(phrase)
            for query_type, phrase in PROTOTYPE_PHRASES.items()
        }
        logger.debug("Prompt prototypes rebuilt (%d types)", len(self._prototypes))

    @property
    def prototypes(self) -> Dict[QueryType, HolographicTrace]:
        return dict(self._prototypes)

    @staticmethod
    def is_factual_question(text: str) -> bool:
        """True if the text opens like a factual question."""
        lower = text.lower()
        return any(lower.startswith(starter) for starter in FACTUAL_STARTERS)

    def _keyword_rule(self, prompt: str) -> Optional[tuple]:
        lower = prompt.lower()
        if any(keyword in lower for keyword in IDENTITY_KEYWORDS):
            return QueryType.INTROSPECTIVE, "identity"
        if any(keyword in lower for keyword in INTROSPECTIVE_KEYWORDS):
            return QueryType.INTROSPECTIVE, "introspective"
        if self.is_factual_question(prompt):
            return QueryType.FACTUAL, "factual_starter"
        if any(keyword in lower for keyword in SOCIAL_KEYWORDS):
            return QueryType.SOCIAL, "social"
        return None

    def classify(self, prompt: str) -> ClassificationResult:
        """
        Classify a prompt.

        Keyword rules take priority and report confidence 1.0. Otherwise
        the best prototype similarity decides, falling back to AMBIGUOUS
        when it does not exceed the threshold.
        """
        rule = self._keyword_rule(prompt)
        if rule is not None:
            query_type, name = rule
            return ClassificationResult(query_type, 1.0, {}, matched_rule=name)

        prompt_trace = self._encoder.encode_raw(prompt)
        scores = {
            query_type.value: prompt_trace.cosine_similarity(prototype)
            for query_type, prototype in self._prototypes.items()
        }
        logger.debug("Prompt scores for %r: %s", prompt, scores)

        best_value, best_score = max(scores.items(), key=lambda item: item[1])
        if best_score > self._threshold:
            return ClassificationResult(QueryType(best_value), best_score, scores)
        return ClassificationResult(QueryType.AMBIGUOUS, best_score, scores)

    def analyze_prompt(self, prompt: str) -> QueryType:
        """Shorthand for classify(prompt).query_type."""
        return self.classify(prompt).query_type
