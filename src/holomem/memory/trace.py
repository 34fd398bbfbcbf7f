"""
HolographicTrace: Superposed concept patterns for a piece of text.

A trace keeps every concept it was built from (with its reference wave
and TF-IDF relevance) and one superposition vector: the unit-normalized
weighted sum of all concept waves. Similarity between two texts is the
similarity between their superposition vectors.

Patterns are held in the storage form of the trace's VectorSpace
(complex64, or Q1.15 int16 pairs when quantized).
"""

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

import torch

from holomem.config.constants import SEEDED_RELEVANCE
from holomem.core.similarity import Similarity
from holomem.core.vector_space import VectorSpace


@dataclass
class WeightedConcept:
    """
    A concept's contribution to a trace.

    Attributes:
        interference_pattern: Stored reference wave of the concept
        relevance: TF-IDF weight (typically small and positive)
    """

    interference_pattern: torch.Tensor
    relevance: float

    def copy(self) -> "WeightedConcept":
        return WeightedConcept(self.interference_pattern.clone(), self.relevance)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeightedConcept):
            return NotImplemented
        return (
            self.relevance == other.relevance
            and self.interference_pattern.shape == other.interference_pattern.shape
            and torch.equal(self.interference_pattern, other.interference_pattern)
        )


class HolographicTrace:
    """
    Vector representation of a text's meaning.

    Traces are values: they are copied rather than shared, and the only
    in-place mutation is combine_with().

    Attributes:
        _space: VectorSpace supplying the storage strategy
        _concepts: Concept name -> WeightedConcept
        _superposition: Stored superposition pattern

    Example:
        >>> space = VectorSpace(dimensions=64)
        >>> a = HolographicTrace.new_seeded("dog", 64, space)
        >>> a.distance(a) < 1e-6
        True
        >>> HolographicTrace.new_empty(64, space).cosine_similarity(a)
        0.0
    """

    def __init__(
        self,
        weighted_concepts: Dict[str, WeightedConcept],
        superposition_pattern: torch.Tensor,
        space: VectorSpace,
    ):
        """
        Initialize from already-stored patterns.

        Args:
            weighted_concepts: Concept map (patterns in storage form)
            superposition_pattern: Superposition in storage form
            space: VectorSpace whose storage strategy the patterns use
        """
        self._space = space
        self._concepts = weighted_concepts
        self._superposition = superposition_pattern

    @classmethod
    def new_seeded(
        cls,
        name: str,
        complexity: int,
        space: Optional[VectorSpace] = None,
    ) -> "HolographicTrace":
        """
        Single-concept trace with a random (non-deterministic) unit vector.

        Gives a concept an identity without semantic content, e.g. a
        freshly created hierarchy node.

        Args:
            name: Concept name
            complexity: Vector length
            space: Storage strategy (default: complex64)
        """
        space = space or VectorSpace(dimensions=complexity)
        pattern = space.store(space.random_unit_vector(complexity))
        concepts = {name: WeightedConcept(pattern, SEEDED_RELEVANCE)}
        return cls(concepts, pattern.clone(), space)

    @classmethod
    def new_empty(
        cls,
        dimensionality: int,
        space: Optional[VectorSpace] = None,
    ) -> "HolographicTrace":
        """Zero trace with no concepts; the identity of combine_with()."""
        space = space or VectorSpace(dimensions=max(dimensionality, 1))
        return cls({}, space.empty_pattern(dimensionality), space)

    # ------------------------------------------------------------------ #
    # Accessors
    # ------------------------------------------------------------------ #

    @property
    def space(self) -> VectorSpace:
        return self._space

    @property
    def quantized(self) -> bool:
        return self._space.quantized

    @property
    def weighted_concepts(self) -> Dict[str, WeightedConcept]:
        """Live concept map. Treat as read-only."""
        return self._concepts

    @property
    def concepts(self) -> frozenset:
        return frozenset(self._concepts)

    @property
    def superposition_pattern(self) -> torch.Tensor:
        """Superposition as a complex64 vector."""
        return self._space.load(self._superposition)

    @property
    def stored_superposition(self) -> torch.Tensor:
        """Superposition in storage form (complex64 or int16 pairs)."""
        return self._superposition

    @property
    def dimensionality(self) -> int:
        return int(self._superposition.shape[0])

    def concept_pattern(self, name: str) -> Optional[torch.Tensor]:
        """A concept's interference pattern as complex64, or None."""
        concept = self._concepts.get(name)
        if concept is None:
            return None
        return self._space.load(concept.interference_pattern)

    def norm(self) -> float:
        """L2 norm of the superposition."""
        return VectorSpace.norm(self.superposition_pattern)

    def is_empty(self) -> bool:
        return not self._concepts

    # ------------------------------------------------------------------ #
    # Superposition
    # ------------------------------------------------------------------ #

    def combine_with(self, other: "HolographicTrace") -> None:
        """
        Superpose another trace into this one (in place).

        For each concept of `other`: create a zero entry here if missing,
        add the interference patterns, and set relevance to the pairwise
        average (self + other) / 2. Then pad the superposition to the
        longer of the two, add `other`'s superposition and re-normalize.

        Repeated calls average pairwise, so earlier contributions are
        halved each time; this is not a running mean.
        """
        for name, other_concept in other._concepts.items():
            other_pattern = self._convert(other_concept.interference_pattern, other)
            own = self._concepts.get(name)
            if own is None:
                own = WeightedConcept(
                    self._space.empty_pattern(other_pattern.shape[0]), 0.0
                )
                self._concepts[name] = own

            length = max(own.interference_pattern.shape[0], other_pattern.shape[0])
            own.interference_pattern = self._space.add_patterns(
                VectorSpace.pad(own.interference_pattern, length),
                VectorSpace.pad(other_pattern, length),
            )
            own.relevance = (own.relevance + other_concept.relevance) / 2.0

        length = max(self.dimensionality, other.dimensionality)
        combined = self._space.add_patterns(
            VectorSpace.pad(self._superposition, length),
            VectorSpace.pad(self._convert(other._superposition, other), length),
        )
        self._superposition = self._space.store(
            VectorSpace.normalize(self._space.load(combined))
        )

    def _convert(self, pattern: torch.Tensor, source: "HolographicTrace") -> torch.Tensor:
        """Bring a pattern from another trace into this trace's storage form."""
        if source._space.quantized == self._space.quantized:
            return pattern
        return self._space.store(source._space.load(pattern))

    # ------------------------------------------------------------------ #
    # Similarity
    # ------------------------------------------------------------------ #

    def cosine_similarity(self, other: "HolographicTrace") -> float:
        """
        Cosine similarity of the superposition vectors, in [-1, 1].

        0.0 when either trace has a zero superposition.
        """
        return Similarity.cosine(self.superposition_pattern, other.superposition_pattern)

    def distance(self, other: "HolographicTrace") -> float:
        """
        Semantic distance: 1 - |cosine similarity|.

        0.0 is identical; FLOAT32_MAX if the similarity is NaN.
        """
        return Similarity.distance(self.cosine_similarity(other))

    # ------------------------------------------------------------------ #
    # Value semantics
    # ------------------------------------------------------------------ #

    def copy(self) -> "HolographicTrace":
        """Deep copy; the clone shares no tensors with this trace."""
        return HolographicTrace(
            {name: concept.copy() for name, concept in self._concepts.items()},
            self._superposition.clone(),
            self._space,
        )

    def __len__(self) -> int:
        return len(self._concepts)

    def __contains__(self, concept: object) -> bool:
        return concept in self._concepts

    def __iter__(self) -> Iterator[str]:
        return iter(self._concepts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HolographicTrace):
            return NotImplemented
        return (
            self.quantized == other.quantized
            and self._concepts == other._concepts
            and self._superposition.shape == other._superposition.shape
            and torch.equal(self._superposition, other._superposition)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"HolographicTrace(concepts={len(self._concepts)}, "
            f"dimensionality={self.dimensionality}, "
            f"quantized={self.quantized})"
        )
