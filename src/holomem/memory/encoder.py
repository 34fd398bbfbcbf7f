"""
HolographicEncoder: Text -> HolographicTrace.

Pipeline: focus text into concepts, look up each concept's reference
wave, weight it by TF-IDF against the corpus document-frequency table,
and superpose the weighted waves into one unit vector.

The encoder is a process-wide service. Encodes only read its state and
may run concurrently; build_document_frequency() swaps in a freshly
built table under the exclusive lock, so no encode ever sees a table
mid-rebuild. Traces produced earlier are never affected by a rebuild.
"""

import logging
import math
import re
from typing import Dict, Iterable, Optional, Set

import torch

from holomem.config.constants import DEFAULT_IDF
from holomem.core.codebook import Codebook
from holomem.core.focuser import ConceptFocuser
from holomem.core.locks import ReadWriteLock
from holomem.core.vector_space import VectorSpace
from holomem.memory.trace import HolographicTrace, WeightedConcept

logger = logging.getLogger(__name__)

_RAW_SPLIT = re.compile(r"[^\w]|_")


class HolographicEncoder:
    """
    Encodes text into holographic traces with TF-IDF weighting.

    Attributes:
        _space: Shared VectorSpace
        _codebook: Reference wave generator
        _focuser: Concept distillation
        _doc_frequency: Concept -> number of documents containing it
        _total_docs: Number of documents the table was built from

    Example:
        >>> space = VectorSpace(dimensions=256)
        >>> encoder = HolographicEncoder(space, Codebook(space))
        >>> trace = encoder.encode("hello world test")
        >>> abs(trace.norm() - 1.0) < 1e-6
        True
    """

    def __init__(
        self,
        space: VectorSpace,
        codebook: Optional[Codebook] = None,
        focuser: Optional[ConceptFocuser] = None,
    ):
        """
        Initialize encoder.

        Args:
            space: VectorSpace fixing dimensionality and storage
            codebook: Reference wave generator (default: new Codebook)
            focuser: Concept focuser (default: new ConceptFocuser)
        """
        self._space = space
        self._codebook = codebook or Codebook(space)
        self._focuser = focuser or ConceptFocuser()
        self._doc_frequency: Dict[str, int] = {}
        self._total_docs = 0
        self._lock = ReadWriteLock()

    @property
    def space(self) -> VectorSpace:
        return self._space

    @property
    def dimensionality(self) -> int:
        return self._space.dimensions

    @property
    def codebook(self) -> Codebook:
        return self._codebook

    @property
    def focuser(self) -> ConceptFocuser:
        return self._focuser

    @property
    def total_docs(self) -> int:
        return self._total_docs

    def document_frequency(self, concept: str) -> int:
        """Number of documents containing `concept` (0 if unseen)."""
        with self._lock.read_locked():
            return self._doc_frequency.get(concept, 0)

    def distill_concepts(self, text: str) -> Set[str]:
        return self._focuser.distill_concepts(text)

    # ------------------------------------------------------------------ #
    # Corpus statistics
    # ------------------------------------------------------------------ #

    def build_document_frequency(self, memories: Iterable) -> None:
        """
        Rebuild the document-frequency table from a corpus.

        Replaces the old table entirely. Call after any bulk change to
        the memory corpus; a stale table only degrades ranking.

        Args:
            memories: Objects with a `text` attribute (HolographicMemory)
        """
        doc_frequency: Dict[str, int] = {}
        total = 0
        for memory in memories:
            total += 1
            for concept in self._focuser.distill_concepts(memory.text):
                doc_frequency[concept] = doc_frequency.get(concept, 0) + 1

        with self._lock.write_locked():
            self._doc_frequency = doc_frequency
            self._total_docs = total

        logger.info(
            "Document frequency map built: %d unique concepts across %d documents",
            len(doc_frequency),
            total,
        )

    def idf(self, concept: str) -> float:
        """Inverse document frequency of a concept under the current table."""
        with self._lock.read_locked():
            return self._idf(concept, self._doc_frequency, self._total_docs)

    @staticmethod
    def _idf(concept: str, doc_frequency: Dict[str, int], total_docs: int) -> float:
        doc_count = doc_frequency.get(concept)
        if doc_count is not None:
            if doc_count > 0 and total_docs > 0:
                return math.log10(total_docs / doc_count)
            return DEFAULT_IDF
        if total_docs > 0:
            # Unseen concept: rarest possible, maximum IDF
            return math.log10(total_docs)
        return DEFAULT_IDF

    # ------------------------------------------------------------------ #
    # Encoding
    # ------------------------------------------------------------------ #

    def encode(self, text: str) -> HolographicTrace:
        """Encode text for general reasoning, filtering stop words."""
        return self.encode_concepts(self._focuser.distill_concepts(text))

    def encode_raw(self, text: str) -> HolographicTrace:
        """
        Encode text without stop-word filtering.

        Splits on every non-alphanumeric character and keeps function
        words ("who", "what", ...) that carry classification signal.
        """
        concepts = {token.lower() for token in _RAW_SPLIT.split(text) if token}
        return self.encode_concepts(concepts)

    def encode_concepts(self, concepts: Iterable[str]) -> HolographicTrace:
        """
        Encode a set of pre-distilled concepts into a trace.

        Each concept contributes tf * idf * wave to the superposition, with
        tf = 1 / len(concepts). If every weight is zero (e.g. a one-document
        corpus, where all IDFs are log10(1) = 0) the concepts are superposed
        with equal weight instead, so a non-empty trace is always a unit
        vector.

        Args:
            concepts: Concept strings; duplicates collapse

        Returns:
            New HolographicTrace (empty trace for no concepts)
        """
        concept_set = set(concepts)
        if not concept_set:
            return HolographicTrace.new_empty(self.dimensionality, self._space)

        with self._lock.read_locked():
            doc_frequency = self._doc_frequency
            total_docs = self._total_docs

        tf = 1.0 / len(concept_set)
        superposition = torch.zeros(self.dimensionality, dtype=torch.complex128)
        unweighted = torch.zeros(self.dimensionality, dtype=torch.complex128)
        weighted_concepts: Dict[str, WeightedConcept] = {}

        for concept in sorted(concept_set):
            wave = self._codebook.generate_wave(concept)
            weight = tf * self._idf(concept, doc_frequency, total_docs)

            superposition = superposition + wave.to(torch.complex128) * weight
            unweighted = unweighted + wave.to(torch.complex128)
            weighted_concepts[concept] = WeightedConcept(
                interference_pattern=self._space.store(wave),
                relevance=weight,
            )

        if VectorSpace.norm(superposition) == 0.0:
            superposition = unweighted

        pattern = self._space.store(VectorSpace.normalize(superposition))
        return HolographicTrace(weighted_concepts, pattern, self._space)

    def __repr__(self) -> str:
        return (
            f"HolographicEncoder(dimensions={self.dimensionality}, "
            f"documents={self._total_docs}, "
            f"concepts_indexed={len(self._doc_frequency)})"
        )
