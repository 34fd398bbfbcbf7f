"""
Dependency Injection Container for holomem.

Owns the process-wide services (VectorSpace, Codebook, encoder and memory
store) so every component encodes in the same space, and exposes the
learn / recall flow on top of them.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Tuple

from holomem.config.constants import (
    DEFAULT_DIMENSIONS,
    DEFAULT_PERSIST_PATH,
    DEFAULT_TOP_K,
    SEEDED_TRACE_COMPLEXITY,
)
from holomem.core.codebook import Codebook
from holomem.core.vector_space import VectorSpace
from holomem.memory.encoder import HolographicEncoder
from holomem.memory.hierarchy import ConceptualHierarchy
from holomem.memory.hippocampus import Hippocampus, HolographicMemory

logger = logging.getLogger(__name__)


class HolomemContainer:
    """
    Dependency injection container for the holographic memory engine.

    Attributes:
        _space: Shared VectorSpace configuration
        _codebook: Shared reference wave generator
        _encoder: Shared HolographicEncoder
        _hippocampus: The memory store

    Example:
        >>> container = HolomemContainer(dimensions=256)
        >>> container.learn_many(["the sky is blue", "the grass is green"])
        >>> [m.text for m, _ in container.recall("sky", top_k=1)]
        ['the sky is blue']
    """

    def __init__(
        self,
        dimensions: int = DEFAULT_DIMENSIONS,
        quantized: bool = False,
        lexicon: Optional[Mapping[str, Mapping[str, float]]] = None,
        axes: Optional[Iterable[str]] = None,
        default_top_k: int = DEFAULT_TOP_K,
        persist_path: str | Path = DEFAULT_PERSIST_PATH,
    ):
        """
        Initialize container with shared dependencies.

        Args:
            dimensions: Trace dimensionality (default: 256)
            quantized: Store patterns in Q1.15 fixed point
            lexicon: Optional semantic lexicon for the codebook
            axes: Optional semantic axis names for the codebook
            default_top_k: Results returned by recall() when top_k is omitted
            persist_path: Directory used by save/load when no path is given
        """
        self._space = VectorSpace(dimensions=dimensions, quantized=quantized)
        self._codebook = Codebook(self._space, lexicon=lexicon, axes=axes)
        self._encoder = HolographicEncoder(self._space, self._codebook)
        self._hippocampus = Hippocampus()
        self._default_top_k = default_top_k
        self._persist_path = Path(persist_path)

    @classmethod
    def from_settings(cls, settings=None) -> "HolomemContainer":
        """
        Build a container from Settings (default: the global instance).

        Also switches the package logger to DEBUG when settings.debug is set.
        """
        if settings is None:
            from holomem.config.settings import settings

        if settings.debug:
            logging.getLogger("holomem").setLevel(logging.DEBUG)

        return cls(
            dimensions=settings.dimensions,
            quantized=settings.quantized,
            default_top_k=settings.default_top_k,
            persist_path=settings.persist_path,
        )

    @property
    def vector_space(self) -> VectorSpace:
        """Get the shared VectorSpace instance."""
        return self._space

    @property
    def codebook(self) -> Codebook:
        """Get the shared Codebook instance."""
        return self._codebook

    @property
    def encoder(self) -> HolographicEncoder:
        """Get the shared HolographicEncoder instance."""
        return self._encoder

    @property
    def hippocampus(self) -> Hippocampus:
        """Get the memory store."""
        return self._hippocampus

    # ------------------------------------------------------------------ #
    # Learn / recall
    # ------------------------------------------------------------------ #

    def learn(self, text: str, is_axiom: bool = False) -> HolographicMemory:
        """
        Encode and store a single text.

        The document-frequency table is not rebuilt; call
        rebuild_document_frequency() (or use learn_many) after bulk changes.
        """
        return self._hippocampus.add_memory(text, self._encoder.encode(text), is_axiom)

    def learn_many(self, texts: Iterable[str], is_axiom: bool = False) -> None:
        """
        Bulk ingestion: store every text, then rebuild TF-IDF statistics.
        """
        count = 0
        for text in texts:
            self.learn(text, is_axiom)
            count += 1
        logger.info("Ingested %d texts (axiom=%s)", count, is_axiom)
        self.rebuild_document_frequency()

    def rebuild_document_frequency(self) -> None:
        """Recompute the encoder's TF-IDF table from the whole store."""
        self._encoder.build_document_frequency(self._hippocampus.memories)

    def recall(
        self,
        query: str,
        top_k: Optional[int] = None,
        axiom_only: bool = False,
    ) -> List[Tuple[HolographicMemory, float]]:
        """Encode `query` and return the closest unique memories."""
        top_k = self._default_top_k if top_k is None else top_k
        return self._hippocampus.find_similar(
            self._encoder.encode(query), top_k, axiom_only
        )

    # ------------------------------------------------------------------ #
    # Factories
    # ------------------------------------------------------------------ #

    def create_hierarchy(self, complexity: Optional[int] = None) -> ConceptualHierarchy:
        """
        Create a new ConceptualHierarchy.

        Args:
            complexity: Seeded trace length (default: hierarchy default)
        """
        if complexity is None:
            complexity = SEEDED_TRACE_COMPLEXITY
        return ConceptualHierarchy(
            space=VectorSpace(dimensions=complexity, quantized=self._space.quantized),
            complexity=complexity,
        )

    def create_classifier(self):
        """Create a PromptClassifier bound to the shared encoder."""
        from holomem.conversation.classifier import PromptClassifier
        return PromptClassifier(self._encoder)

    # ------------------------------------------------------------------ #
    # Persistence
    # ------------------------------------------------------------------ #

    def save(self, path: Optional[str | Path] = None, name: str = "memories") -> Path:
        """Save the memory store to `path`/`name`.json (default: persist_path)."""
        from holomem.persistence.serialization import MemoryStoreSerializer
        path = self._persist_path if path is None else Path(path)
        return MemoryStoreSerializer.save(self._hippocampus, path, name)

    def load(self, path: Optional[str | Path] = None, name: str = "memories") -> None:
        """
        Replace the memory store with a saved one and rebuild TF-IDF.
        """
        from holomem.persistence.serialization import MemoryStoreSerializer
        path = self._persist_path if path is None else Path(path)
        self._hippocampus = MemoryStoreSerializer.load(path, self._space, name)
        logger.info("Loaded %d memories from %s", len(self._hippocampus), path)
        self.rebuild_document_frequency()

    def __repr__(self) -> str:
        return (
            f"HolomemContainer(space={self._space!r}, "
            f"memories={len(self._hippocampus)})"
        )
