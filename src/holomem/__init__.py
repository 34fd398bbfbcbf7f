"""
holomem: Holographic memory and semantic encoding engine.

Text is distilled into n-gram concepts, each concept is given a
deterministic reference wave in a complex vector space, and the waves
are superposed (TF-IDF weighted) into a single trace. Traces are stored
in an append-only memory and retrieved by cosine distance.

The package includes:
- Core primitives (VectorSpace, Codebook, ConceptFocuser, QuantizedComplex)
- Traces and encoding (HolographicTrace, HolographicEncoder)
- Memory (Hippocampus, ConceptualHierarchy)
- Prompt classification by holographic prototypes
"""

__version__ = "0.1.0"

from holomem.container import HolomemContainer
from holomem.core.codebook import Codebook
from holomem.core.focuser import ConceptFocuser
from holomem.core.quantized import QuantizedComplex
from holomem.core.vector_space import VectorSpace
from holomem.memory.encoder import HolographicEncoder
from holomem.memory.hierarchy import ConceptNode, ConceptualHierarchy
from holomem.memory.hippocampus import Hippocampus, HolographicMemory
from holomem.memory.trace import HolographicTrace, WeightedConcept
from holomem.conversation.classifier import (
    ClassificationResult,
    PromptClassifier,
    QueryType,
)

__all__ = [
    # Core
    "HolomemContainer",
    "VectorSpace",
    "Codebook",
    "ConceptFocuser",
    "QuantizedComplex",
    # Traces
    "HolographicTrace",
    "WeightedConcept",
    "HolographicEncoder",
    # Memory
    "Hippocampus",
    "HolographicMemory",
    "ConceptualHierarchy",
    "ConceptNode",
    # Classification
    "PromptClassifier",
    "QueryType",
    "ClassificationResult",
]
