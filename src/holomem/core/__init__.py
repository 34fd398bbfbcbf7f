"""Core primitives: vector space, reference waves, focusing, similarity."""

from holomem.core.codebook import Codebook
from holomem.core.focuser import ConceptFocuser
from holomem.core.locks import ReadWriteLock
from holomem.core.quantized import QuantizedComplex
from holomem.core.similarity import Similarity
from holomem.core.vector_space import VectorSpace

__all__ = [
    "VectorSpace",
    "Codebook",
    "ConceptFocuser",
    "QuantizedComplex",
    "ReadWriteLock",
    "Similarity",
]
