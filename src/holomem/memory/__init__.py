"""Memory systems for holographic storage."""

from holomem.memory.encoder import HolographicEncoder
from holomem.memory.hierarchy import ConceptNode, ConceptualHierarchy
from holomem.memory.hippocampus import Hippocampus, HolographicMemory
from holomem.memory.trace import HolographicTrace, WeightedConcept

__all__ = [
    "HolographicTrace",
    "WeightedConcept",
    "HolographicEncoder",
    "Hippocampus",
    "HolographicMemory",
    "ConceptualHierarchy",
    "ConceptNode",
]
