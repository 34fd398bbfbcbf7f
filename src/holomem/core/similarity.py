"""
Similarity: Functions for measuring resonance between complex vectors.

Similarity between two traces is the cosine of the angle between their
superposition vectors, using the real part of the Hermitian inner
product. Distance folds the sign away: a vector and its negation are
treated as the same concept.
"""

import math

import torch

FLOAT32_MAX = float(torch.finfo(torch.float32).max)
"""Distance reported when a similarity cannot be computed."""


class Similarity:
    """
    Similarity functions for complex trace vectors.

    All computations run in double precision and are deterministic.
    Degenerate inputs (zero vectors) produce sentinel values instead of
    raising: similarity 0.0, and FLOAT32_MAX distance for NaN.
    """

    @staticmethod
    def dot(a: torch.Tensor, b: torch.Tensor) -> float:
        """
        Real part of sum(a * conj(b)) over the common prefix of a and b.
        """
        n = min(a.shape[0], b.shape[0])
        a64 = a[:n].to(torch.complex128)
        b64 = b[:n].to(torch.complex128)
        return float(torch.sum(a64.real * b64.real + a64.imag * b64.imag))

    @staticmethod
    def cosine(a: torch.Tensor, b: torch.Tensor) -> float:
        """
        Cosine similarity between two complex vectors.

        Returns value in [-1, 1] where:
        - 1.0: Same direction
        - 0.0: Orthogonal, or either vector is all zeros
        - -1.0: Opposite direction

        Example:
            >>> v = torch.tensor([1 + 1j, 0 + 0j])
            >>> Similarity.cosine(v, v)
            1.0
        """
        norm_a = float(torch.linalg.vector_norm(a.to(torch.complex128)))
        norm_b = float(torch.linalg.vector_norm(b.to(torch.complex128)))
        if norm_a == 0.0 or norm_b == 0.0:
            return 0.0

        similarity = Similarity.dot(a, b) / (norm_a * norm_b)
        if math.isnan(similarity):
            return similarity
        # Clamp to absorb floating point error
        return max(-1.0, min(1.0, similarity))

    @staticmethod
    def cosine_batch(query: torch.Tensor, candidates: torch.Tensor) -> torch.Tensor:
        """
        Batch cosine similarity against multiple candidates.

        Args:
            query: Complex vector of shape (dimensions,)
            candidates: Complex matrix of shape (n_candidates, dimensions)

        Returns:
            float64 tensor of shape (n_candidates,); rows with zero norm
            (or a zero query) score 0.0
        """
        q = query.to(torch.complex128)
        c = candidates.to(torch.complex128)
        dots = c.real @ q.real + c.imag @ q.imag
        norms = torch.linalg.vector_norm(c, dim=-1) * torch.linalg.vector_norm(q)
        scores = torch.where(norms > 0, dots / torch.where(norms > 0, norms, 1.0), 0.0)
        return scores.clamp(-1.0, 1.0)

    @staticmethod
    def distance(similarity: float) -> float:
        """
        Convert a similarity into a distance in [0, 1].

        0.0 means identical (or exactly opposite) direction.
        NaN similarity maps to FLOAT32_MAX.
        """
        if math.isnan(similarity):
            return FLOAT32_MAX
        return 1.0 - abs(similarity)
