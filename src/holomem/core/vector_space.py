"""
VectorSpace: Configuration for the complex trace space.

The VectorSpace is an immutable configuration object that defines the
dimensionality of trace vectors and how their patterns are stored. It's
shared across all components to ensure dimensional consistency.

Two storage strategies are supported:
- complex64 (default): full floating-point precision
- Q1.15 fixed-point (quantized=True): int16 (real, imag) pairs, 50% of
  the complex64 footprint, ~3e-5 absolute error per component
"""

from dataclasses import dataclass
from typing import Optional

import torch
import torchhd

from holomem.config.constants import (
    DEFAULT_DIMENSIONS,
    MAX_DIMENSIONS,
    MIN_DIMENSIONS,
    NORMALIZATION_EPSILON,
)
from holomem.core import quantized as q15


@dataclass(frozen=True)
class VectorSpace:
    """
    Immutable configuration for the complex trace space (CPU-only).

    Attributes:
        dimensions: Number of complex components per vector (default: 256)
        quantized: Store patterns as Q1.15 int16 pairs instead of complex64

    Example:
        >>> space = VectorSpace(dimensions=256)
        >>> v = space.random_unit_vector()
        >>> round(float(torch.linalg.vector_norm(v)), 5)
        1.0
    """

    dimensions: int = DEFAULT_DIMENSIONS
    quantized: bool = False

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.dimensions < MIN_DIMENSIONS:
            raise ValueError(
                f"Dimensions must be >= {MIN_DIMENSIONS}, got {self.dimensions}"
            )
        if self.dimensions > MAX_DIMENSIONS:
            raise ValueError(
                f"Dimensions must be <= {MAX_DIMENSIONS}, got {self.dimensions}"
            )

    @property
    def dtype(self) -> torch.dtype:
        """Working dtype of (loaded) vectors."""
        return torch.complex64

    def empty_vector(self, dimensions: Optional[int] = None) -> torch.Tensor:
        """
        Create a zero-initialized complex vector.

        Args:
            dimensions: Override length (default: space dimensions)
        """
        size = self.dimensions if dimensions is None else dimensions
        return torch.zeros(size, dtype=self.dtype)

    def random_unit_vector(self, dimensions: Optional[int] = None) -> torch.Tensor:
        """
        Create a random unit vector (NOT deterministic).

        Uses torchhd FHRR phasors (uniform random angles) and scales them
        to unit L2 norm. Intended for identities that carry no semantic
        content; use Codebook for reproducible vectors.

        Args:
            dimensions: Override length (default: space dimensions)
        """
        size = self.dimensions if dimensions is None else dimensions
        phasors = torchhd.random(1, size, "FHRR")[0].as_subclass(torch.Tensor)
        return self.normalize(phasors.to(self.dtype))

    @staticmethod
    def normalize(vector: torch.Tensor) -> torch.Tensor:
        """
        Scale a complex vector to unit L2 norm.

        The norm is floored at NORMALIZATION_EPSILON; an all-zero vector is
        returned unchanged rather than becoming NaN.
        """
        wide = vector.to(torch.complex128)
        norm = float(torch.linalg.vector_norm(wide))
        if norm == 0.0:
            return vector.to(torch.complex64).clone()
        return (wide / max(norm, NORMALIZATION_EPSILON)).to(torch.complex64)

    @staticmethod
    def norm(vector: torch.Tensor) -> float:
        """L2 norm of a complex vector, computed in double precision."""
        return float(torch.linalg.vector_norm(vector.to(torch.complex128)))

    # ------------------------------------------------------------------ #
    # Storage strategy
    # ------------------------------------------------------------------ #

    def store(self, vector: torch.Tensor) -> torch.Tensor:
        """Convert a complex vector into this space's storage form."""
        if self.quantized:
            return q15.quantize(vector)
        return vector.to(torch.complex64).clone()

    def load(self, pattern: torch.Tensor) -> torch.Tensor:
        """Convert a stored pattern back into a complex64 vector."""
        if self.quantized:
            return q15.dequantize(pattern)
        return pattern

    def empty_pattern(self, dimensions: Optional[int] = None) -> torch.Tensor:
        """Zero pattern in storage form."""
        size = self.dimensions if dimensions is None else dimensions
        if self.quantized:
            return q15.empty_pattern(size)
        return torch.zeros(size, dtype=torch.complex64)

    def add_patterns(self, a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
        """
        Component-wise sum of two stored patterns of equal length.

        Quantized patterns saturate instead of wrapping around.
        """
        if self.quantized:
            return q15.saturating_add(a, b)
        return a + b

    @staticmethod
    def pad(pattern: torch.Tensor, length: int) -> torch.Tensor:
        """Zero-pad a stored pattern along its first axis up to `length`."""
        missing = length - pattern.shape[0]
        if missing <= 0:
            return pattern
        zeros = torch.zeros((missing, *pattern.shape[1:]), dtype=pattern.dtype)
        return torch.cat([pattern, zeros])

    def validate_vector(self, vector: torch.Tensor) -> None:
        """
        Validate that a complex vector belongs to this space.

        Raises:
            ValueError: If vector has wrong shape or is not complex.
        """
        if vector.dim() != 1:
            raise ValueError(f"Vector must be 1D, got shape {tuple(vector.shape)}")
        if vector.shape[0] != self.dimensions:
            raise ValueError(
                f"Vector has {vector.shape[0]} dimensions, "
                f"expected {self.dimensions}"
            )
        if not vector.is_complex():
            raise ValueError(f"Vector has dtype {vector.dtype}, expected complex")

    def __repr__(self) -> str:
        return (
            f"VectorSpace(dimensions={self.dimensions}, "
            f"quantized={self.quantized})"
        )
