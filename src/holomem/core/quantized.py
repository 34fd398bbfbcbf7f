"""
QuantizedComplex: Q1.15 fixed-point complex numbers.

Each part of a complex number is stored as a signed 16-bit integer
holding a value in [-1.0, 0.99997] with ~3e-5 resolution. A complex
value therefore costs 4 bytes instead of the 8 bytes of complex64.

Besides the scalar value type, this module provides whole-pattern
helpers that operate on int16 tensors of shape (dimensions, 2), which
is how quantized traces are stored.
"""

from dataclasses import dataclass

import torch

from holomem.config.constants import (
    INT16_MAX,
    INT16_MIN,
    Q15_MAX,
    Q15_MIN,
    Q15_SCALE,
)


def _saturate(value: int) -> int:
    return max(INT16_MIN, min(INT16_MAX, value))


def _to_q15(value: float) -> int:
    # int() truncates toward zero like a float -> i16 cast
    return int(min(max(value, Q15_MIN), Q15_MAX) * Q15_SCALE)


@dataclass(frozen=True)
class QuantizedComplex:
    """
    Complex number in Q1.15 fixed-point format.

    Attributes:
        real: Real part as a Q1.15 integer
        imag: Imaginary part as a Q1.15 integer

    Example:
        >>> q = QuantizedComplex.from_complex(complex(0.5, -0.25))
        >>> q.real, q.imag
        (16383, -8191)
        >>> abs(q.to_complex() - complex(0.5, -0.25)) < 3e-5
        True
    """

    real: int = 0
    imag: int = 0

    @classmethod
    def from_complex(cls, value: complex) -> "QuantizedComplex":
        """Quantize a Python complex, clamping each part to the Q1.15 range."""
        return cls(_to_q15(value.real), _to_q15(value.imag))

    def to_complex(self) -> complex:
        """Convert back to a Python complex."""
        return complex(self.real / Q15_SCALE, self.imag / Q15_SCALE)

    def mul(self, other: "QuantizedComplex") -> "QuantizedComplex":
        """
        Fixed-point complex product.

        Q1.15 * Q1.15 gives Q2.30; shifting right by 15 brings the
        result back to Q1.15. The only overflow (-1 * -1) saturates.
        """
        real = (self.real * other.real - self.imag * other.imag) >> 15
        imag = (self.real * other.imag + self.imag * other.real) >> 15
        return QuantizedComplex(_saturate(real), _saturate(imag))

    def add(self, other: "QuantizedComplex") -> "QuantizedComplex":
        """Saturating addition."""
        return QuantizedComplex(
            _saturate(self.real + other.real),
            _saturate(self.imag + other.imag),
        )

    def scale(self, factor: float) -> "QuantizedComplex":
        """
        Multiply by a real factor.

        The factor itself is quantized, so it is clamped to [-1, 0.99997].
        """
        q = _to_q15(factor)
        return QuantizedComplex((self.real * q) >> 15, (self.imag * q) >> 15)

    def norm_sqr(self) -> float:
        """Squared magnitude."""
        c = self.to_complex()
        return c.real * c.real + c.imag * c.imag

    __mul__ = mul
    __add__ = add


QuantizedComplex.ZERO = QuantizedComplex(0, 0)


# ---------------------------------------------------------------------- #
# Pattern-level helpers (int16 tensors of shape (dimensions, 2))
# ---------------------------------------------------------------------- #

def quantize(vector: torch.Tensor) -> torch.Tensor:
    """
    Quantize a complex vector into an int16 pattern.

    Args:
        vector: Complex tensor of shape (dimensions,)

    Returns:
        int16 tensor of shape (dimensions, 2) holding (real, imag) pairs
    """
    parts = torch.view_as_real(vector.to(torch.complex64))
    return (parts.clamp(Q15_MIN, Q15_MAX) * Q15_SCALE).to(torch.int16)


def dequantize(pattern: torch.Tensor) -> torch.Tensor:
    """Convert an int16 (dimensions, 2) pattern back to complex64."""
    parts = pattern.to(torch.float32) / Q15_SCALE
    return torch.view_as_complex(parts.contiguous())


def saturating_add(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Element-wise int16 addition that clamps instead of wrapping."""
    total = a.to(torch.int32) + b.to(torch.int32)
    return total.clamp(INT16_MIN, INT16_MAX).to(torch.int16)


def empty_pattern(dimensions: int) -> torch.Tensor:
    """Zero int16 pattern."""
    return torch.zeros((dimensions, 2), dtype=torch.int16)
