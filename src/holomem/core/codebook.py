"""
Codebook: Deterministic reference-wave generation.

Maps concepts (strings) to unit vectors in the complex trace space.
Two sources are used:

1. A curated semantic lexicon: a concept listed there is built as a
   weighted sum of named semantic-axis basis vectors.
2. Everything else (the common case): SHA-256 of the concept seeds a
   PCG64 bit generator, which draws the vector components.

The hash path is what gives arbitrary strings a stable identity across
processes and machines without a shared lookup table: the same concept
always maps to the same wave.
"""

import hashlib
import threading
from collections import OrderedDict
from typing import Dict, Iterable, Mapping, Optional, Union

import numpy as np
import torch

from holomem.config.constants import AXIS_PREFIX, WAVE_CACHE_SIZE
from holomem.core.vector_space import VectorSpace


class Codebook:
    """
    Reference wave generator for concepts.

    Attributes:
        _space: The VectorSpace configuration
        _axes: Semantic axis name -> basis vector
        _lexicon: Concept -> {axis: weight}
        _cache: LRU memoization of generated waves

    Example:
        >>> space = VectorSpace(dimensions=256)
        >>> a = Codebook(space).generate_wave("apple")
        >>> b = Codebook(space).generate_wave("apple")
        >>> torch.equal(a, b)  # Independent instances agree
        True
    """

    def __init__(
        self,
        space: VectorSpace,
        lexicon: Optional[Mapping[str, Mapping[str, float]]] = None,
        axes: Optional[Union[Iterable[str], Mapping[str, torch.Tensor]]] = None,
        cache_size: int = WAVE_CACHE_SIZE,
    ):
        """
        Initialize codebook.

        Args:
            space: VectorSpace defining dimensionality
            lexicon: Optional concept -> {axis: weight} entries
            axes: Axis names (vectors derived by hashing) or a mapping of
                  axis name -> explicit basis vector
            cache_size: Maximum number of memoized waves
        """
        self._space = space
        self._axes: Dict[str, torch.Tensor] = {}
        self._lexicon: Dict[str, Dict[str, float]] = {}
        self._cache: "OrderedDict[str, torch.Tensor]" = OrderedDict()
        self._cache_size = cache_size
        self._lock = threading.Lock()
        # Bumped by every lexicon/axis change; stale waves are not cached
        self._version = 0

        if isinstance(axes, Mapping):
            for name, vector in axes.items():
                self.register_axis(name, vector)
        elif axes is not None:
            for name in axes:
                self.register_axis(name)

        for concept, coordinates in (lexicon or {}).items():
            self.add_lexicon_entry(concept, coordinates)

    @property
    def dimensions(self) -> int:
        return self._space.dimensions

    # ------------------------------------------------------------------ #
    # Semantic field
    # ------------------------------------------------------------------ #

    def register_axis(self, name: str, vector: Optional[torch.Tensor] = None) -> None:
        """
        Register a named semantic axis.

        Without an explicit vector, the axis gets the hash wave of
        "__AXIS_<name>__", so axes are reproducible too.

        Raises:
            ValueError: If an explicit vector does not fit the space.
        """
        if vector is None:
            vector = self.hash_wave(f"{AXIS_PREFIX}{name}__")
        else:
            vector = vector.to(torch.complex64)
            self._space.validate_vector(vector)
        with self._lock:
            self._axes[name] = vector
            self._version += 1
            # Lexicon waves built on the old axis are stale
            self._cache.clear()

    def add_lexicon_entry(self, concept: str, coordinates: Mapping[str, float]) -> None:
        """
        Place a concept in the semantic field.

        Args:
            concept: Concept string (as produced by the focuser)
            coordinates: Axis name -> weight
        """
        with self._lock:
            self._lexicon[concept] = dict(coordinates)
            self._version += 1
            self._cache.pop(concept, None)

    def has_concept(self, concept: str) -> bool:
        """True if the concept is in the semantic lexicon."""
        return concept in self._lexicon

    @property
    def axes(self) -> list:
        return sorted(self._axes)

    # ------------------------------------------------------------------ #
    # Wave generation
    # ------------------------------------------------------------------ #

    def generate_wave(self, concept: str) -> torch.Tensor:
        """
        Reference wave for a concept.

        Lexicon concepts are composed from semantic axes; unknown concepts
        fall back to the hash wave. Results are memoized and must not be
        modified in place.

        Args:
            concept: Concept string

        Returns:
            complex64 unit vector of shape (dimensions,)
        """
        with self._lock:
            cached = self._cache.get(concept)
            if cached is not None:
                self._cache.move_to_end(concept)
                return cached
            coordinates = self._lexicon.get(concept)
            axes = dict(self._axes) if coordinates is not None else None
            version = self._version

        if coordinates is not None:
            wave = self._lexicon_wave(coordinates, axes)
        else:
            wave = self.hash_wave(concept)

        with self._lock:
            if self._version == version:
                self._cache[concept] = wave
                if len(self._cache) > self._cache_size:
                    self._cache.popitem(last=False)
        return wave

    def hash_wave(self, concept: str) -> torch.Tensor:
        """
        Deterministic wave for an arbitrary string.

        Uses: sha256(utf-8) -> 256-bit PCG64 seed -> uniform [-1, 1)
        (real, imag) pairs -> L2 normalization.
        """
        rng = np.random.Generator(np.random.PCG64(self._hash_to_seed(concept)))
        parts = rng.uniform(-1.0, 1.0, size=(self._space.dimensions, 2))
        wave = torch.view_as_complex(torch.from_numpy(parts))
        return VectorSpace.normalize(wave)

    def _lexicon_wave(
        self,
        coordinates: Mapping[str, float],
        axes: Mapping[str, torch.Tensor],
    ) -> torch.Tensor:
        wave = torch.zeros(self._space.dimensions, dtype=torch.complex128)
        for axis, weight in coordinates.items():
            axis_wave = axes.get(axis)
            if axis_wave is not None:
                wave = wave + axis_wave.to(torch.complex128) * weight
        return VectorSpace.normalize(wave)

    @staticmethod
    def _hash_to_seed(concept: str) -> int:
        """
        Convert concept string to a deterministic 256-bit seed.

        The whole SHA-256 digest is used as PCG64 entropy.
        """
        digest = hashlib.sha256(concept.encode("utf-8")).digest()
        return int.from_bytes(digest, "big")

    # ------------------------------------------------------------------ #
    # Cache management
    # ------------------------------------------------------------------ #

    def clear_cache(self) -> None:
        """
        Clear the memoization cache.

        Cleared waves can be regenerated deterministically.
        """
        with self._lock:
            self._cache.clear()

    def cache_size(self) -> int:
        """Number of memoized waves."""
        return len(self._cache)

    def __repr__(self) -> str:
        return (
            f"Codebook(dimensions={self._space.dimensions}, "
            f"axes={len(self._axes)}, lexicon={len(self._lexicon)}, "
            f"cached={self.cache_size()})"
        )
