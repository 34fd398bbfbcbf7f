"""
Shared fixtures for holomem tests.

Provides common test fixtures to avoid duplication across test files.
"""

import pytest

from holomem.container import HolomemContainer
from holomem.core.codebook import Codebook
from holomem.core.focuser import ConceptFocuser
from holomem.core.vector_space import VectorSpace
from holomem.memory.encoder import HolographicEncoder
from holomem.memory.hippocampus import Hippocampus


# =============================================================================
# Core Component Fixtures
# =============================================================================

@pytest.fixture
def dimensions():
    """Standard test dimensions."""
    return 256


@pytest.fixture
def vector_space(dimensions):
    """Create VectorSpace for tests."""
    return VectorSpace(dimensions=dimensions)


@pytest.fixture
def quantized_space(dimensions):
    """Create a Q1.15 VectorSpace for tests."""
    return VectorSpace(dimensions=dimensions, quantized=True)


@pytest.fixture
def codebook(vector_space):
    """Create Codebook for tests."""
    return Codebook(vector_space)


@pytest.fixture
def focuser():
    """Create ConceptFocuser for tests."""
    return ConceptFocuser()


# =============================================================================
# Encoder / Memory Fixtures
# =============================================================================

@pytest.fixture
def encoder(vector_space, codebook):
    """Create HolographicEncoder with a cold (empty) TF-IDF table."""
    return HolographicEncoder(vector_space, codebook)


@pytest.fixture
def hippocampus():
    """Create an empty memory store."""
    return Hippocampus()


@pytest.fixture
def container(dimensions):
    """Create a container."""
    return HolomemContainer(dimensions=dimensions)
