"""
Tests for Codebook reference-wave generation.

Validates:
1. Hash waves are deterministic across independent instances
2. Waves are unit vectors of the right shape and dtype
3. Lexicon concepts are composed from semantic axes
4. Cache behaviour
"""

import pytest
import torch

from holomem.core.codebook import Codebook
from holomem.core.similarity import Similarity
from holomem.core.vector_space import VectorSpace


class TestHashWaves:
    """Test deterministic waves for arbitrary concepts."""

    def test_deterministic_across_instances(self, vector_space):
        """Two codebooks with no shared state produce the same wave."""
        concept = "xyzzy_unique_test_concept_12345"
        a = Codebook(vector_space).generate_wave(concept)
        b = Codebook(vector_space).generate_wave(concept)
        assert torch.allclose(a, b, atol=1e-6)

    def test_shape_and_dtype(self, codebook, dimensions):
        wave = codebook.generate_wave("apple")
        assert wave.shape == (dimensions,)
        assert wave.dtype == torch.complex64

    @pytest.mark.parametrize("concept", ["apple", "sky blue", "e=mc²", "", "état"])
    def test_unit_norm(self, codebook, concept):
        wave = codebook.generate_wave(concept)
        assert abs(VectorSpace.norm(wave) - 1.0) < 1e-6

    def test_different_concepts_nearly_orthogonal(self, codebook):
        a = codebook.generate_wave("apple")
        b = codebook.generate_wave("orange")
        assert abs(Similarity.cosine(a, b)) < 0.3

    def test_seed_uses_full_digest(self):
        """The seed is the whole 256-bit SHA-256 digest."""
        seed = Codebook._hash_to_seed("apple")
        assert seed.bit_length() > 64
        assert seed == Codebook._hash_to_seed("apple")


class TestLexicon:
    """Test semantic-field waves."""

    @pytest.fixture
    def semantic_codebook(self, vector_space):
        return Codebook(
            vector_space,
            lexicon={"joy": {"valence": 1.0, "arousal": 0.5}},
            axes=["valence", "arousal"],
        )

    def test_has_concept(self, semantic_codebook):
        assert semantic_codebook.has_concept("joy")
        assert not semantic_codebook.has_concept("sorrow")
        assert semantic_codebook.axes == ["arousal", "valence"]

    def test_lexicon_wave_follows_axes(self, semantic_codebook):
        joy = semantic_codebook.generate_wave("joy")
        valence = semantic_codebook.hash_wave("__AXIS_valence__")
        assert abs(VectorSpace.norm(joy) - 1.0) < 1e-6
        assert Similarity.cosine(joy, valence) > 0.8

    def test_lexicon_wave_differs_from_hash_wave(self, semantic_codebook):
        joy = semantic_codebook.generate_wave("joy")
        assert not torch.allclose(joy, semantic_codebook.hash_wave("joy"))

    def test_unknown_axes_give_zero_wave(self, semantic_codebook):
        semantic_codebook.add_lexicon_entry("void", {"missing": 1.0})
        assert VectorSpace.norm(semantic_codebook.generate_wave("void")) == 0.0

    def test_new_entry_invalidates_cache(self, semantic_codebook):
        before = semantic_codebook.generate_wave("calm")
        semantic_codebook.add_lexicon_entry("calm", {"arousal": -1.0})
        after = semantic_codebook.generate_wave("calm")
        assert not torch.allclose(before, after)

    def test_explicit_axis_vector(self, vector_space):
        axis = torch.zeros(vector_space.dimensions, dtype=torch.complex64)
        axis[0] = 1.0
        book = Codebook(vector_space, lexicon={"one": {"x": 2.0}}, axes={"x": axis})
        assert torch.allclose(book.generate_wave("one"), axis)

    def test_axis_vector_wrong_shape_raises(self, codebook):
        with pytest.raises(ValueError):
            codebook.register_axis("bad", torch.zeros(3, dtype=torch.complex64))


class TestCache:
    """Test wave memoization."""

    def test_cache_grows_and_clears(self, codebook):
        assert codebook.cache_size() == 0
        codebook.generate_wave("alpha")
        codebook.generate_wave("beta")
        codebook.generate_wave("alpha")
        assert codebook.cache_size() == 2
        codebook.clear_cache()
        assert codebook.cache_size() == 0

    def test_cached_wave_is_reused(self, codebook):
        assert codebook.generate_wave("alpha") is codebook.generate_wave("alpha")

    def test_regenerated_after_clear(self, codebook):
        first = codebook.generate_wave("alpha")
        codebook.clear_cache()
        assert torch.equal(first, codebook.generate_wave("alpha"))

    def test_cache_is_bounded(self, vector_space):
        book = Codebook(vector_space, cache_size=3)
        for concept in ["a", "b", "c", "d", "e"]:
            book.generate_wave(concept)
        assert book.cache_size() == 3

    def test_lexicon_change_during_generation_not_cached(self, vector_space):
        """A wave computed before a lexicon change is not memoized."""
        book = Codebook(vector_space, axes=["arousal"])
        compute_hash_wave = book.hash_wave

        def hash_wave_then_add_entry(concept):
            wave = compute_hash_wave(concept)
            if concept == "calm" and not book.has_concept("calm"):
                book.add_lexicon_entry("calm", {"arousal": 1.0})
            return wave

        book.hash_wave = hash_wave_then_add_entry
        book.generate_wave("calm")

        served = book.generate_wave("calm")
        arousal = compute_hash_wave("__AXIS_arousal__")
        assert torch.allclose(served, arousal, atol=1e-6)

    def test_axis_change_during_generation_not_cached(self, vector_space):
        book = Codebook(vector_space, lexicon={"joy": {"valence": 1.0}}, axes=["valence"])
        replacement = torch.zeros(vector_space.dimensions, dtype=torch.complex64)
        replacement[0] = 1.0
        compute_lexicon_wave = book._lexicon_wave

        def lexicon_wave_then_replace_axis(coordinates, axes):
            wave = compute_lexicon_wave(coordinates, axes)
            if not torch.equal(axes["valence"], replacement):
                book.register_axis("valence", replacement)
            return wave

        book._lexicon_wave = lexicon_wave_then_replace_axis
        book.generate_wave("joy")

        assert torch.allclose(book.generate_wave("joy"), replacement)
