"""
Tests for the Hippocampus memory store.

Validates:
1. Retrieval ordering and the top_k bound
2. Deduplication by text
3. Axiom-only search
4. Empty-store and concurrency behaviour
"""

import threading

import pytest

from holomem.memory.hippocampus import Hippocampus, HolographicMemory


@pytest.fixture
def learned(encoder, hippocampus):
    """Store with two memories, TF-IDF rebuilt, then a duplicate text."""
    for text in ["the sky is blue", "the grass is green"]:
        hippocampus.add_memory(text, encoder.encode(text))
    encoder.build_document_frequency(hippocampus.memories)
    # Same text again, now with a different (TF-IDF weighted) trace
    hippocampus.add_memory("the sky is blue", encoder.encode("the sky is blue"))
    return hippocampus


class TestAppend:
    """Test storing memories."""

    def test_add_memory(self, encoder, hippocampus):
        memory = hippocampus.add_memory("sky", encoder.encode("sky"), is_axiom=True)
        assert isinstance(memory, HolographicMemory)
        assert memory.is_axiom
        assert len(hippocampus) == 1
        assert hippocampus.memories == (memory,)
        assert hippocampus.axioms == (memory,)

    def test_trace_is_copied(self, encoder, hippocampus):
        trace = encoder.encode("sky blue")
        memory = hippocampus.add_memory("sky blue", trace)
        trace.combine_with(encoder.encode("grass green"))
        assert memory.trace != trace
        assert memory.trace.concepts == frozenset({"sky", "blue", "sky blue"})

    def test_from_text(self, encoder):
        memory = HolographicMemory.from_text("the sky is blue", encoder)
        assert memory.text == "the sky is blue"
        assert "sky" in memory.trace
        assert str(memory) == "the sky is blue"

    def test_memories_are_hashable(self, encoder, hippocampus):
        first = hippocampus.add_memory("sky", encoder.encode("sky"))
        second = hippocampus.add_memory("sky", encoder.encode("sky"))
        assert isinstance(hash(first), int)
        assert {first, second, first} == {first, second}
        assert first != second

    def test_memories_snapshot(self, encoder, hippocampus):
        hippocampus.add_memory("one", encoder.encode("one"))
        snapshot = hippocampus.memories
        hippocampus.add_memory("two", encoder.encode("two"))
        assert len(snapshot) == 1
        assert [m.text for m in hippocampus] == ["one", "two"]


class TestFindSimilar:
    """Test similarity retrieval."""

    def test_empty_store(self, encoder, hippocampus):
        assert hippocampus.find_similar(encoder.encode("sky"), 5) == []
        assert hippocampus.best_match(encoder.encode("sky")) is None

    def test_deduplicates_by_text(self, encoder, learned):
        results = learned.find_similar(encoder.encode("sky"), 5)
        texts = [memory.text for memory, _ in results]
        assert len(results) <= 2
        assert len(texts) == len(set(texts))
        assert texts[0] == "the sky is blue"

    def test_ascending_distance(self, encoder, learned):
        results = learned.find_similar(encoder.encode("grass"), 5)
        distances = [distance for _, distance in results]
        assert distances == sorted(distances)
        assert results[0][0].text == "the grass is green"

    @pytest.mark.parametrize("top_k, expected", [(0, 0), (-1, 0), (3, 3), (10, 5)])
    def test_top_k_bound(self, encoder, hippocampus, top_k, expected):
        for text in ["red apple", "green pear", "yellow banana", "purple grape", "orange citrus"]:
            hippocampus.add_memory(text, encoder.encode(text))
        results = hippocampus.find_similar(encoder.encode("apple"), top_k)
        assert len(results) == expected

    def test_ties_keep_insertion_order(self, encoder, hippocampus):
        trace = encoder.encode("identical trace")
        hippocampus.add_memory("first", trace)
        hippocampus.add_memory("second", trace)
        results = hippocampus.find_similar(encoder.encode("identical"), 2)
        assert [m.text for m, _ in results] == ["first", "second"]

    def test_best_match(self, encoder, learned):
        memory, distance = learned.best_match(encoder.encode("blue sky"))
        assert memory.text == "the sky is blue"
        assert 0.0 <= distance < 1.0


class TestAxioms:
    """Test axiom-only retrieval."""

    def test_axiom_only(self, encoder, hippocampus):
        hippocampus.add_memory("i am a holographic mind", encoder.encode("i am a holographic mind"), is_axiom=True)
        hippocampus.add_memory("holographic memory is distributed", encoder.encode("holographic memory is distributed"))
        results = hippocampus.find_similar(encoder.encode("holographic"), 5, axiom_only=True)
        assert len(results) == 1
        assert all(memory.is_axiom for memory, _ in results)

    def test_axiom_only_without_axioms(self, encoder, learned):
        assert learned.find_similar(encoder.encode("sky"), 5, axiom_only=True) == []


class TestConcurrency:
    """Test scans racing appends."""

    def test_append_during_scan(self, encoder):
        store = Hippocampus()
        errors = []
        query = encoder.encode("memory")

        def writer(offset):
            try:
                for i in range(25):
                    text = f"memory {offset + i}"
                    store.add_memory(text, encoder.encode(text))
            except Exception as exc:  # pragma: no cover - reported below
                errors.append(exc)

        def reader():
            try:
                for _ in range(25):
                    store.find_similar(query, 3)
            except Exception as exc:  # pragma: no cover - reported below
                errors.append(exc)

        threads = [threading.Thread(target=writer, args=(n * 100,)) for n in range(2)]
        threads += [threading.Thread(target=reader) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert not errors
        assert len(store) == 50
