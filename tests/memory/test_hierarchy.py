"""
Tests for ConceptualHierarchy.

Validates:
1. Abstraction levels propagate through the graph
2. Parent traces absorb child traces
3. Graph queries (parents, children, siblings, related)
4. Save/load round trip
"""

import json

import pytest

from holomem.core.vector_space import VectorSpace
from holomem.memory.hierarchy import ConceptualHierarchy


@pytest.fixture
def animals():
    """Small taxonomy learned bottom-up."""
    hierarchy = ConceptualHierarchy()
    for child, parent in [
        ("Poodle", "Dog"),
        ("Beagle", "Dog"),
        ("Dog", "Canid"),
        ("Wolf", "Canid"),
        ("Canid", "Animal"),
        ("Cat", "Animal"),
        ("Lion", "Cat"),
    ]:
        assert hierarchy.learn_relationship_by_name(child, parent)
    return hierarchy


def _level(hierarchy, name):
    return hierarchy.find_concept_by_name(name).abstraction_level


class TestStructure:
    """Test graph building."""

    def test_abstraction_levels(self, animals):
        assert _level(animals, "Animal") == 0
        assert _level(animals, "Canid") == 1
        assert _level(animals, "Cat") == 1
        assert _level(animals, "Dog") == 2
        assert _level(animals, "Wolf") == 2
        assert _level(animals, "Lion") == 2
        assert _level(animals, "Poodle") == 3
        assert _level(animals, "Beagle") == 3

    def test_concept_names(self, animals):
        assert animals.get_all_concept_names() == [
            "Animal", "Beagle", "Canid", "Cat", "Dog", "Lion", "Poodle", "Wolf",
        ]
        assert len(animals) == 8

    def test_find_or_create_is_idempotent(self):
        hierarchy = ConceptualHierarchy()
        first = hierarchy.find_or_create_concept("chats")
        assert hierarchy.find_or_create_concept("chat") == first
        assert hierarchy.find_concept_by_name("chats").name == "chat"
        assert len(hierarchy) == 1

    def test_self_parenting_rejected(self):
        hierarchy = ConceptualHierarchy()
        node_id = hierarchy.find_or_create_concept("Dog")
        assert not hierarchy.learn_relationship(node_id, node_id)
        assert not hierarchy.learn_relationship_by_name("Dog", "Dog")

    def test_unknown_ids_rejected(self):
        hierarchy = ConceptualHierarchy()
        node_id = hierarchy.find_or_create_concept("Dog")
        assert not hierarchy.learn_relationship(node_id, 99)
        assert not hierarchy.learn_relationship(99, node_id)

    def test_add_concept_with_parents(self):
        hierarchy = ConceptualHierarchy()
        root = hierarchy.find_or_create_concept("Animal")
        trace = hierarchy.get_concept(root).trace.copy()
        child = hierarchy.add_concept("Dog", trace, parents=[root])
        assert hierarchy.get_concept(child).abstraction_level == 1
        assert hierarchy.get_children(root) == {child}

    def test_add_domain(self, animals):
        dog = animals.find_concept_by_name("Dog").id
        domain = animals.find_or_create_concept("Biology")
        assert animals.add_domain_to_concept(dog, domain)
        assert animals.get_concept(dog).domains == {domain}
        assert not animals.add_domain_to_concept(dog, 999)
        assert not animals.add_domain_to_concept(999, domain)


class TestTraces:
    """Test holographic identity of concepts."""

    def test_seeded_identity(self):
        hierarchy = ConceptualHierarchy(complexity=16)
        node = hierarchy.get_concept(hierarchy.find_or_create_concept("Dog"))
        assert node.trace.dimensionality == 16
        assert node.trace.concepts == frozenset({"Dog"})

    def test_parent_absorbs_children(self, animals):
        dog = animals.find_concept_by_name("Dog")
        assert {"Dog", "Poodle", "Beagle"} <= set(dog.trace.concepts)
        assert abs(dog.trace.norm() - 1.0) < 1e-5

    def test_parent_resembles_child(self):
        hierarchy = ConceptualHierarchy(complexity=256)
        hierarchy.learn_relationship_by_name("Poodle", "Dog")
        hierarchy.learn_relationship_by_name("Lion", "Cat")
        dog = hierarchy.find_concept_by_name("Dog").trace
        poodle = hierarchy.find_concept_by_name("Poodle").trace
        cat = hierarchy.find_concept_by_name("Cat").trace
        assert dog.cosine_similarity(poodle) > 0.5
        assert abs(dog.cosine_similarity(cat)) < 0.4

    def test_quantized_space(self):
        hierarchy = ConceptualHierarchy(space=VectorSpace(dimensions=10, quantized=True))
        assert hierarchy.learn_relationship_by_name("Poodle", "Dog")
        assert hierarchy.find_concept_by_name("Dog").trace.quantized


class TestQueries:
    """Test graph navigation."""

    def test_parents_and_children(self, animals):
        dog = animals.find_concept_by_name("Dog").id
        canid = animals.find_concept_by_name("Canid").id
        assert animals.get_parents(dog) == {canid}
        assert dog in animals.get_children(canid)
        assert animals.get_parents(999) is None
        assert animals.get_children(999) is None

    def test_siblings(self, animals):
        poodle = animals.find_concept_by_name("Poodle").id
        beagle = animals.find_concept_by_name("Beagle").id
        assert animals.get_siblings(poodle) == {beagle}
        assert animals.get_siblings(999) == set()

    def test_related_concepts(self, animals):
        assert sorted(animals.get_related_concepts("Dog")) == ["Beagle", "Poodle"]
        assert animals.get_related_concepts("Unicorn") == []

    def test_unknown_concept(self, animals):
        assert animals.find_concept_by_name("Unicorn") is None
        assert animals.get_concept(999) is None


class TestPersistence:
    """Test save/load."""

    def test_round_trip(self, animals, tmp_path):
        path = tmp_path / "hierarchy.json"
        animals.save_to_file(path)
        loaded = ConceptualHierarchy.load_from_file(path)
        assert loaded == animals
        assert loaded.next_id == animals.next_id
        assert _level(loaded, "Poodle") == 3

    def test_loaded_hierarchy_keeps_learning(self, animals, tmp_path):
        path = tmp_path / "hierarchy.json"
        animals.save_to_file(path)
        loaded = ConceptualHierarchy.load_from_file(path)
        assert loaded.learn_relationship_by_name("Tiger", "Cat")
        assert loaded.find_concept_by_name("Tiger").id == animals.next_id

    def test_file_is_self_describing(self, animals, tmp_path):
        path = tmp_path / "hierarchy.json"
        animals.save_to_file(path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["kind"] == "concept_hierarchy"
        assert len(data["nodes"]) == 8
        assert "weighted_concepts" in data["nodes"][0]["trace"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConceptualHierarchy.load_from_file(tmp_path / "missing.json")

    def test_wrong_kind(self, tmp_path):
        path = tmp_path / "other.json"
        path.write_text(json.dumps({"kind": "memory_store", "format_version": 1}))
        with pytest.raises(ValueError):
            ConceptualHierarchy.load_from_file(path)
