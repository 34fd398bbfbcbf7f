"""
ConceptualHierarchy: A graph of concepts with holographic identities.

Each node carries a trace. When a child is attached to a parent, the
parent's trace absorbs the child's via superposition, so abstract
concepts come to resemble everything beneath them. Nodes are keyed by
their lemmatized name.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Union

from holomem.config.constants import SEEDED_TRACE_COMPLEXITY
from holomem.core.lemmatizer import lemmatize
from holomem.core.vector_space import VectorSpace
from holomem.memory.trace import HolographicTrace

logger = logging.getLogger(__name__)


@dataclass
class ConceptNode:
    """
    A single node in the conceptual hierarchy.

    Attributes:
        id: Unique node id (assigned in creation order)
        name: Lemmatized concept name
        trace: Holographic identity of the concept
        parents: Ids of more abstract concepts
        children: Ids of more specific concepts
        domains: Ids of domain concepts this concept belongs to
        abstraction_level: 0 for roots, parent level + 1 otherwise
    """

    id: int
    name: str
    trace: HolographicTrace
    parents: Set[int] = field(default_factory=set)
    children: Set[int] = field(default_factory=set)
    domains: Set[int] = field(default_factory=set)
    abstraction_level: int = 0


class ConceptualHierarchy:
    """
    Manages the graph of concepts.

    Example:
        >>> hierarchy = ConceptualHierarchy()
        >>> hierarchy.learn_relationship_by_name("Poodle", "Dog")
        True
        >>> hierarchy.find_concept_by_name("Poodle").abstraction_level
        1
    """

    def __init__(
        self,
        space: Optional[VectorSpace] = None,
        complexity: int = SEEDED_TRACE_COMPLEXITY,
    ):
        """
        Args:
            space: Storage strategy for seeded traces
            complexity: Length of seeded traces for new concepts
        """
        self._space = space or VectorSpace(dimensions=complexity)
        self._complexity = complexity
        self._nodes: Dict[int, ConceptNode] = {}
        self._name_to_id: Dict[str, int] = {}
        self._next_id = 0

    @staticmethod
    def lemmatize_name(name: str) -> str:
        return lemmatize(name)

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    def add_concept(
        self,
        name: str,
        trace: HolographicTrace,
        parents: Iterable[int] = (),
    ) -> int:
        """
        Add a concept under its lemmatized name.

        Unknown parent ids are recorded but contribute nothing to the
        abstraction level.

        Returns:
            Id of the new node, or of the existing node with that lemma
        """
        lemma = self.lemmatize_name(name)
        existing = self._name_to_id.get(lemma)
        if existing is not None:
            return existing

        node_id = self._next_id
        self._next_id += 1

        parent_set = set(parents)
        node = ConceptNode(
            id=node_id,
            name=lemma,
            trace=trace,
            parents=parent_set,
            abstraction_level=self._abstraction_level(parent_set),
        )
        self._nodes[node_id] = node
        self._name_to_id[lemma] = node_id

        for parent_id in parent_set:
            parent = self._nodes.get(parent_id)
            if parent is not None:
                parent.children.add(node_id)

        logger.debug("Concept added: %s (id=%d)", lemma, node_id)
        return node_id

    def _abstraction_level(self, parent_ids: Set[int]) -> int:
        if not parent_ids:
            return 0
        return max(
            (self._nodes[pid].abstraction_level + 1 if pid in self._nodes else 0)
            for pid in parent_ids
        )

    def find_or_create_concept(self, name: str) -> int:
        """
        Id of the concept named `name`, creating it if needed.

        New concepts get a random seeded trace as their identity.
        """
        lemma = self.lemmatize_name(name)
        existing = self._name_to_id.get(lemma)
        if existing is not None:
            return existing

        trace = HolographicTrace.new_seeded(lemma, self._complexity, self._space)
        return self.add_concept(lemma, trace)

    def add_relationship(self, child_id: int, parent_id: int) -> None:
        """Link two existing concepts without touching traces or levels."""
        if child_id in self._nodes and parent_id in self._nodes:
            self._nodes[child_id].parents.add(parent_id)
            self._nodes[parent_id].children.add(child_id)

    def learn_relationship(self, child_id: int, parent_id: int) -> bool:
        """
        Make `parent_id` a parent of `child_id`.

        The parent's trace absorbs the child's trace, and the child's
        abstraction level (and its descendants') is raised if the new
        parent puts it deeper.

        Returns:
            False for self-parenting or unknown ids, True otherwise
        """
        if child_id == parent_id:
            return False
        if child_id not in self._nodes or parent_id not in self._nodes:
            return False

        child = self._nodes[child_id]
        parent = self._nodes[parent_id]

        parent.trace.combine_with(child.trace.copy())

        parent.children.add(child_id)
        child.parents.add(parent_id)

        new_level = parent.abstraction_level + 1
        if new_level > child.abstraction_level:
            child.abstraction_level = new_level
            for grandchild_id in list(child.children):
                self._raise_levels(grandchild_id, new_level)

        return True

    def learn_relationship_by_name(self, child_name: str, parent_name: str) -> bool:
        """Create both concepts if necessary and link them."""
        child_id = self.find_or_create_concept(child_name)
        parent_id = self.find_or_create_concept(parent_name)
        return self.learn_relationship(child_id, parent_id)

    def _raise_levels(self, node_id: int, parent_level: int) -> None:
        # Iterative walk; stops on subtrees that are already deep enough
        stack = [(node_id, parent_level)]
        while stack:
            current_id, level_above = stack.pop()
            node = self._nodes.get(current_id)
            if node is None:
                continue
            new_level = level_above + 1
            if new_level <= node.abstraction_level:
                continue
            node.abstraction_level = new_level
            stack.extend((child_id, new_level) for child_id in node.children)

    def add_domain_to_concept(self, concept_id: int, domain_id: int) -> bool:
        """Tag a concept with a domain concept. False if either is unknown."""
        if domain_id not in self._nodes:
            return False
        node = self._nodes.get(concept_id)
        if node is None:
            return False
        node.domains.add(domain_id)
        return True

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def find_concept_by_name(self, name: str) -> Optional[ConceptNode]:
        node_id = self._name_to_id.get(self.lemmatize_name(name))
        return self._nodes.get(node_id) if node_id is not None else None

    def get_concept(self, concept_id: int) -> Optional[ConceptNode]:
        return self._nodes.get(concept_id)

    def get_all_concepts(self) -> List[ConceptNode]:
        return list(self._nodes.values())

    def get_all_concept_names(self) -> List[str]:
        """Sorted names of every concept."""
        return sorted(self._name_to_id)

    def get_parents(self, concept_id: int) -> Optional[Set[int]]:
        node = self._nodes.get(concept_id)
        return set(node.parents) if node is not None else None

    def get_children(self, concept_id: int) -> Optional[Set[int]]:
        node = self._nodes.get(concept_id)
        return set(node.children) if node is not None else None

    def get_siblings(self, concept_id: int) -> Set[int]:
        """Concepts sharing at least one parent, excluding the concept itself."""
        siblings: Set[int] = set()
        for parent_id in self.get_parents(concept_id) or ():
            parent = self._nodes.get(parent_id)
            if parent is not None:
                siblings.update(parent.children)
        siblings.discard(concept_id)
        return siblings

    def get_related_concepts(self, concept_name: str) -> List[str]:
        """Names of the direct children of a concept (empty if unknown)."""
        node = self.find_concept_by_name(concept_name)
        if node is None:
            return []
        return [
            self._nodes[child_id].name
            for child_id in node.children
            if child_id in self._nodes
        ]

    # ------------------------------------------------------------------ #
    # Persistence
    # ------------------------------------------------------------------ #

    def save_to_file(self, path: Union[str, Path]) -> None:
        """Write the hierarchy as JSON."""
        from holomem.persistence.serialization import HierarchySerializer

        HierarchySerializer.save(self, Path(path))
        logger.info("Hierarchy saved: %d concepts -> %s", len(self._nodes), path)

    @classmethod
    def load_from_file(cls, path: Union[str, Path]) -> "ConceptualHierarchy":
        """
        Read a hierarchy written by save_to_file().

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a saved hierarchy
        """
        from holomem.persistence.serialization import HierarchySerializer

        hierarchy = HierarchySerializer.load(Path(path))
        logger.info("Hierarchy loaded: %d concepts <- %s", len(hierarchy), path)
        return hierarchy

    @classmethod
    def _restore(
        cls,
        space: VectorSpace,
        complexity: int,
        nodes: Iterable[ConceptNode],
        next_id: int,
    ) -> "ConceptualHierarchy":
        hierarchy = cls(space=space, complexity=complexity)
        for node in nodes:
            hierarchy._nodes[node.id] = node
            hierarchy._name_to_id[node.name] = node.id
        hierarchy._next_id = next_id
        return hierarchy

    @property
    def space(self) -> VectorSpace:
        return self._space

    @property
    def complexity(self) -> int:
        return self._complexity

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConceptualHierarchy):
            return NotImplemented
        return (
            self._nodes == other._nodes
            and self._name_to_id == other._name_to_id
            and self._next_id == other._next_id
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"ConceptualHierarchy(concepts={len(self._nodes)})"
