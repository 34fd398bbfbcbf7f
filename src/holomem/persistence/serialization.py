"""
Serialization utilities for traces, memory stores and hierarchies.

Everything is written as self-describing JSON: field names match the
in-memory structures (weighted_concepts, interference_pattern, relevance,
superposition_pattern), and complex patterns are lists of [real, imag]
pairs. Quantized patterns keep their raw Q1.15 integers, so a save/load
round trip is exact for both storage strategies.

Design:
- Each file carries a format version and the dimensionality it was
  written with; loads validate both before restoring anything
- Reference waves are never saved; they are regenerated from concept
  names by the Codebook
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import torch

from holomem.config.constants import FORMAT_VERSION
from holomem.core.vector_space import VectorSpace
from holomem.memory.hierarchy import ConceptNode, ConceptualHierarchy
from holomem.memory.hippocampus import Hippocampus, HolographicMemory
from holomem.memory.trace import HolographicTrace, WeightedConcept


class JsonSerializer:
    """Simple JSON serializer for dictionaries and lists."""

    @staticmethod
    def save(obj: Any, path: Path) -> None:
        """Save object as JSON."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(obj, f, indent=2, ensure_ascii=False)

    @staticmethod
    def load(path: Path) -> Any:
        """Load object from JSON."""
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)


def _check_version(data: Dict[str, Any], kind: str, path: Path) -> None:
    if not isinstance(data, dict) or data.get("kind") != kind:
        raise ValueError(f"{path} is not a saved {kind}")
    if data.get("format_version") != FORMAT_VERSION:
        raise ValueError(
            f"{path} has format version {data.get('format_version')}, "
            f"expected {FORMAT_VERSION}"
        )


class TraceSerializer:
    """
    Conversion between HolographicTrace and JSON-ready dictionaries.

    Example:
        >>> data = TraceSerializer.to_dict(trace)
        >>> TraceSerializer.from_dict(data) == trace
        True
    """

    @staticmethod
    def pattern_to_list(pattern: torch.Tensor, quantized: bool) -> List[List[Any]]:
        if quantized:
            return pattern.to(torch.int64).tolist()
        return torch.view_as_real(pattern).tolist()

    @staticmethod
    def pattern_from_list(values: List[List[Any]], quantized: bool) -> torch.Tensor:
        if quantized:
            return torch.tensor(values, dtype=torch.int16).reshape(-1, 2)
        parts = torch.tensor(values, dtype=torch.float32).reshape(-1, 2)
        return torch.view_as_complex(parts.contiguous())

    @staticmethod
    def to_dict(trace: HolographicTrace) -> Dict[str, Any]:
        quantized = trace.quantized
        return {
            "quantized": quantized,
            "dimensionality": trace.dimensionality,
            "weighted_concepts": {
                name: {
                    "interference_pattern": TraceSerializer.pattern_to_list(
                        concept.interference_pattern, quantized
                    ),
                    "relevance": concept.relevance,
                }
                for name, concept in trace.weighted_concepts.items()
            },
            "superposition_pattern": TraceSerializer.pattern_to_list(
                trace.stored_superposition, quantized
            ),
        }

    @staticmethod
    def from_dict(
        data: Dict[str, Any],
        space: Optional[VectorSpace] = None,
    ) -> HolographicTrace:
        """
        Rebuild a trace.

        Args:
            data: Output of to_dict()
            space: Space to attach (default: one matching the saved data)

        Raises:
            ValueError: If the saved storage strategy differs from `space`
        """
        quantized = bool(data["quantized"])
        if space is None:
            space = VectorSpace(
                dimensions=max(int(data["dimensionality"]), 1), quantized=quantized
            )
        elif space.quantized != quantized:
            raise ValueError(
                f"Saved trace quantized={quantized} does not match {space!r}"
            )

        concepts = {
            name: WeightedConcept(
                TraceSerializer.pattern_from_list(
                    entry["interference_pattern"], quantized
                ),
                float(entry["relevance"]),
            )
            for name, entry in data["weighted_concepts"].items()
        }
        superposition = TraceSerializer.pattern_from_list(
            data["superposition_pattern"], quantized
        )
        return HolographicTrace(concepts, superposition, space)


class MemoryStoreSerializer:
    """
    Save/load a Hippocampus as one JSON file.

    Traces are stored as-is rather than re-encoded on load, so a restored
    store ranks exactly like the saved one even if the encoder's TF-IDF
    table has changed since.
    """

    KIND = "memory_store"

    @staticmethod
    def save(store: Hippocampus, path: Path, name: str = "memories") -> Path:
        """
        Save a memory store.

        Args:
            store: Hippocampus to serialize
            path: Directory to save in
            name: Base filename (creates name.json)

        Returns:
            Path of the written file
        """
        memories = store.memories
        dimensions = memories[0].trace.dimensionality if memories else None
        data = {
            "kind": MemoryStoreSerializer.KIND,
            "format_version": FORMAT_VERSION,
            "dimensions": dimensions,
            "count": len(memories),
            "memories": [
                {
                    "text": memory.text,
                    "is_axiom": memory.is_axiom,
                    "trace": TraceSerializer.to_dict(memory.trace),
                }
                for memory in memories
            ],
        }
        file_path = Path(path) / f"{name}.json"
        JsonSerializer.save(data, file_path)
        return file_path

    @staticmethod
    def load(path: Path, space: VectorSpace, name: str = "memories") -> Hippocampus:
        """
        Load a memory store.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a memory store, or its
                        dimensionality / count do not match
        """
        file_path = Path(path) / f"{name}.json"
        if not file_path.exists():
            raise FileNotFoundError(f"Memory store not found: {file_path}")

        data = JsonSerializer.load(file_path)
        _check_version(data, MemoryStoreSerializer.KIND, file_path)

        if data["dimensions"] is not None and data["dimensions"] != space.dimensions:
            raise ValueError(
                f"Saved memories dimensions {data['dimensions']} != "
                f"VectorSpace dimensions {space.dimensions}"
            )
        if data["count"] != len(data["memories"]):
            raise ValueError(
                f"{file_path} declares {data['count']} memories "
                f"but contains {len(data['memories'])}"
            )

        store = Hippocampus()
        for entry in data["memories"]:
            trace = TraceSerializer.from_dict(entry["trace"], space)
            store.append(HolographicMemory(entry["text"], trace, bool(entry["is_axiom"])))
        return store


class HierarchySerializer:
    """Save/load a ConceptualHierarchy as one JSON file."""

    KIND = "concept_hierarchy"

    @staticmethod
    def save(hierarchy: ConceptualHierarchy, path: Path) -> None:
        data = {
            "kind": HierarchySerializer.KIND,
            "format_version": FORMAT_VERSION,
            "complexity": hierarchy.complexity,
            "quantized": hierarchy.space.quantized,
            "next_id": hierarchy.next_id,
            "nodes": [
                {
                    "id": node.id,
                    "name": node.name,
                    "trace": TraceSerializer.to_dict(node.trace),
                    "parents": sorted(node.parents),
                    "children": sorted(node.children),
                    "domains": sorted(node.domains),
                    "abstraction_level": node.abstraction_level,
                }
                for node in sorted(hierarchy.get_all_concepts(), key=lambda n: n.id)
            ],
        }
        JsonSerializer.save(data, Path(path))

    @staticmethod
    def load(path: Path) -> ConceptualHierarchy:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Hierarchy not found: {path}")

        data = JsonSerializer.load(path)
        _check_version(data, HierarchySerializer.KIND, path)

        complexity = int(data["complexity"])
        space = VectorSpace(dimensions=complexity, quantized=bool(data["quantized"]))
        nodes = [
            ConceptNode(
                id=int(entry["id"]),
                name=entry["name"],
                trace=TraceSerializer.from_dict(entry["trace"], space),
                parents=set(entry["parents"]),
                children=set(entry["children"]),
                domains=set(entry["domains"]),
                abstraction_level=int(entry["abstraction_level"]),
            )
            for entry in data["nodes"]
        ]
        return ConceptualHierarchy._restore(space, complexity, nodes, int(data["next_id"]))


def save_memories(store: Hippocampus, directory: str, name: str = "memories") -> Path:
    """Convenience function to save a memory store."""
    return MemoryStoreSerializer.save(store, Path(directory), name)


def load_memories(directory: str, space: VectorSpace, name: str = "memories") -> Hippocampus:
    """Convenience function to load a memory store."""
    return MemoryStoreSerializer.load(Path(directory), space, name)
