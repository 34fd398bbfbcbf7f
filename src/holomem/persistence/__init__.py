"""Persistence layer for traces, memory stores and hierarchies."""

from holomem.persistence.serialization import (
    HierarchySerializer,
    JsonSerializer,
    MemoryStoreSerializer,
    TraceSerializer,
    load_memories,
    save_memories,
)

__all__ = [
    "JsonSerializer",
    "TraceSerializer",
    "MemoryStoreSerializer",
    "HierarchySerializer",
    "save_memories",
    "load_memories",
]
