"""
Hippocampus: Append-only holographic memory store.

Every learned text is kept with its trace and an axiom flag. Retrieval
ranks memories by trace distance to a query trace and removes
text-duplicates, so the same sentence learned twice (with slightly
different TF-IDF traces) is only returned once.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from holomem.config.constants import LOGGED_SEARCH_RESULTS
from holomem.core.locks import ReadWriteLock
from holomem.memory.trace import HolographicTrace

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class HolographicMemory:
    """
    A learned text paired with its holographic representation.

    Records compare and hash by identity; the same text learned twice is
    two distinct memories.

    Attributes:
        text: Original text
        trace: Trace encoded from the text
        is_axiom: Foundational knowledge, searchable on its own
    """

    text: str
    trace: HolographicTrace
    is_axiom: bool = False

    @classmethod
    def from_text(cls, text: str, encoder, is_axiom: bool = False) -> "HolographicMemory":
        """Encode `text` with `encoder` and wrap it as a memory."""
        return cls(text, encoder.encode(text), is_axiom)

    def __str__(self) -> str:
        marker = " [axiom]" if self.is_axiom else ""
        return f"{self.text}{marker}"


class Hippocampus:
    """
    Append-only store of HolographicMemory records.

    Appends take the exclusive side of a reader/writer lock and scans take
    the shared side, so a similarity scan never observes a list that is
    being mutated.

    Example:
        >>> store = Hippocampus()
        >>> store.add_memory("the sky is blue", encoder.encode("the sky is blue"))
        >>> results = store.find_similar(encoder.encode("sky"), top_k=3)
        >>> results[0][0].text
        'the sky is blue'
    """

    def __init__(self) -> None:
        self._memories: List[HolographicMemory] = []
        self._lock = ReadWriteLock()

    def add_memory(
        self,
        text: str,
        trace: HolographicTrace,
        is_axiom: bool = False,
    ) -> HolographicMemory:
        """
        Append a new memory.

        The trace is copied so later combine_with() calls on the caller's
        object cannot change what is stored.

        Returns:
            The stored record
        """
        memory = HolographicMemory(text, trace.copy(), is_axiom)
        self.append(memory)
        return memory

    def append(self, memory: HolographicMemory) -> None:
        """Append an already-built record."""
        with self._lock.write_locked():
            self._memories.append(memory)

        if memory.is_axiom:
            logger.debug("Foundational axiom encoded: %r", memory.text)
        else:
            logger.debug("New holographic memory encoded: %r", memory.text)

    def find_similar(
        self,
        query_trace: HolographicTrace,
        top_k: int,
        axiom_only: bool = False,
    ) -> List[Tuple[HolographicMemory, float]]:
        """
        Find the closest memories to a query trace.

        Args:
            query_trace: Encoded query
            top_k: Maximum number of results (distinct texts)
            axiom_only: Restrict the search to axioms

        Returns:
            (memory, distance) pairs, ascending by distance, unique by text.
            Ties keep insertion order.
        """
        if top_k <= 0:
            return []

        with self._lock.read_locked():
            if axiom_only:
                candidates = [m for m in self._memories if m.is_axiom]
            else:
                candidates = list(self._memories)

        if not candidates:
            return []

        logger.debug(
            "Searching %s (%d candidates)",
            "foundational axioms" if axiom_only else "full knowledge base",
            len(candidates),
        )

        scored = []
        for memory in candidates:
            distance = query_trace.distance(memory.trace)
            if not math.isnan(distance):
                scored.append((memory, distance))

        # sorted() is stable: equal distances keep insertion order
        scored.sort(key=lambda pair: pair[1])

        if logger.isEnabledFor(logging.DEBUG):
            for memory, distance in scored[:LOGGED_SEARCH_RESULTS]:
                logger.debug("  distance=%.4f text=%r", distance, memory.text)

        results: List[Tuple[HolographicMemory, float]] = []
        seen_texts = set()
        for memory, distance in scored:
            if memory.text in seen_texts:
                continue
            seen_texts.add(memory.text)
            results.append((memory, distance))
            if len(results) >= top_k:
                break

        return results

    def best_match(
        self,
        query_trace: HolographicTrace,
        axiom_only: bool = False,
    ) -> Optional[Tuple[HolographicMemory, float]]:
        """Closest memory and its distance, or None for an empty scope."""
        results = self.find_similar(query_trace, 1, axiom_only)
        return results[0] if results else None

    # ------------------------------------------------------------------ #
    # Snapshots
    # ------------------------------------------------------------------ #

    @property
    def memories(self) -> Tuple[HolographicMemory, ...]:
        """Snapshot of every memory in insertion order."""
        with self._lock.read_locked():
            return tuple(self._memories)

    @property
    def axioms(self) -> Tuple[HolographicMemory, ...]:
        with self._lock.read_locked():
            return tuple(m for m in self._memories if m.is_axiom)

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._memories)

    def __iter__(self) -> Iterator[HolographicMemory]:
        return iter(self.memories)

    def __repr__(self) -> str:
        memories = self.memories
        axioms = sum(1 for m in memories if m.is_axiom)
        return f"Hippocampus(memories={len(memories)}, axioms={axioms})"
