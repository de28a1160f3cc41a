"""Bounded memory store.

Entries are kept in insertion order. When the store is full, the entry with
the lowest importance is evicted (first one wins on ties) before the new
entry is appended. Recall ranks entries by ``relevance * importance`` where
relevance comes from an injected async scorer, usually backed by an oracle.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime

logger = logging.getLogger(__name__)

# (content, query) -> relevance in [0, 1]
RelevanceScorer = Callable[[str, str], Awaitable[float]]


@dataclass(frozen=True)
class MemoryEntry:
    """A single remembered item."""

    content: str
    importance: float = 1.0
    timestamp: datetime = field(default_factory=datetime.now)


class MemoryStore:
    """Fixed-capacity, ordered collection of memory entries.

    Not safe for concurrent mutation. ``recall`` snapshots the entries before
    its first await, so interleaved adds or prunes do not affect a recall
    already in flight.
    """

    def __init__(
        self,
        capacity: int = 100,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        if capacity < 0:
            raise ValueError(f"Memory capacity must be >= 0, got {capacity}")
        self.capacity = capacity
        self._clock = clock
        self._entries: list[MemoryEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def count(self) -> int:
        return len(self._entries)

    def entries(self) -> tuple[MemoryEntry, ...]:
        return tuple(self._entries)

    # ── Insertion & eviction ──────────────────────────────────

    def add(
        self,
        content: str,
        importance: float = 1.0,
        *,
        timestamp: datetime | None = None,
    ) -> MemoryEntry | None:
        """Store a new memory, evicting the least important one if full.

        A zero-capacity store keeps nothing and returns None.
        """
        if self.capacity == 0:
            logger.debug("Zero-capacity store, dropping memory: %s", content[:80])
            return None

        if len(self._entries) >= self.capacity:
            evicted = self._evict_least_important()
            logger.debug(
                "Evicted memory (importance=%s): %s", evicted.importance, evicted.content[:80]
            )

        entry = MemoryEntry(content, importance, timestamp or self._clock())
        self._entries.append(entry)
        return entry

    def _evict_least_important(self) -> MemoryEntry:
        # min() returns the first minimal element, which is the tie-break we want.
        index = min(range(len(self._entries)), key=lambda i: self._entries[i].importance)
        return self._entries.pop(index)

    # ── Recall ────────────────────────────────────────────────

    async def recall_scored(
        self,
        query: str,
        max_results: int = 5,
        *,
        scorer: RelevanceScorer,
    ) -> list[tuple[float, MemoryEntry]]:
        """Rank entries by ``scorer(content, query) * importance``, best first.

        Scorer calls are issued one after another, so latency grows linearly
        with the number of stored entries. Equal scores keep store order.
        """
        if max_results <= 0:
            return []

        snapshot = list(self._entries)
        ranked: list[tuple[float, MemoryEntry]] = []
        for entry in snapshot:
            relevance = await scorer(entry.content, query)
            ranked.append((relevance * entry.importance, entry))

        ranked.sort(key=lambda pair: pair[0], reverse=True)
        return ranked[:max_results]

    async def recall(
        self,
        query: str,
        max_results: int = 5,
        *,
        scorer: RelevanceScorer,
    ) -> list[str]:
        """Return the contents of the ``max_results`` most relevant memories."""
        ranked = await self.recall_scored(query, max_results, scorer=scorer)
        return [entry.content for _, entry in ranked]

    # ── Pruning ───────────────────────────────────────────────

    def clear_oldest(self, count: int) -> int:
        """Remove the ``count`` oldest memories. Returns how many were removed."""
        if count <= 0 or not self._entries:
            return 0

        self._entries.sort(key=lambda e: e.timestamp)
        removed = min(count, len(self._entries))
        del self._entries[:removed]
        logger.info("Pruned %d oldest memories (%d remaining)", removed, len(self._entries))
        return removed

    # ── Display ───────────────────────────────────────────────

    def format(self) -> str:
        return "\n".join(
            f"- {entry.content} (Importance: {entry.importance:g})" for entry in self._entries
        )
