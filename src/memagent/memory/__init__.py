"""Bounded in-process memory — importance-based eviction, relevance-ranked recall.

The store lives for as long as its owning agent; nothing is written to disk.
"""

from memagent.memory.store import MemoryEntry, MemoryStore

__all__ = ["MemoryEntry", "MemoryStore"]
