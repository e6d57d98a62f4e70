"""
Memory module - the vector-indexed knowledge store ("brain").

- base: Record types and seed data
- store: SQLite-backed named collections with similarity search
- index: In-memory cosine index (used for the store mirror and recall chunks)
- splitter: Recursive character text splitter

Storage: SQLite (aiosqlite); vectors from an injected Embedder.
"""

from learning_agent.memory.base import DEFAULT_SEED, MemoryRecord, ScoredRecord, SeedRecord
from learning_agent.memory.store import SQLiteMemoryStore

__all__ = ["DEFAULT_SEED", "MemoryRecord", "SQLiteMemoryStore", "ScoredRecord", "SeedRecord"]
