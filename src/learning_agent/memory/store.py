"""SQLite memory store with named collections and vector similarity search."""

import json
import sqlite3
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

import aiosqlite

from learning_agent.core.errors import StoreError
from learning_agent.core.logging import get_logger
from learning_agent.llm.base import Embedder
from learning_agent.memory.base import DEFAULT_SEED, MemoryRecord, ScoredRecord, SeedRecord
from learning_agent.memory.index import VectorIndex

logger = get_logger("memory.store")


def _adapt_datetime(dt: datetime) -> str:
    """Convert datetime to ISO format string for SQLite storage."""
    return dt.isoformat()


# Python 3.12+ deprecates the implicit datetime adapter
sqlite3.register_adapter(datetime, _adapt_datetime)

SCHEMA = """
CREATE TABLE IF NOT EXISTS collections (
    name TEXT PRIMARY KEY,
    created_at DATETIME NOT NULL
);

-- seq is the insertion position; id is its string form
CREATE TABLE IF NOT EXISTS records (
    collection TEXT NOT NULL REFERENCES collections(name),
    seq INTEGER NOT NULL,
    id TEXT NOT NULL,
    text TEXT NOT NULL,
    metadata TEXT NOT NULL,  -- JSON object
    embedding TEXT NOT NULL,  -- JSON array
    created_at DATETIME NOT NULL,
    PRIMARY KEY (collection, seq),
    UNIQUE (collection, id)
);
"""


class SQLiteMemoryStore:
    """One named collection of text records in a SQLite file.

    Records are append-only. A record's id is the number of records in the
    collection when it was added, so ids are unique and increase with
    insertion order. Vectors are mirrored in memory for similarity queries;
    the store has a single writer, so the mirror cannot go stale.
    """

    def __init__(
        self,
        db_path: Path,
        embedder: Embedder,
        seed: Sequence[SeedRecord] = DEFAULT_SEED,
    ):
        self.db_path = db_path
        self.embedder = embedder
        self.seed = list(seed)
        self._conn: aiosqlite.Connection | None = None
        self._name: str | None = None
        self._index: VectorIndex[MemoryRecord] = VectorIndex()

    async def connect(self) -> None:
        """Open database connection and create schema."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = await aiosqlite.connect(self.db_path)
            await self._conn.executescript(SCHEMA)
            await self._conn.commit()
        except (OSError, sqlite3.Error) as e:
            raise StoreError(f"Cannot open memory store at {self.db_path}: {e}") from e
        logger.info(f"Connected to memory store: {self.db_path}")

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    @property
    def conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise StoreError("Memory store not connected. Call connect() first.")
        return self._conn

    @property
    def name(self) -> str:
        if self._name is None:
            raise StoreError("No collection attached. Call initialize() first.")
        return self._name

    async def initialize(self, name: str) -> "SQLiteMemoryStore":
        """Attach to the named collection, creating and seeding it if absent."""
        if not name or not name.strip():
            raise StoreError("Collection name must not be empty")
        if self._conn is None:
            await self.connect()

        try:
            async with self.conn.execute(
                "SELECT name FROM collections WHERE name = ?", (name,)
            ) as cursor:
                found = await cursor.fetchone() is not None

            self._name = name
            self._index = VectorIndex()

            if found:
                logger.info(f"Brain found: {name}")
                await self._load_index()
                return self

            logger.info(f"Brain not found. Creating a new brain: {name}")
            await self.conn.execute(
                "INSERT INTO collections (name, created_at) VALUES (?, ?)",
                (name, datetime.now()),
            )
            await self.conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to open collection {name}: {e}") from e

        for seed in self.seed:
            await self.add(seed.text, seed.metadata)
        logger.info(f"Seeded {len(self.seed)} record(s) into {name}")
        return self

    async def count(self) -> int:
        """Current record count."""
        try:
            async with self.conn.execute(
                "SELECT COUNT(*) FROM records WHERE collection = ?", (self.name,)
            ) as cursor:
                row = await cursor.fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to count records: {e}") from e
        return int(row[0]) if row else 0

    async def add(self, text: str, metadata: dict[str, Any] | None = None) -> MemoryRecord:
        """Append a record; its id is the count at call time."""
        metadata = dict(metadata or {})
        seq = await self.count()
        record = MemoryRecord(id=str(seq), text=text, metadata=metadata)

        try:
            vector = (await self.embedder.embed([text]))[0]
        except Exception as e:
            raise StoreError(f"Failed to embed memory: {e}") from e

        try:
            await self.conn.execute(
                """INSERT INTO records
                   (collection, seq, id, text, metadata, embedding, created_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (
                    self.name,
                    seq,
                    record.id,
                    text,
                    json.dumps(metadata),
                    json.dumps([float(x) for x in vector]),
                    datetime.now(),
                ),
            )
            await self.conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to add memory {record.id}: {e}") from e

        self._index.add([record], [vector])
        logger.debug(f"Added memory {record.id} ({len(text)} chars)")
        return record

    async def similarity_search(self, query: str, k: int) -> list[ScoredRecord]:
        """Up to k records by descending similarity to query."""
        k = min(k, len(self._index))
        if k <= 0:
            return []

        try:
            query_vector = (await self.embedder.embed([query]))[0]
        except Exception as e:
            raise StoreError(f"Failed to embed query: {e}") from e

        results = [
            ScoredRecord(record=record, score=score)
            for record, score in self._index.search(query_vector, k)
        ]
        logger.debug(f"Similarity search returned {len(results)} record(s) for: {query[:80]}")
        return results

    async def list_records(self) -> list[MemoryRecord]:
        """All records in insertion order."""
        return [record for record, _ in await self._fetch_rows()]

    async def _load_index(self) -> None:
        rows = await self._fetch_rows()
        if rows:
            self._index.add([r for r, _ in rows], [v for _, v in rows])
        logger.debug(f"Loaded {len(rows)} vector(s) for {self.name}")

    async def _fetch_rows(self) -> list[tuple[MemoryRecord, list[float]]]:
        rows: list[tuple[MemoryRecord, list[float]]] = []
        try:
            async with self.conn.execute(
                "SELECT id, text, metadata, embedding FROM records "
                "WHERE collection = ? ORDER BY seq",
                (self.name,),
            ) as cursor:
                async for row in cursor:
                    record = MemoryRecord(id=row[0], text=row[1], metadata=json.loads(row[2]))
                    rows.append((record, json.loads(row[3])))
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read records: {e}") from e
        return rows
