"""
Memory record types.
"""

from dataclasses import dataclass, field
from typing import Any

# Recall never looks at more than this many records
MAX_RECALL_RECORDS = 5


@dataclass(frozen=True)
class MemoryRecord:
    """Single memory record. Never mutated once stored."""

    id: str
    text: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ScoredRecord:
    """Record returned by a similarity query."""

    record: MemoryRecord
    score: float  # cosine similarity, higher is closer


@dataclass(frozen=True)
class SeedRecord:
    """Initial record inserted when a collection is created."""

    text: str
    metadata: dict[str, Any] = field(default_factory=dict)


DEFAULT_SEED: tuple[SeedRecord, ...] = (
    SeedRecord(
        "reddit.com is a great source for gathering information about anything "
        "in the social zeitgeist"
    ),
    SeedRecord(
        "You can teach yourself any programming language by visiting github.com "
        "and searching for the language you want to learn."
    ),
)
