"""In-memory cosine similarity index.

Vectors are L2-normalized on insert so a dot product is the cosine score.
Entries keep insertion order; ties in score keep it too.
"""

from collections.abc import Sequence
from typing import Generic, TypeVar

import numpy as np

from learning_agent.core.typing import Vector
from learning_agent.llm.base import Embedder

T = TypeVar("T")


class VectorIndex(Generic[T]):
    """Flat inner-product index over normalized vectors."""

    def __init__(self) -> None:
        self._items: list[T] = []
        self._matrix: np.ndarray | None = None

    def __len__(self) -> int:
        return len(self._items)

    def add(self, items: Sequence[T], vectors: Sequence[Vector]) -> None:
        if len(items) != len(vectors):
            raise ValueError(f"Got {len(items)} items but {len(vectors)} vectors")
        if not items:
            return

        block = _normalize(np.asarray(vectors, dtype=np.float32))
        if self._matrix is None:
            self._matrix = block
        else:
            if block.shape[1] != self._matrix.shape[1]:
                raise ValueError(
                    f"Vector dimension {block.shape[1]} does not match index "
                    f"dimension {self._matrix.shape[1]}"
                )
            self._matrix = np.vstack([self._matrix, block])
        self._items.extend(items)

    def search(self, query: Vector, k: int) -> list[tuple[T, float]]:
        """Return up to k (item, score) pairs by descending cosine similarity."""
        if self._matrix is None or k <= 0:
            return []

        q = _normalize(np.asarray([query], dtype=np.float32))[0]
        scores = self._matrix @ q
        k = min(k, len(self._items))
        # Stable sort keeps insertion order among equal scores
        order = np.argsort(-scores, kind="stable")[:k]
        return [(self._items[i], float(scores[i])) for i in order.tolist()]

    @classmethod
    async def from_texts(cls, texts: list[str], embedder: Embedder) -> "VectorIndex[str]":
        """Embed texts and index them. Nothing is persisted."""
        index: VectorIndex[str] = cls()
        if texts:
            index.add(texts, await embedder.embed(texts))
        return index


def _normalize(matrix: np.ndarray) -> np.ndarray:
    if matrix.ndim != 2:
        raise ValueError("Expected a 2-D array of vectors")
    norms = np.linalg.norm(matrix, axis=1, keepdims=True)
    norms[norms == 0] = 1.0
    return matrix / norms
