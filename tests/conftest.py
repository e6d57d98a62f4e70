"""Shared fixtures: deterministic embedder, temporary store, scripted human."""

import re
import zlib
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest

from learning_agent.core.config import AgentConfig
from learning_agent.interfaces.base import Interface, MessageKind
from learning_agent.llm.base import LLMResponse
from learning_agent.memory.store import SQLiteMemoryStore

DIM = 256


class BagOfWordsEmbedder:
    """Hashes lowercase word counts into a fixed-size vector."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    async def embed(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        vectors = []
        for text in texts:
            vector = [0.0] * DIM
            for word in re.findall(r"[a-z0-9]+", text.lower()):
                vector[zlib.crc32(word.encode()) % DIM] += 1.0
            vectors.append(vector)
        return vectors


class ScriptedInterface(Interface):
    """Replies to prompts from a fixed script and records everything shown."""

    def __init__(self, *replies: str):
        self.replies = list(replies)
        self.prompts: list[str] = []
        self.shown: list[tuple[str, MessageKind]] = []

    async def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.replies:
            raise EOFError
        return self.replies.pop(0)

    def show(self, text: str, kind: MessageKind = MessageKind.STATUS) -> None:
        self.shown.append((text, kind))

    @property
    def text(self) -> str:
        return "\n".join(text for text, _ in self.shown)


def llm_response(content: str) -> LLMResponse:
    return LLMResponse(content=content, model="test-model")


@pytest.fixture
def embedder():
    return BagOfWordsEmbedder()


@pytest.fixture
async def store(tmp_path: Path, embedder):
    """Seeded store attached to a fresh collection."""
    memory = SQLiteMemoryStore(tmp_path / "brain.db", embedder)
    await memory.initialize("test-brain")
    yield memory
    await memory.close()


@pytest.fixture
async def empty_store(tmp_path: Path, embedder):
    """Store created without seed records."""
    memory = SQLiteMemoryStore(tmp_path / "empty.db", embedder, seed=[])
    await memory.initialize("empty-brain")
    yield memory
    await memory.close()


@pytest.fixture
def mock_llm():
    """LLM provider whose complete() is an AsyncMock."""
    llm = Mock()
    llm.complete = AsyncMock()
    return llm


@pytest.fixture
def agent_config():
    return AgentConfig(
        model="test-model",
        recall_temperature=0.0,
        search_temperature=0.3,
        agent_type="chat-zero-shot-react-description",
        search_max_attempts=3,
        search_backoff_seconds=0.0,
        max_iterations=5,
    )
