"""
LLM provider interface.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from learning_agent.core.typing import MessageDict, Vector


@dataclass
class LLMResponse:
    """Response from LLM provider."""

    content: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    metadata: dict | None = None


@dataclass
class LLMConfig:
    """Configuration for LLM call."""

    model: str
    temperature: float = 0.7
    max_tokens: int | None = None


@runtime_checkable
class LLMProvider(Protocol):
    """Chat completion service."""

    async def complete(self, messages: list[MessageDict], config: LLMConfig) -> LLMResponse:
        """
        Generate completion from messages.

        Args:
            messages: OpenAI-format conversation messages
            config: Model, temperature and optional token bound

        Returns:
            LLMResponse with generated text
        """
        ...


@runtime_checkable
class Embedder(Protocol):
    """Maps text to fixed-dimension vectors. Treated as opaque."""

    async def embed(self, texts: list[str]) -> list[Vector]:
        """Embed each text, preserving order."""
        ...
