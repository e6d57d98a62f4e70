"""LiteLLM adapter - chat completions and embeddings for all providers."""

from typing import Any

import litellm
from litellm import acompletion, aembedding

from learning_agent.core.logging import get_logger
from learning_agent.core.typing import MessageDict, Vector
from learning_agent.llm.base import LLMConfig, LLMResponse

logger = get_logger("llm.litellm_adapter")

# Disable LiteLLM's verbose logging
litellm.suppress_debug_info = True
litellm.set_verbose = False


class LiteLLMAdapter:
    """Chat completion through LiteLLM."""

    def __init__(self, api_key: str | None = None, api_base: str | None = None):
        self._api_key = api_key or None
        self._api_base = api_base or None

    async def complete(self, messages: list[MessageDict], config: LLMConfig) -> LLMResponse:
        """Call LiteLLM completion.

        Args:
            messages: OpenAI-format messages
            config: LLM configuration

        Returns:
            LLMResponse with standardized format
        """
        params: dict[str, Any] = {
            "model": config.model,
            "messages": messages,
            "temperature": config.temperature,
        }
        if config.max_tokens:
            params["max_tokens"] = config.max_tokens
        if self._api_key:
            params["api_key"] = self._api_key
        if self._api_base:
            params["api_base"] = self._api_base

        logger.debug(
            f"LiteLLM request: model={config.model}, messages={len(messages)}, "
            f"temperature={config.temperature}"
        )

        try:
            response = await acompletion(**params)
        except Exception as e:
            logger.error(f"LiteLLM error for {config.model}: {e}")
            raise

        content = response.choices[0].message.content or ""
        usage = getattr(response, "usage", None)
        input_tokens = usage.prompt_tokens if usage else 0
        output_tokens = usage.completion_tokens if usage else 0

        logger.debug(
            f"LiteLLM response: model={response.model}, tokens={input_tokens}+{output_tokens}"
        )

        return LLMResponse(
            content=content,
            model=response.model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )


class LiteLLMEmbedder:
    """Embeddings through LiteLLM."""

    def __init__(self, model: str, api_key: str | None = None):
        self.model = model
        self._api_key = api_key or None

    async def embed(self, texts: list[str]) -> list[Vector]:
        if not texts:
            return []

        params: dict[str, Any] = {"model": self.model, "input": texts}
        if self._api_key:
            params["api_key"] = self._api_key

        try:
            response = await aembedding(**params)
        except Exception as e:
            logger.error(f"LiteLLM embedding error for {self.model}: {e}")
            raise

        # Providers may return items out of order; "index" restores it
        items = sorted(response.data, key=lambda item: _field(item, "index"))
        vectors = [list(_field(item, "embedding")) for item in items]
        logger.debug(f"Embedded {len(texts)} text(s) with {self.model}")
        return vectors


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item[name]
    return getattr(item, name)
