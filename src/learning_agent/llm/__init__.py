"""
LLM module - language model provider abstraction.

- base: Request/response types and the provider protocols
- litellm_adapter: Chat completions and embeddings through LiteLLM
"""

from learning_agent.llm.base import Embedder, LLMConfig, LLMProvider, LLMResponse

__all__ = ["Embedder", "LLMConfig", "LLMProvider", "LLMResponse"]
