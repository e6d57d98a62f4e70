"""Built-in tools."""

import httpx

from learning_agent.core.logging import get_logger
from learning_agent.llm.base import Embedder, LLMConfig, LLMProvider
from learning_agent.tools.builtin.calculator import calculator
from learning_agent.tools.builtin.web_browser import create_web_browser_tool
from learning_agent.tools.builtin.web_search import create_web_search_tool
from learning_agent.tools.registry import ToolRegistry

logger = get_logger("tools.builtin")


def create_search_registry(
    llm: LLMProvider,
    embedder: Embedder,
    llm_config: LLMConfig,
    serpapi_api_key: str = "",
    transport: httpx.AsyncBaseTransport | None = None,
) -> ToolRegistry:
    """Tools for the search agent. Web search is added only when keyed."""
    registry = ToolRegistry()
    registry.register(create_web_browser_tool(llm, embedder, llm_config, transport=transport))
    registry.register(calculator._tool)  # type: ignore[attr-defined]

    if serpapi_api_key:
        registry.register(create_web_search_tool(serpapi_api_key, transport=transport))
    else:
        logger.info("SerpAPI key not set, web search disabled")

    return registry


__all__ = ["calculator", "create_search_registry", "create_web_browser_tool", "create_web_search_tool"]
