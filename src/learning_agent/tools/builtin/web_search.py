"""Web search tool using SerpAPI, scoped to a single site."""

from typing import Any

import httpx

from learning_agent.core.types import ActionResult
from learning_agent.tools.base import Tool, build_tool

SERPAPI_URL = "https://serpapi.com/search.json"
DEFAULT_SITE = "reddit.com"


def create_web_search_tool(
    api_key: str,
    site: str = DEFAULT_SITE,
    count: int = 5,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Tool:
    """
    Build the keyed web search tool.

    Args:
        api_key: SerpAPI key (required)
        site: Domain every search is restricted to
        count: Number of organic results returned
        transport: Optional httpx transport (tests)
    """
    if not api_key:
        raise ValueError("SerpAPI key is required for the web search tool")

    async def web_search(query: str) -> ActionResult:
        """
        Search the web.

        query: Search query string
        """
        params = {
            "engine": "google",
            "q": query,
            "api_key": api_key,
            "as_sitesearch": site,
            "num": count,
        }

        try:
            async with httpx.AsyncClient(timeout=15.0, transport=transport) as client:
                response = await client.get(SERPAPI_URL, params=params)
                response.raise_for_status()
                data = response.json()

        except httpx.HTTPStatusError as e:
            error_msg = f"HTTP {e.response.status_code}: {e.response.text[:200]}"
            if e.response.status_code == 401:
                error_msg = "Invalid SerpAPI key"
            elif e.response.status_code == 429:
                error_msg = "Rate limit exceeded for SerpAPI"
            return ActionResult(success=False, error=error_msg)

        except httpx.TimeoutException:
            return ActionResult(success=False, error="Search request timed out")

        except httpx.HTTPError as e:
            return ActionResult(success=False, error=f"Search failed: {e!s}")

        if "error" in data:
            return ActionResult(success=False, error=f"SerpAPI error: {data['error']}")

        results = [
            {
                "title": r.get("title", ""),
                "url": r.get("link", ""),
                "snippet": r.get("snippet", ""),
            }
            for r in data.get("organic_results", [])[:count]
        ]

        payload: dict[str, Any] = {"query": query, "site": site, "results": results}
        answer = _direct_answer(data)
        if answer:
            payload["answer"] = answer
        if not results and not answer:
            payload["message"] = "No good search result found"

        return ActionResult(success=True, data=payload)

    return build_tool(
        web_search,
        name="web_search",
        description=(
            f"A search engine restricted to {site}. Useful when you need to answer "
            "questions about current events or what people think about something. "
            "Input should be a search query."
        ),
        examples=['web_search("best way to learn rust")'],
    )


def _direct_answer(data: dict[str, Any]) -> str | None:
    box = data.get("answer_box") or {}
    for key in ("answer", "snippet"):
        if box.get(key):
            return str(box[key])
    graph = data.get("knowledge_graph") or {}
    if graph.get("description"):
        return str(graph["description"])
    return None
