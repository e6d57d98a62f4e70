"""Tests for web search and web browser tools."""

import httpx
import pytest
from conftest import llm_response

from learning_agent.llm.base import LLMConfig
from learning_agent.tools.builtin import create_search_registry
from learning_agent.tools.builtin.web_browser import create_web_browser_tool, extract_links
from learning_agent.tools.builtin.web_search import SERPAPI_URL, create_web_search_tool

SERP_RESPONSE = {
    "organic_results": [
        {
            "title": "Best way to learn Rust?",
            "link": "https://www.reddit.com/r/rust/comments/abc",
            "snippet": "Read the book, then do rustlings.",
        },
        {
            "title": "Rust for beginners",
            "link": "https://www.reddit.com/r/learnrust/comments/def",
            "snippet": "Start with small CLI tools.",
        },
    ],
    "answer_box": {"snippet": "The Rust book is the usual starting point."},
}

PAGE = """# Learning Rust

Rust is a systems programming language focused on safety.

See [The Book](https://doc.rust-lang.org/book/) and [Rustlings](https://github.com/rust-lang/rustlings).
Also [The Book again](https://doc.rust-lang.org/book/).

## Cooking

Pasta should be boiled in salted water.
"""


def serp_transport(requests, status=200, payload=None):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status, json=SERP_RESPONSE if payload is None else payload)

    return httpx.MockTransport(handler)


class TestWebSearch:
    """Test SerpAPI search tool."""

    def test_requires_key(self):
        with pytest.raises(ValueError, match="SerpAPI key"):
            create_web_search_tool("")

    @pytest.mark.asyncio
    async def test_search_is_site_restricted(self):
        requests = []
        search = create_web_search_tool("secret", transport=serp_transport(requests))

        result = await search.executor(query="learn rust")

        assert result.success
        params = requests[0].url.params
        assert str(requests[0].url).startswith(SERPAPI_URL)
        assert params["q"] == "learn rust"
        assert params["as_sitesearch"] == "reddit.com"
        assert params["api_key"] == "secret"

        assert result.data["site"] == "reddit.com"
        assert result.data["results"][0] == {
            "title": "Best way to learn Rust?",
            "url": "https://www.reddit.com/r/rust/comments/abc",
            "snippet": "Read the book, then do rustlings.",
        }
        assert result.data["answer"] == "The Rust book is the usual starting point."

    @pytest.mark.asyncio
    async def test_no_results(self):
        search = create_web_search_tool("secret", transport=serp_transport([], payload={}))
        result = await search.executor(query="zzzz")
        assert result.success
        assert result.data["results"] == []
        assert result.data["message"] == "No good search result found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status, message",
        [(401, "Invalid SerpAPI key"), (429, "Rate limit"), (500, "HTTP 500")],
    )
    async def test_http_errors(self, status, message):
        search = create_web_search_tool(
            "secret", transport=serp_transport([], status=status, payload={"error": "x"})
        )
        result = await search.executor(query="q")
        assert not result.success
        assert message in result.error

    @pytest.mark.asyncio
    async def test_api_error_payload(self):
        search = create_web_search_tool(
            "secret", transport=serp_transport([], payload={"error": "Invalid API key."})
        )
        result = await search.executor(query="q")
        assert not result.success
        assert "Invalid API key." in result.error

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        search = create_web_search_tool("secret", transport=httpx.MockTransport(handler))
        result = await search.executor(query="q")
        assert not result.success
        assert "timed out" in result.error


class TestWebBrowser:
    """Test browsing and summarization tool."""

    @pytest.fixture
    def requests(self):
        return []

    @pytest.fixture
    def browser(self, requests, mock_llm, embedder):
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if "missing" in str(request.url):
                return httpx.Response(404, text="not found")
            if "blank" in str(request.url):
                return httpx.Response(200, text="")
            return httpx.Response(200, text=PAGE)

        mock_llm.complete.return_value = llm_response("  Rust is a safe systems language.  ")
        return create_web_browser_tool(
            mock_llm,
            embedder,
            LLMConfig(model="test-model", temperature=0.0),
            transport=httpx.MockTransport(handler),
        )

    @pytest.mark.asyncio
    async def test_summarizes_page(self, browser, requests, mock_llm):
        result = await browser.executor(url="https://example.com/rust", task="how to learn rust")

        assert result.success
        assert requests[0].url.host == "r.jina.ai"
        assert str(requests[0].url).endswith("https://example.com/rust")
        assert result.data["summary"] == "Rust is a safe systems language."
        assert result.data["links"] == [
            {"text": "The Book", "url": "https://doc.rust-lang.org/book/"},
            {"text": "Rustlings", "url": "https://github.com/rust-lang/rustlings"},
        ]

        messages, config = mock_llm.complete.call_args.args
        assert "Rust is a systems programming language" in messages[0]["content"]
        assert "how to learn rust" in messages[0]["content"]
        assert config.model == "test-model"

    @pytest.mark.asyncio
    async def test_invalid_url(self, browser, requests):
        result = await browser.executor(url="example.com")
        assert not result.success
        assert "http://" in result.error
        assert requests == []

    @pytest.mark.asyncio
    async def test_not_found(self, browser):
        result = await browser.executor(url="https://example.com/missing")
        assert not result.success
        assert "404" in result.error

    @pytest.mark.asyncio
    async def test_empty_page(self, browser, mock_llm):
        result = await browser.executor(url="https://example.com/blank")
        assert result.success
        assert result.data["summary"] == "The page is empty."
        mock_llm.complete.assert_not_called()

    def test_extract_links_limit(self):
        page = " ".join(f"[l{i}](https://example.com/{i})" for i in range(10))
        assert len(extract_links(page)) == 5
        assert extract_links(page, limit=2) == [
            ("l0", "https://example.com/0"),
            ("l1", "https://example.com/1"),
        ]


def test_registry_without_search_key(mock_llm, embedder):
    registry = create_search_registry(mock_llm, embedder, LLMConfig(model="m"))
    assert sorted(registry.names) == ["calculator", "web_browser"]


def test_registry_with_search_key(mock_llm, embedder):
    registry = create_search_registry(mock_llm, embedder, LLMConfig(model="m"), serpapi_api_key="k")
    assert sorted(registry.names) == ["calculator", "web_browser", "web_search"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_web_search_real_query():
    """Live query (requires LEARNING_AGENT_SERPAPI_API_KEY)."""
    import os

    api_key = os.getenv("LEARNING_AGENT_SERPAPI_API_KEY", "")
    if not api_key:
        pytest.skip("LEARNING_AGENT_SERPAPI_API_KEY not set")

    search = create_web_search_tool(api_key)
    result = await search.executor(query="best way to learn python")

    assert result.success
    assert result.data["query"] == "best way to learn python"
    for item in result.data["results"]:
        assert "reddit.com" in item["url"]
