"""Web browser tool - fetch a page and summarize the parts relevant to a task."""

import re

import httpx

from learning_agent.core.logging import get_logger
from learning_agent.core.types import ActionResult
from learning_agent.llm.base import Embedder, LLMConfig, LLMProvider
from learning_agent.memory.index import VectorIndex
from learning_agent.memory.splitter import RecursiveCharacterTextSplitter
from learning_agent.tools.base import Tool, build_tool

logger = get_logger("tools.web_browser")

READER_URL = "https://r.jina.ai/"
MAX_LINKS = 5
RELEVANT_CHUNKS = 4

SUMMARY_PROMPT = """Text:
{context}

I need a summary from the above text, also provide up to 5 markdown links from within that would be of interest (always including URL and text). Links should be provided, if present, in markdown syntax as a list under the heading "Relevant Links:".

{task}"""

_LINK_RE = re.compile(r"\[([^\]]+)\]\((https?://[^)\s]+)\)")


def extract_links(markdown: str, limit: int = MAX_LINKS) -> list[tuple[str, str]]:
    """First distinct (text, url) markdown links, in page order."""
    seen: set[str] = set()
    links = []
    for text, url in _LINK_RE.findall(markdown):
        if url in seen:
            continue
        seen.add(url)
        links.append((text.strip(), url))
        if len(links) >= limit:
            break
    return links


def create_web_browser_tool(
    llm: LLMProvider,
    embedder: Embedder,
    llm_config: LLMConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Tool:
    """
    Build the browsing-and-summarization tool.

    The page is fetched as markdown through the Jina reader, split into
    chunks, and the chunks closest to the task are summarized by the model.
    Without a task the first chunks are summarized.
    """
    splitter = RecursiveCharacterTextSplitter(chunk_size=2000, chunk_overlap=200)

    async def web_browser(url: str, task: str = "") -> ActionResult:
        """
        Browse a webpage.

        url: Full URL of the page, starting with http:// or https://
        task: What to find on the page; empty for a general summary
        """
        if not url.startswith(("http://", "https://")):
            return ActionResult(success=False, error="URL must start with http:// or https://")

        try:
            async with httpx.AsyncClient(
                timeout=30.0, follow_redirects=True, transport=transport
            ) as client:
                response = await client.get(
                    f"{READER_URL}{url}",
                    headers={"Accept": "text/markdown", "X-Return-Format": "markdown"},
                )
                response.raise_for_status()
                page = response.text

        except httpx.HTTPStatusError as e:
            error_msg = f"HTTP {e.response.status_code}: Failed to fetch webpage"
            if e.response.status_code == 404:
                error_msg = "Webpage not found (404)"
            elif e.response.status_code == 403:
                error_msg = "Access forbidden (403)"
            return ActionResult(success=False, error=error_msg)

        except httpx.TimeoutException:
            return ActionResult(success=False, error="Request timed out after 30 seconds")

        except httpx.HTTPError as e:
            return ActionResult(success=False, error=f"Failed to fetch webpage: {e!s}")

        chunks = splitter.split_text(page)
        if not chunks:
            return ActionResult(success=True, data={"url": url, "summary": "The page is empty."})

        if task:
            index = await VectorIndex.from_texts(chunks, embedder)
            query_vector = (await embedder.embed([task]))[0]
            selected = [chunk for chunk, _ in index.search(query_vector, RELEVANT_CHUNKS)]
        else:
            selected = chunks[:RELEVANT_CHUNKS]

        prompt = SUMMARY_PROMPT.format(
            context="\n\n".join(selected),
            task=task or "Summarize the page.",
        )
        summary = await llm.complete([{"role": "user", "content": prompt}], llm_config)
        logger.debug(f"Browsed {url}: {len(page)} chars, {len(chunks)} chunk(s)")

        return ActionResult(
            success=True,
            data={
                "url": url,
                "summary": summary.content.strip(),
                "links": [{"text": t, "url": u} for t, u in extract_links(page)],
            },
        )

    return build_tool(
        web_browser,
        name="web_browser",
        description=(
            "Useful for when you need to find something on or summarize a webpage. "
            "Give the url and optionally what you want to find on the page."
        ),
        examples=['web_browser("https://www.reddit.com/r/learnpython", task="top tips")'],
    )
