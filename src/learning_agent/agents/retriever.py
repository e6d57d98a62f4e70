"""Retriever - answer a query strictly from memory (recall path)."""

from dataclasses import dataclass

from learning_agent.core.config import AgentConfig
from learning_agent.core.logging import get_logger
from learning_agent.llm.base import Embedder, LLMConfig, LLMProvider
from learning_agent.memory.base import MAX_RECALL_RECORDS
from learning_agent.memory.index import VectorIndex
from learning_agent.memory.splitter import RecursiveCharacterTextSplitter
from learning_agent.memory.store import SQLiteMemoryStore

logger = get_logger("agents.retriever")

INSUFFICIENT_DATA = "INSUFFICIENT_DATA"

# Chunks from the ephemeral index that reach the prompt
RECALL_CHUNKS = 4
RECALL_MAX_TOKENS = 2000

RECALL_PROMPT = """Use only the pieces of context below to answer the input at the end. Do not recall information from your own memory.
If the context is sufficient for an accurate answer, respond in a short paragraph that reiterates the input and provides an accurate, detailed answer. Include any relevant links from the context.
If the context is not sufficient, respond exactly with {sentinel} and nothing else.

--- context ---
{context}
--- end context ---

--- user input ---
{query}
--- end user input ---

Answer:"""


@dataclass(frozen=True)
class Sufficient:
    """Memory held enough to answer."""

    answer: str


@dataclass(frozen=True)
class Insufficient:
    """Memory did not hold enough to answer."""

    raw: str = INSUFFICIENT_DATA


RecallResult = Sufficient | Insufficient


class Retriever:
    """Retrieval-augmented generation over the memory store.

    The top records for the query are split into chunks, the chunks are
    indexed in memory for this call only, and the closest chunks are handed to
    the model with an instruction to answer from them alone or reply with the
    INSUFFICIENT_DATA sentinel. Errors from the store or the model propagate.
    """

    def __init__(
        self,
        store: SQLiteMemoryStore,
        llm: LLMProvider,
        embedder: Embedder,
        config: AgentConfig,
        splitter: RecursiveCharacterTextSplitter | None = None,
    ):
        self.store = store
        self.llm = llm
        self.embedder = embedder
        self.config = config
        self.splitter = splitter or RecursiveCharacterTextSplitter(chunk_size=1000, chunk_overlap=200)

    async def answer(self, query: str) -> RecallResult:
        k = min(await self.store.count(), MAX_RECALL_RECORDS)
        hits = await self.store.similarity_search(query, k)
        logger.debug(f"Recall: {len(hits)} record(s) for query: {query[:80]}")

        chunks = self.splitter.split_text("\n\n".join(hit.record.text for hit in hits))
        if not chunks:
            logger.info("Recall: no memory content, insufficient")
            return Insufficient()

        index = await VectorIndex.from_texts(chunks, self.embedder)
        query_vector = (await self.embedder.embed([query]))[0]
        context = [chunk for chunk, _ in index.search(query_vector, RECALL_CHUNKS)]

        prompt = RECALL_PROMPT.format(
            sentinel=INSUFFICIENT_DATA,
            context="\n\n".join(context),
            query=query,
        )
        llm_config = LLMConfig(
            model=self.config.model,
            temperature=self.config.recall_temperature,
            max_tokens=RECALL_MAX_TOKENS,
        )
        response = await self.llm.complete([{"role": "user", "content": prompt}], llm_config)
        return self._classify(response.content)

    @staticmethod
    def _classify(text: str) -> RecallResult:
        text = text.strip()
        if not text or INSUFFICIENT_DATA in text:
            logger.info("Recall: insufficient")
            return Insufficient(raw=text or INSUFFICIENT_DATA)
        logger.info(f"Recall: answered ({len(text)} chars)")
        return Sufficient(answer=text)
