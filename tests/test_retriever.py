"""Tests for the recall path."""

from unittest.mock import patch

import pytest
from conftest import llm_response

from learning_agent.agents.retriever import (
    INSUFFICIENT_DATA,
    RECALL_MAX_TOKENS,
    Insufficient,
    Retriever,
    Sufficient,
)
from learning_agent.memory.base import DEFAULT_SEED
from learning_agent.memory.splitter import RecursiveCharacterTextSplitter


@pytest.mark.asyncio
async def test_sentinel_means_insufficient(store, mock_llm, embedder, agent_config):
    mock_llm.complete.return_value = llm_response(INSUFFICIENT_DATA)
    retriever = Retriever(store, mock_llm, embedder, agent_config)

    result = await retriever.answer("What is the boiling point of tungsten?")

    assert isinstance(result, Insufficient)
    assert result.raw == INSUFFICIENT_DATA


@pytest.mark.asyncio
@pytest.mark.parametrize("reply", ["  ", "Sorry. INSUFFICIENT_DATA", f"\n{INSUFFICIENT_DATA}\n"])
async def test_sentinel_variants(store, mock_llm, embedder, agent_config, reply):
    mock_llm.complete.return_value = llm_response(reply)
    result = await Retriever(store, mock_llm, embedder, agent_config).answer("anything")
    assert isinstance(result, Insufficient)


@pytest.mark.asyncio
async def test_answer_from_memory(store, mock_llm, embedder, agent_config):
    """A seed topic is answered from the seed record."""
    mock_llm.complete.return_value = llm_response(
        "  Reddit is useful for gathering information about the social zeitgeist. "
        "See reddit.com.  "
    )
    retriever = Retriever(store, mock_llm, embedder, agent_config)

    result = await retriever.answer("What is reddit useful for?")

    assert isinstance(result, Sufficient)
    assert result.answer.startswith("Reddit is useful")
    assert result.answer.endswith("reddit.com.")

    messages, config = mock_llm.complete.call_args.args
    prompt = messages[0]["content"]
    assert DEFAULT_SEED[0].text in prompt
    assert "What is reddit useful for?" in prompt
    assert INSUFFICIENT_DATA in prompt
    assert config.model == "test-model"
    assert config.temperature == 0.0
    assert config.max_tokens == RECALL_MAX_TOKENS


@pytest.mark.asyncio
async def test_empty_memory_skips_model(empty_store, mock_llm, embedder, agent_config):
    retriever = Retriever(empty_store, mock_llm, embedder, agent_config)

    result = await retriever.answer("Anything at all?")

    assert isinstance(result, Insufficient)
    mock_llm.complete.assert_not_called()


@pytest.mark.asyncio
async def test_recall_reads_at_most_five_records(store, mock_llm, embedder, agent_config):
    for i in range(5):
        await store.add(f"extra fact {i}")
    mock_llm.complete.return_value = llm_response(INSUFFICIENT_DATA)
    retriever = Retriever(store, mock_llm, embedder, agent_config)

    with patch.object(store, "similarity_search", wraps=store.similarity_search) as spy:
        await retriever.answer("fact")

    spy.assert_awaited_once_with("fact", 5)


@pytest.mark.asyncio
async def test_recall_reads_all_records_when_few(store, mock_llm, embedder, agent_config):
    mock_llm.complete.return_value = llm_response(INSUFFICIENT_DATA)
    retriever = Retriever(store, mock_llm, embedder, agent_config)

    with patch.object(store, "similarity_search", wraps=store.similarity_search) as spy:
        await retriever.answer("fact")

    spy.assert_awaited_once_with("fact", 2)


@pytest.mark.asyncio
async def test_prompt_holds_top_four_chunks(store, mock_llm, embedder, agent_config):
    mock_llm.complete.return_value = llm_response(INSUFFICIENT_DATA)
    splitter = RecursiveCharacterTextSplitter(chunk_size=40, chunk_overlap=0)
    retriever = Retriever(store, mock_llm, embedder, agent_config, splitter=splitter)

    await retriever.answer("How do I learn a programming language?")

    prompt = mock_llm.complete.call_args.args[0][0]["content"]
    context = prompt.split("--- context ---\n", 1)[1].split("\n--- end context ---", 1)[0]
    assert len(context.split("\n\n")) == 4


@pytest.mark.asyncio
async def test_model_errors_propagate(store, mock_llm, embedder, agent_config):
    mock_llm.complete.side_effect = RuntimeError("model unavailable")
    retriever = Retriever(store, mock_llm, embedder, agent_config)

    with pytest.raises(RuntimeError, match="model unavailable"):
        await retriever.answer("What is reddit useful for?")
