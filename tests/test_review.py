"""Tests for the review gate."""

import pytest
from conftest import ScriptedInterface

from learning_agent.agents.review import REVIEW_PROMPT, ReviewGate

ANSWER = "Rust is a systems programming language. See https://www.rust-lang.org"


@pytest.mark.asyncio
async def test_yes_stores_answer_verbatim(store):
    interface = ScriptedInterface("y")
    before = await store.count()

    approved = await ReviewGate(store, interface).review(ANSWER)

    assert approved is True
    assert await store.count() == before + 1
    stored = (await store.list_records())[-1]
    assert stored.text == ANSWER
    assert stored.metadata == {}
    assert stored.id == str(before)
    assert interface.prompts == [f"{REVIEW_PROMPT} (y/n)"]
    assert "Added memory!" in interface.text


@pytest.mark.asyncio
@pytest.mark.parametrize("reply", ["n", "", "yes", "Y", "no thanks"])
async def test_anything_else_discards(store, reply):
    interface = ScriptedInterface(reply)
    before = await store.count()

    approved = await ReviewGate(store, interface).review(ANSWER)

    assert approved is False
    assert await store.count() == before
    assert "Memory discarded." in interface.text


@pytest.mark.asyncio
async def test_reply_whitespace_is_ignored(store):
    approved = await ReviewGate(store, ScriptedInterface("  y \n")).review(ANSWER)
    assert approved is True
