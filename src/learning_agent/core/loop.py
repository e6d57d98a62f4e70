"""Question loop - ask, recall, search, review, repeat.

    ASK_QUESTION -> RECALL
    RECALL       -> SEARCH        (memory insufficient)
                 -> OFFER_SEARCH  (memory answered)
    OFFER_SEARCH -> SEARCH | ASK_QUESTION
    SEARCH       -> REVIEW        (ASK_QUESTION if the agent gave up)
    REVIEW       -> ASK_QUESTION

There is no terminal state; the loop ends when the process is interrupted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NoReturn

from learning_agent.agents.retriever import Insufficient, RecallResult, Retriever
from learning_agent.agents.review import ReviewGate
from learning_agent.agents.search import SearchAgent
from learning_agent.core.errors import AgentError
from learning_agent.core.logging import get_logger
from learning_agent.interfaces.base import Interface, MessageKind

logger = get_logger("core.loop")

QUESTION_PROMPT = "What would you like to know?"
OFFER_SEARCH_PROMPT = "Shall I search for more information?"


class LoopState(Enum):
    ASK_QUESTION = "ask_question"
    RECALL = "recall"
    OFFER_SEARCH = "offer_search"
    SEARCH = "search"
    REVIEW = "review"


@dataclass
class Turn:
    """What happened to one question."""

    query: str = ""
    recall: RecallResult | None = None
    search_answer: str | None = None
    approved: bool | None = None
    states: list[LoopState] = field(default_factory=list)


class LearningLoop:
    """Serial question-answer-review cycle. One question at a time."""

    def __init__(
        self,
        retriever: Retriever,
        search_agent: SearchAgent,
        review_gate: ReviewGate,
        interface: Interface,
    ):
        self.retriever = retriever
        self.search_agent = search_agent
        self.review_gate = review_gate
        self.interface = interface

    async def run(self) -> NoReturn:
        while True:
            await self.step()

    async def step(self) -> Turn:
        """Process one question, from ASK_QUESTION back to ASK_QUESTION."""
        turn = Turn()
        state = LoopState.ASK_QUESTION

        while True:
            turn.states.append(state)

            if state is LoopState.ASK_QUESTION:
                if turn.query:
                    return turn
                turn.query = (await self.interface.ask(QUESTION_PROMPT)).strip()
                if turn.query:
                    state = LoopState.RECALL

            elif state is LoopState.RECALL:
                self.interface.show("\nRecalling...\n")
                turn.recall = await self.retriever.answer(turn.query)
                if isinstance(turn.recall, Insufficient):
                    self.interface.show(f"\nMemory answer: {turn.recall.raw}\n")
                    state = LoopState.SEARCH
                else:
                    self.interface.show(f"\nMemory answer: {turn.recall.answer}\n", MessageKind.ANSWER)
                    state = LoopState.OFFER_SEARCH

            elif state is LoopState.OFFER_SEARCH:
                if await self.interface.confirm(OFFER_SEARCH_PROMPT):
                    state = LoopState.SEARCH
                else:
                    state = LoopState.ASK_QUESTION

            elif state is LoopState.SEARCH:
                self.interface.show("\nSearching...\n")
                try:
                    turn.search_answer = await self.search_agent.answer(turn.query)
                except AgentError as e:
                    logger.error(f"Search gave up: {e}")
                    self.interface.show(f"\nSearch failed: {e}\n", MessageKind.ERROR)
                    state = LoopState.ASK_QUESTION
                    continue
                self.interface.show(f"{turn.search_answer}\n", MessageKind.ANSWER)
                state = LoopState.REVIEW

            elif state is LoopState.REVIEW:
                turn.approved = await self.review_gate.review(turn.search_answer or "")
                state = LoopState.ASK_QUESTION
