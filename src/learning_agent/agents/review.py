"""Review gate - human confirmation before a search answer becomes memory."""

from learning_agent.core.logging import get_logger
from learning_agent.interfaces.base import Interface, MessageKind
from learning_agent.memory.store import SQLiteMemoryStore

logger = get_logger("agents.review")

REVIEW_PROMPT = "Is this answer accurate?"


class ReviewGate:
    """The only path by which new memories are written after seeding."""

    def __init__(self, store: SQLiteMemoryStore, interface: Interface):
        self.store = store
        self.interface = interface

    async def review(self, answer: str) -> bool:
        """Ask the human about ``answer``; store it verbatim on "y"."""
        if await self.interface.confirm(REVIEW_PROMPT):
            record = await self.store.add(answer, {})
            logger.info(f"Review approved, stored memory {record.id}")
            self.interface.show("\nAdded memory!\n")
            return True

        logger.info("Review rejected, memory discarded")
        self.interface.show("\nMemory discarded.\n")
        return False
