"""
Interface protocol and common types.
"""

from abc import ABC, abstractmethod
from enum import Enum


class MessageKind(Enum):
    PROMPT = "prompt"
    STATUS = "status"
    ANSWER = "answer"
    ERROR = "error"


class Interface(ABC):
    """Abstract human interface adapter."""

    @abstractmethod
    async def ask(self, prompt: str) -> str:
        """Show a prompt and wait for one line of input."""
        ...

    @abstractmethod
    def show(self, text: str, kind: MessageKind = MessageKind.STATUS) -> None:
        """Present text to the human."""
        ...

    async def confirm(self, prompt: str) -> bool:
        """Ask a y/n question. Only "y" counts as yes."""
        reply = await self.ask(f"{prompt} (y/n)")
        return reply.strip() == "y"
