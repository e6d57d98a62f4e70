"""
Agents module - the three actors of a question cycle.

Agents:
- retriever: Answers strictly from memory, or reports insufficiency
- search: Tool-using ReAct agent over live sources
- review: Human gate in front of memory writes
"""

from learning_agent.agents.retriever import (
    INSUFFICIENT_DATA,
    Insufficient,
    RecallResult,
    Retriever,
    Sufficient,
)
from learning_agent.agents.review import ReviewGate
from learning_agent.agents.search import SearchAgent

__all__ = [
    "INSUFFICIENT_DATA",
    "Insufficient",
    "RecallResult",
    "Retriever",
    "ReviewGate",
    "SearchAgent",
    "Sufficient",
]
