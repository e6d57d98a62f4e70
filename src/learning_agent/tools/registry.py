"""Tools offered to the search agent, by name."""

from collections.abc import Iterable, Iterator

from learning_agent.core.logging import get_logger
from learning_agent.tools.base import Tool

logger = get_logger("tools.registry")


class ToolRegistry:
    """Named set of tools handed to one agent.

    Names are what the model writes in its action blocks, so they are unique;
    registering a name again replaces the earlier tool.
    """

    def __init__(self, tools: Iterable[Tool] = ()):
        self._by_name: dict[str, Tool] = {}
        for t in tools:
            self.register(t)

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._by_name.values())

    def register(self, tool: Tool) -> None:
        if tool.name in self._by_name:
            logger.warning(f"Replacing search tool {tool.name}")
        else:
            logger.debug(f"Search tool available: {tool.name}")
        self._by_name[tool.name] = tool

    def get(self, name: str) -> Tool | None:
        return self._by_name.get(name)

    @property
    def names(self) -> list[str]:
        return list(self._by_name)

    def describe(self) -> str:
        """Tool entries for the agent's system prompt."""
        if not self._by_name:
            return "No tools available."
        return "\n\n".join(t.to_context_string() for t in self)
