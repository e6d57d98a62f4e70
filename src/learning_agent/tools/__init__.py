"""Tool calling framework for the search agent."""

from learning_agent.tools.base import Tool, ToolParameter, tool
from learning_agent.tools.executor import ToolExecutor
from learning_agent.tools.registry import ToolRegistry

__all__ = ["Tool", "ToolParameter", "tool", "ToolRegistry", "ToolExecutor"]
