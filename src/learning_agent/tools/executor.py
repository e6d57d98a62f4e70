"""Run the search agent's actions and turn results into observations."""

import json
from typing import Any

from learning_agent.core.logging import get_logger
from learning_agent.core.types import ActionResult
from learning_agent.tools.parser import ToolCall
from learning_agent.tools.registry import ToolRegistry

logger = get_logger("tools.executor")

# Longest observation handed back to the model
MAX_OBSERVATION_LENGTH = 4000

# Longest value shown in a log line
LOG_PREVIEW_LENGTH = 300


def _preview(value: Any) -> str:
    text = value if isinstance(value, str) else repr(value)
    if len(text) > LOG_PREVIEW_LENGTH:
        return f"{text[:LOG_PREVIEW_LENGTH]}... [{len(text)} chars]"
    return text


class ToolExecutor:
    """Executes tool calls against one registry.

    execute() never raises. An unknown tool, bad arguments or a crashing tool
    all come back as a failed ActionResult, which the agent reads as its next
    observation and can act on.
    """

    def __init__(self, registry: ToolRegistry) -> None:
        self.registry = registry

    async def execute(self, call: ToolCall) -> ActionResult:
        tool = self.registry.get(call.tool_name)
        if tool is None:
            known = ", ".join(self.registry.names) or "none"
            return ActionResult(
                success=False,
                error=f"Tool not found: {call.tool_name}. Available tools: {known}",
            )

        problem = tool.check_args(call.arguments)
        if problem:
            return ActionResult(success=False, error=f"Invalid arguments: {problem}")

        logger.info(f"Action: {call.tool_name} {_preview(call.arguments)}")
        try:
            result = await tool.executor(**call.arguments)
        except Exception as e:
            logger.error(f"Tool {call.tool_name} crashed: {e}", exc_info=True)
            return ActionResult(success=False, error=f"Tool execution failed: {e}")

        outcome = _preview(result.data) if result.success else f"FAILED {result.error}"
        logger.debug(f"Result of {call.tool_name}: {outcome}")
        return result

    @staticmethod
    def format_observation(result: ActionResult) -> str:
        """Render a result as the text of an Observation line."""
        if not result.success:
            return f"FAILED: {result.error}"
        if result.data is None:
            return "(no output)"

        if isinstance(result.data, str):
            text = result.data
        else:
            text = json.dumps(result.data, indent=2, ensure_ascii=False, default=str)
        if len(text) > MAX_OBSERVATION_LENGTH:
            text = text[:MAX_OBSERVATION_LENGTH] + "\n... (truncated)"
        return text
