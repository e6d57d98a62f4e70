"""Parse ReAct turns: a thought followed by either an action or a final answer.

Actions are JSON objects ``{"tool": ..., "args": {...}}``. Models are not
consistent about fencing them, so three shapes are accepted, in order of
preference: a ```json fence, an unlabelled fence, and a bare object.
"""

import json
import re
from dataclasses import dataclass
from typing import Any

from learning_agent.core.logging import get_logger

logger = get_logger("tools.parser")

FINAL_ANSWER_MARKER = "Final Answer:"

# The marker only counts at the start of a line
_FINAL_ANSWER = re.compile(r"^[ \t]*" + re.escape(FINAL_ANSWER_MARKER), re.MULTILINE)

_ACTION_PATTERNS = [
    re.compile(r"```json\s*\n(.*?)\n\s*```", re.DOTALL),
    re.compile(r"```\s*\n(.*?)\n\s*```", re.DOTALL),
    # Bare object with a "tool" key; args may nest one level
    re.compile(
        r'\{(?:[^{}]|\{[^{}]*\})*?"tool"\s*:\s*"[^"]*"(?:[^{}]|\{[^{}]*\})*?\}',
        re.DOTALL,
    ),
]


@dataclass
class ToolCall:
    tool_name: str
    arguments: dict[str, Any]
    raw_json: str  # block as it appeared in the model output


@dataclass
class AgentStep:
    """One model turn. Exactly one of tool_call and final_answer is set."""

    thought: str
    tool_call: ToolCall | None = None
    final_answer: str | None = None


class ToolParser:
    @staticmethod
    def extract_calls(text: str) -> list[ToolCall]:
        """Actions in the first shape that yields any, in order of appearance."""
        for pattern in _ACTION_PATTERNS:
            calls = [c for c in map(_to_call, pattern.findall(text)) if c is not None]
            if calls:
                return calls
        return []

    @staticmethod
    def parse_step(text: str) -> AgentStep:
        """
        Split a turn into thought and action or answer.

        A "Final Answer:" opening a line before the first action wins; one
        that comes after it is a premature answer drafted alongside the
        action. Mid-sentence mentions of the marker are part of the thought.

        Raises:
            ValueError: If the turn holds neither an action nor a final answer
        """
        marker = _FINAL_ANSWER.search(text)
        calls = ToolParser.extract_calls(text)
        action_at = text.find(calls[0].raw_json) if calls else -1

        if marker and (action_at < 0 or marker.start() < action_at):
            return AgentStep(
                thought=_clean_thought(text[: marker.start()]),
                final_answer=text[marker.end() :].strip(),
            )

        if calls:
            fence_at = text.find("```")
            head = text[:fence_at] if 0 <= fence_at <= action_at else text[:action_at]
            return AgentStep(thought=_clean_thought(head), tool_call=calls[0])

        raise ValueError(f"Could not parse agent output: {text[:200]}")


def _to_call(block: str) -> ToolCall | None:
    block = block.strip()
    try:
        data = json.loads(block)
    except json.JSONDecodeError as e:
        logger.debug(f"Skipping non-JSON block: {e}")
        return None

    if not isinstance(data, dict) or "tool" not in data:
        return None
    args = data.get("args", {})
    if not isinstance(args, dict):
        logger.warning(f"Skipping action with non-object args: {block[:100]}")
        return None
    return ToolCall(tool_name=str(data["tool"]), arguments=args, raw_json=block)


def _clean_thought(text: str) -> str:
    text = text.strip().removeprefix("Thought:").strip()
    return text.removesuffix("Action:").strip()
