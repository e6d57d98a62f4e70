"""Search agent - zero-shot ReAct agent answering from live external sources."""

from collections.abc import Callable
from dataclasses import dataclass, field

from learning_agent.core.config import AgentConfig
from learning_agent.core.errors import AgentError
from learning_agent.core.logging import get_logger
from learning_agent.core.retry import RetryPolicy
from learning_agent.core.typing import MessageDict
from learning_agent.llm.base import LLMConfig, LLMProvider
from learning_agent.tools.executor import ToolExecutor
from learning_agent.tools.parser import AgentStep, ToolParser
from learning_agent.tools.registry import ToolRegistry

logger = get_logger("agents.search")

SEARCH_INPUT = """Find an answer to the input provided below.
Respond in a short paragraph that reiterates the input and provides an accurate, detailed answer.
Include any relevant links or images in your response.

If you are not confident in your answer, you should make an educated guess and simply inform the user of your uncertainty.

--- user input ---
{query}
--- end user input ---"""

REACT_SYSTEM = """Answer the following questions as best you can. You have access to the following tools:

{tools_context}

Use the following format:

Question: the input question you must answer
Thought: you should always think about what to do
Action:
```json
{{"tool": "<one of: {tool_names}>", "args": {{"<parameter>": "<value>"}}}}
```
Observation: the result of the action
... (this Thought/Action/Observation can repeat N times)
Thought: I now know the final answer
Final Answer: the final answer to the original input question

Rules:
- Take exactly ONE action per response, then stop and wait for the Observation.
- Never write the Observation yourself.
- When you know the answer, respond with a Thought and a Final Answer only."""


@dataclass
class SearchStep:
    """One executed tool call within a run."""

    thought: str
    tool: str
    args: dict
    observation: str


@dataclass
class SearchRun:
    """Trace of a single agent run."""

    query: str
    steps: list[SearchStep] = field(default_factory=list)
    answer: str | None = None


class SearchAgent:
    """Answers queries with a bounded set of tools when memory is insufficient.

    A single run stops after ``config.max_iterations`` tool calls. A failed run
    (model error, unparseable output, an empty final answer or the iteration
    limit) is retried as a whole by the retry policy; see RetryPolicy for the
    unbounded mode.
    """

    agent_name = "SearchAgent"

    def __init__(
        self,
        llm: LLMProvider,
        tools: ToolRegistry,
        config: AgentConfig,
        retry: RetryPolicy | None = None,
        on_retry: Callable[[int, Exception], None] | None = None,
    ):
        self.llm = llm
        self.tools = tools
        self.config = config
        self.retry = retry or RetryPolicy(
            max_attempts=config.search_max_attempts,
            backoff_seconds=config.search_backoff_seconds,
        )
        self.on_retry = on_retry
        self._executor = ToolExecutor(tools)
        self._llm_config = LLMConfig(model=config.model, temperature=config.search_temperature)

    async def answer(self, query: str) -> str:
        """
        Answer a query, retrying failed runs per the retry policy.

        Raises:
            AgentError: Only when a finite attempt limit is exhausted
        """
        run = await self.retry.run(
            lambda: self.run_once(query),
            description=f"{self.agent_name} run",
            on_retry=self.on_retry,
        )
        return run.answer

    async def run_once(self, query: str) -> SearchRun:
        """Execute one ReAct run. Raises on any failure."""
        run = SearchRun(query=query)
        messages = self._initial_messages(query)
        logger.info(f"{self.agent_name} starting ({self.config.agent_type}): {query[:100]}")

        for iteration in range(self.config.max_iterations + 1):
            response = await self.llm.complete(messages, self._llm_config)
            text = response.content.strip()

            try:
                step = ToolParser.parse_step(text)
            except ValueError as e:
                raise AgentError(f"Could not parse LLM output: {text[:200]}") from e

            if step.final_answer is not None:
                if not step.final_answer:
                    raise AgentError("Empty final answer")
                run.answer = step.final_answer
                logger.info(
                    f"{self.agent_name} finished after {len(run.steps)} step(s): "
                    f"{run.answer[:100]}"
                )
                return run

            if iteration >= self.config.max_iterations:
                break

            observation = await self._act(step)
            run.steps.append(
                SearchStep(
                    thought=step.thought,
                    tool=step.tool_call.tool_name,
                    args=step.tool_call.arguments,
                    observation=observation,
                )
            )
            logger.info(
                f"Iteration {iteration}: {step.tool_call.tool_name} "
                f"{step.tool_call.arguments} ({step.thought[:80]})"
            )

            messages.append({"role": "assistant", "content": _truncate_at_observation(text)})
            messages.append({"role": "user", "content": f"Observation: {observation}"})

        raise AgentError(
            f"{self.agent_name} stopped after max iterations ({self.config.max_iterations})"
        )

    async def _act(self, step: AgentStep) -> str:
        result = await self._executor.execute(step.tool_call)
        return self._executor.format_observation(result)

    def _initial_messages(self, query: str) -> list[MessageDict]:
        system = REACT_SYSTEM.format(
            tools_context=self.tools.describe(),
            tool_names=", ".join(self.tools.names),
        )
        return [
            {"role": "system", "content": system},
            {"role": "user", "content": f"Question: {SEARCH_INPUT.format(query=query)}"},
        ]


def _truncate_at_observation(text: str) -> str:
    """Drop any observation the model hallucinated after its action."""
    cut = text.find("\nObservation:")
    return text[:cut].rstrip() if cut >= 0 else text
