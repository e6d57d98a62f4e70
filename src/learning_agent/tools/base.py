"""Tool definitions for the search agent.

A tool is an async function returning ActionResult. Its parameters come from
the function signature and its parameter descriptions from docstring lines of
the form ``name: description``.
"""

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from learning_agent.core.types import ActionResult

ToolFunc = Callable[..., Awaitable[ActionResult]]
F = TypeVar("F", bound=ToolFunc)

_JSON_TYPES: dict[Any, str] = {
    str: "string",
    int: "number",
    float: "number",
    bool: "boolean",
    dict: "object",
    list: "array",
}


@dataclass
class ToolParameter:
    name: str
    type: str  # JSON type name shown to the model
    description: str
    required: bool = True
    default: Any = None


@dataclass
class Tool:
    """A named action the search agent may take."""

    name: str
    description: str
    parameters: list[ToolParameter]
    executor: ToolFunc
    examples: list[str] = field(default_factory=list)

    def to_context_string(self) -> str:
        """Entry for this tool in the agent's system prompt."""
        lines = [f"{self.name}: {self.description}"]
        for p in self.parameters:
            kind = p.type if p.required else f"{p.type}, optional, default {p.default!r}"
            lines.append(f"  - {p.name} ({kind}): {p.description}")
        lines.extend(f"  e.g. {example}" for example in self.examples)
        return "\n".join(lines)

    def check_args(self, args: dict[str, Any]) -> str | None:
        """Describe what is wrong with ``args``, or None if they fit."""
        names = {p.name for p in self.parameters}
        missing = sorted(p.name for p in self.parameters if p.required and p.name not in args)
        if missing:
            return f"Missing required parameters: {', '.join(missing)}"
        unknown = sorted(set(args) - names)
        if unknown:
            return f"Unknown parameters: {', '.join(unknown)}"
        return None


def _param_docs(func: ToolFunc) -> dict[str, str]:
    docs: dict[str, str] = {}
    for line in (func.__doc__ or "").splitlines():
        name, sep, text = line.partition(":")
        name = name.strip()
        if sep and name.isidentifier() and name not in docs:
            docs[name] = text.strip()
    return docs


def build_tool(
    func: ToolFunc,
    name: str,
    description: str,
    examples: list[str] | None = None,
) -> Tool:
    """Describe ``func`` as a Tool."""
    docs = _param_docs(func)
    parameters = []
    for param in inspect.signature(func).parameters.values():
        required = param.default is inspect.Parameter.empty
        parameters.append(
            ToolParameter(
                name=param.name,
                type=_JSON_TYPES.get(param.annotation, "string"),
                description=docs.get(param.name, f"Parameter {param.name}"),
                required=required,
                default=None if required else param.default,
            )
        )
    return Tool(
        name=name,
        description=description,
        parameters=parameters,
        executor=func,
        examples=list(examples or []),
    )


def tool(
    name: str,
    description: str,
    examples: list[str] | None = None,
) -> Callable[[F], F]:
    """
    Decorator that describes a module-level function as a tool.

    The Tool is attached as ``func._tool``; the function itself is unchanged.

    Example:
        @tool("calculator", "Evaluate arithmetic")
        async def calculator(expression: str) -> ActionResult:
            ...
    """

    def decorator(func: F) -> F:
        func._tool = build_tool(func, name, description, examples)  # type: ignore[attr-defined]
        return func

    return decorator
