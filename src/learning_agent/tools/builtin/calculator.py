"""Calculator tool - safe arithmetic evaluation."""

import ast
import math
import operator
from collections.abc import Callable
from typing import Any

from learning_agent.core.types import ActionResult
from learning_agent.tools.base import tool

# Refuse powers that would take seconds to compute
MAX_EXPONENT = 10_000

_BINARY_OPS: dict[type[ast.operator], Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

_UNARY_OPS: dict[type[ast.unaryop], Callable[[Any], Any]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

_FUNCTIONS: dict[str, Callable[..., Any]] = {
    "abs": abs,
    "round": round,
    "min": min,
    "max": max,
    "sqrt": math.sqrt,
    "exp": math.exp,
    "log": math.log,
    "log10": math.log10,
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "floor": math.floor,
    "ceil": math.ceil,
}

_CONSTANTS = {"pi": math.pi, "e": math.e}


def evaluate(expression: str) -> float | int:
    """
    Evaluate an arithmetic expression.

    Raises:
        ValueError: On syntax the calculator does not support
        ZeroDivisionError: On division by zero
    """
    # Models often write powers as a^b
    expression = expression.replace("^", "**")
    try:
        tree = ast.parse(expression.strip(), mode="eval")
    except SyntaxError as e:
        raise ValueError(f"Invalid expression: {expression}") from e
    return _eval(tree.body)


def _eval(node: ast.AST) -> Any:
    if isinstance(node, ast.Constant) and type(node.value) in (int, float):
        return node.value

    if isinstance(node, ast.Name) and node.id in _CONSTANTS:
        return _CONSTANTS[node.id]

    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
        left = _eval(node.left)
        right = _eval(node.right)
        if isinstance(node.op, ast.Pow) and abs(right) > MAX_EXPONENT:
            raise ValueError(f"Exponent too large: {right}")
        return _BINARY_OPS[type(node.op)](left, right)

    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
        return _UNARY_OPS[type(node.op)](_eval(node.operand))

    if (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id in _FUNCTIONS
        and not node.keywords
    ):
        return _FUNCTIONS[node.func.id](*(_eval(arg) for arg in node.args))

    raise ValueError(f"Unsupported expression element: {ast.dump(node)[:60]}")


@tool(
    "calculator",
    "Useful for getting the result of a math expression. "
    "The input must be a valid arithmetic expression.",
    examples=['calculator("(3 + 4) * 2")', 'calculator("sqrt(2) ** 3")'],
)
async def calculator(expression: str) -> ActionResult:
    """
    Evaluate an arithmetic expression.

    expression: Arithmetic expression, e.g. "12 * (3 + 4) / 2"
    """
    try:
        value = evaluate(expression)
    except (ValueError, ZeroDivisionError, OverflowError, TypeError) as e:
        return ActionResult(success=False, error=f"Cannot evaluate {expression!r}: {e}")

    return ActionResult(success=True, data={"expression": expression, "result": value})
