"""Safe arithmetic evaluation tool."""

from __future__ import annotations

import ast
import math
import operator as op
from typing import Annotated, Any, Dict

from langchain_core.tools import tool

__all__ = ["calculate"]

_BINARY_OPS = {
    ast.Add: op.add,
    ast.Sub: op.sub,
    ast.Mult: op.mul,
    ast.Div: op.truediv,
    ast.FloorDiv: op.floordiv,
    ast.Mod: op.mod,
    ast.Pow: op.pow,
}

_UNARY_OPS = {
    ast.USub: op.neg,
    ast.UAdd: op.pos,
}

_FUNCTIONS = {
    "sqrt": math.sqrt,
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "log": math.log,
    "log10": math.log10,
    "exp": math.exp,
    "abs": abs,
    "round": round,
    "floor": math.floor,
    "ceil": math.ceil,
}

_CONSTANTS = {
    "pi": math.pi,
    "e": math.e,
}


def _eval(node: ast.AST):
    if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
        return node.value
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
        return _UNARY_OPS[type(node.op)](_eval(node.operand))
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
        return _BINARY_OPS[type(node.op)](_eval(node.left), _eval(node.right))
    if isinstance(node, ast.Name) and node.id in _CONSTANTS:
        return _CONSTANTS[node.id]
    if (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id in _FUNCTIONS
        and not node.keywords
    ):
        return _FUNCTIONS[node.func.id](*[_eval(arg) for arg in node.args])
    raise ValueError(f"Unsupported expression element: {ast.dump(node)}")


def evaluate_expression(expression: str) -> Any:
    """Evaluate an arithmetic expression without ``eval``.

    Integral float results are returned as ``int`` (``sqrt(16)`` -> ``4``).

    Raises:
        ValueError: On syntax outside the arithmetic whitelist
        ArithmeticError: On e.g. division by zero
    """
    try:
        tree = ast.parse(expression.strip(), mode="eval")
    except SyntaxError as e:
        raise ValueError(f"Invalid expression: {expression}") from e

    result = _eval(tree.body)
    if isinstance(result, float) and result.is_integer():
        return int(result)
    return result


@tool
def calculate(
    expression: Annotated[str, "Mathematical expression to evaluate (e.g., '2 + 3 * 4', 'sqrt(16)', 'sin(pi/2)')"]
) -> Dict[str, Any]:
    """Perform mathematical calculations and evaluations"""
    try:
        result = evaluate_expression(expression)
        return {"expression": expression, "result": result, "success": True}
    except (ValueError, ArithmeticError, TypeError) as e:
        return {"expression": expression, "error": str(e), "success": False}
