"""Helpers shared by the JSON program reader and writer."""

from __future__ import annotations

import ast
import math
import re

from ..errors import InvalidArgument

_ALLOWED_ANGLE_CHARS = re.compile(r"^[0-9eE\.\s\*\-\+/\(\)pi]+$", re.IGNORECASE)


def angle_str_to_float(s: str) -> float:
    """
    Parse an angle expression such as "pi/2", "-3*pi/4" or "0.785" to radians.

    Only numbers, ``pi`` and the operators ``+ - * /`` with parentheses are
    accepted. The expression is evaluated by walking its AST, never with
    ``eval``.

    Raises
    ------
    InvalidArgument
        If the expression is empty, malformed or uses anything else.
    """
    s = s.strip()
    if not s:
        raise InvalidArgument("Empty angle expression.")
    if not _ALLOWED_ANGLE_CHARS.match(s):
        raise InvalidArgument(f"Angle expression contains disallowed characters: {s!r}.")

    normalized = re.sub(r"\bpi\b", "PI", s, flags=re.IGNORECASE)
    try:
        tree = ast.parse(normalized, mode="eval")
    except SyntaxError as exc:
        raise InvalidArgument(f"Invalid angle expression syntax: {s!r}.") from exc

    def eval_node(node: ast.AST) -> float:
        if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)):
            return float(node.value)
        if isinstance(node, ast.Name) and node.id == "PI":
            return math.pi
        if isinstance(node, ast.UnaryOp) and isinstance(node.op, (ast.USub, ast.UAdd)):
            value = eval_node(node.operand)
            return -value if isinstance(node.op, ast.USub) else value
        if isinstance(node, ast.BinOp):
            left = eval_node(node.left)
            right = eval_node(node.right)
            if isinstance(node.op, ast.Add):
                return left + right
            if isinstance(node.op, ast.Sub):
                return left - right
            if isinstance(node.op, ast.Mult):
                return left * right
            if isinstance(node.op, ast.Div):
                if right == 0:
                    raise InvalidArgument(f"Division by zero in angle expression: {s!r}.")
                return left / right
        raise InvalidArgument(f"Unsupported construct in angle expression: {s!r}.")

    return eval_node(tree.body)


def parse_param(value: int | float | str) -> float:
    """Return a numeric gate parameter, evaluating angle strings."""
    if isinstance(value, str):
        return angle_str_to_float(value)
    return float(value)


__all__ = ["angle_str_to_float", "parse_param"]
