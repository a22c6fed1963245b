"""Text renderings of results, token streams and expression trees."""

from __future__ import annotations

from collections.abc import Iterable

from exprcalc.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    NumberLiteral,
    UnaryExpr,
    UnaryOp,
)
from exprcalc.core.lexer import Token, TokenKind

DEFAULT_PRECISION = 6

_BINARY_NAMES: dict[BinaryOp, str] = {
    BinaryOp.ADD: "PLUS",
    BinaryOp.SUB: "MINUS",
    BinaryOp.MUL: "MULTIPLY",
    BinaryOp.DIV: "DIVIDE",
    BinaryOp.POW: "POWER",
}

_UNARY_NAMES: dict[UnaryOp, str] = {
    UnaryOp.POS: "PLUS",
    UnaryOp.NEG: "MINUS",
}


def format_result(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Format a result in general notation with ``precision`` significant digits.

    >>> format_result(5.0)
    '5'
    >>> format_result(1 / 3)
    '0.333333'
    """
    return "%.*g" % (precision, value)


def format_tokens(tokens: Iterable[Token]) -> str:
    """Render tokens as ``[ NUMBER(3), PLUS(+), NUMBER(4) ]``, skipping EOF."""
    parts = []
    for tok in tokens:
        if tok.kind == TokenKind.EOF:
            continue
        if tok.value is None:
            parts.append(tok.kind.name)
        else:
            parts.append(f"{tok.kind.name}({tok.value})")
    return f"[ {', '.join(parts)} ]"


def render_tree(expr: Expr, indent: int = 0) -> str:
    """Render an expression tree as an indented outline, one node per line."""
    return "\n".join(_tree_lines(expr, indent))


def _tree_lines(expr: Expr, indent: int) -> list[str]:
    lines: list[str] = []
    # (node, indent level), children pushed right first so left prints first
    stack: list[tuple[Expr, int]] = [(expr, indent)]
    while stack:
        node, level = stack.pop()
        pad = "  " * level
        if isinstance(node, NumberLiteral):
            lines.append(f"{pad}NUMBER: {node.value:.2f}")
        elif isinstance(node, BinaryExpr):
            lines.append(f"{pad}BINARY_OP: {_BINARY_NAMES[node.op]}")
            stack.append((node.right, level + 1))
            stack.append((node.left, level + 1))
        elif isinstance(node, UnaryExpr):
            lines.append(f"{pad}UNARY_OP: {_UNARY_NAMES[node.op]}")
            stack.append((node.operand, level + 1))
        else:
            raise TypeError(f"Unknown expression type: {type(node).__name__}")
    return lines
