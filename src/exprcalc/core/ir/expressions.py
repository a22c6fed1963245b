"""
Expression AST for exprcalc.

Three node shapes cover the whole language:
- Number literals: 42, 3.14, .5
- Binary operations: +, -, *, /, ^
- Unary operations: +, -

Nodes are frozen pydantic models; each node owns its children and a tree
is never shared or mutated after parsing.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators for expressions."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


class UnaryOp(StrEnum):
    """Unary operators for expressions."""

    POS = "+"
    NEG = "-"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class NumberLiteral(BaseModel):
    """A numeric literal, always held as a double."""

    value: float = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return to_infix(self)


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return to_infix(self)


class UnaryExpr(BaseModel):
    """Unary operation: op operand."""

    op: UnaryOp
    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return to_infix(self)


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = NumberLiteral | BinaryExpr | UnaryExpr

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()
UnaryExpr.model_rebuild()


def to_infix(expr: Expr) -> str:
    """Render ``expr`` as fully parenthesized infix text, e.g. ``(1.0 + -2.0)``.

    Walks an explicit stack of nodes and literal text so that trees as deep
    as a long input render without recursion.
    """
    parts: list[str] = []
    stack: list[Expr | str] = [expr]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, NumberLiteral):
            parts.append(repr(item.value))
        elif isinstance(item, BinaryExpr):
            stack.extend((")", item.right, f" {item.op.value} ", item.left, "("))
        else:
            stack.extend((item.operand, item.op.value))
    return "".join(parts)
