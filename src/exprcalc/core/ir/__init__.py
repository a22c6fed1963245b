"""
exprcalc Intermediate Representation (IR) types.

All AST node types are re-exported from this package.
"""

from .expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    NumberLiteral,
    UnaryExpr,
    UnaryOp,
    to_infix,
)

__all__ = [
    "BinaryExpr",
    "BinaryOp",
    "Expr",
    "NumberLiteral",
    "UnaryExpr",
    "UnaryOp",
    "to_infix",
]
