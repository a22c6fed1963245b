"""
exprcalc - arithmetic expression interpreter.

Lexer, recursive descent parser and tree-walking evaluator for
expressions over + - * / ^ and parentheses.

Usage:
    from exprcalc import parse, evaluate

    expr = parse("2 ^ 3 ^ 2")
    result = evaluate(expr)
    # result == 512.0
"""

from __future__ import annotations

from ._version import get_version
from .calculator import calculate
from .config import CalculatorConfig, load_config
from .core import ir
from .core.errors import (
    CalcError,
    Diagnostic,
    DiagnosticKind,
    EvaluationError,
    ExpressionSyntaxError,
)
from .core.evaluator import DivisionPolicy, evaluate
from .core.lexer import Token, TokenKind, tokenize
from .core.parser import parse_expr
from .core.printer import format_result

parse = parse_expr

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "calculate",
    "CalculatorConfig",
    "load_config",
    "CalcError",
    "Diagnostic",
    "DiagnosticKind",
    "EvaluationError",
    "ExpressionSyntaxError",
    "DivisionPolicy",
    "evaluate",
    "Token",
    "TokenKind",
    "tokenize",
    "parse",
    "parse_expr",
    "format_result",
]
