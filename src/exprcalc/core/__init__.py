"""Core exprcalc functionality: lexer, IR, parser, evaluator, diagnostics."""

from . import ir
from .errors import (
    CalcError,
    Diagnostic,
    DiagnosticKind,
    EvaluationError,
    ExpressionSyntaxError,
)
from .evaluator import DivisionPolicy, Evaluator, evaluate
from .lexer import Lexer, Token, TokenKind, iter_tokens, tokenize
from .parser import DEFAULT_MAX_DEPTH, Parser, parse_expr
from .printer import format_result, format_tokens, render_tree

__all__ = [
    "ir",
    "CalcError",
    "Diagnostic",
    "DiagnosticKind",
    "EvaluationError",
    "ExpressionSyntaxError",
    "DivisionPolicy",
    "Evaluator",
    "evaluate",
    "Lexer",
    "Token",
    "TokenKind",
    "iter_tokens",
    "tokenize",
    "DEFAULT_MAX_DEPTH",
    "Parser",
    "parse_expr",
    "format_result",
    "format_tokens",
    "render_tree",
]
