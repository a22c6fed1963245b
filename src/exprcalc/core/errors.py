"""
Diagnostics and error types for expression lexing, parsing and evaluation.

Library code never prints. Every problem is described by a structured
``Diagnostic`` value; presenting it is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class DiagnosticKind(StrEnum):
    """Which stage of the pipeline produced a diagnostic."""

    LEXICAL = "lexical"
    SYNTAX = "syntax"
    EVALUATION = "evaluation"


@dataclass(frozen=True)
class Diagnostic:
    """
    A single problem found while processing an expression.

    Attributes:
        kind: Pipeline stage that reported the problem
        message: Human-readable description
        position: Offset into the source (0-indexed), if known
        text: Offending source text (a character or token value), if any
    """

    kind: DiagnosticKind
    message: str
    position: int | None = None
    text: str | None = None

    def format(self) -> str:
        """
        Format the diagnostic as a single line.

        Returns:
            A string like: "Lexical error at position 2: Unknown character '@'"
        """
        line = f"{self.kind.value.capitalize()} error"
        if self.position is not None:
            line += f" at position {self.position}"
        line += f": {self.message}"
        if self.text is not None:
            line += f" {self.text!r}"
        return line

    def __str__(self) -> str:
        return self.format()


class CalcError(Exception):
    """Base exception for all exprcalc errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.format())

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def position(self) -> int | None:
        return self.diagnostic.position


class ExpressionSyntaxError(CalcError):
    """
    Raised when the token stream does not match the grammar.

    Examples:
    - Unexpected end of input ("3 +")
    - Unbalanced parentheses
    - Trailing tokens after a complete expression
    - An INVALID token where an operand was expected

    The lexical diagnostics collected before the failure are kept so the
    caller can report the root cause together with the syntax error.
    """

    def __init__(
        self,
        diagnostic: Diagnostic,
        lexical: list[Diagnostic] | None = None,
    ):
        self.lexical = list(lexical or [])
        super().__init__(diagnostic)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Lexical diagnostics followed by the syntax diagnostic."""
        return [*self.lexical, self.diagnostic]


class EvaluationError(CalcError):
    """
    Raised when a parsed expression cannot be evaluated.

    Examples:
    - Division by zero under the strict division policy
    - A tree nested beyond the interpreter's recursion limit
    """

    pass
