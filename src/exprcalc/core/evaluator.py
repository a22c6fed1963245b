"""
Expression evaluator for exprcalc.

Evaluates expression AST nodes to a double. Pure evaluation: no I/O and
no state beyond the diagnostics of the current run. Arithmetic follows
IEEE-754 double semantics, so overflow gives infinities and invalid
powers give NaN instead of raising. Tree depth is bounded only by input
length.
"""

from __future__ import annotations

import logging
import math
from enum import StrEnum

from exprcalc.core.errors import Diagnostic, DiagnosticKind, EvaluationError
from exprcalc.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    NumberLiteral,
    UnaryExpr,
    UnaryOp,
)

logger = logging.getLogger(__name__)


class DivisionPolicy(StrEnum):
    """What to do when the right operand of '/' is zero."""

    # Record a diagnostic and continue with 0.0
    ZERO = "zero"
    # Raise EvaluationError
    RAISE = "error"


class Evaluator:
    """Tree-walking evaluator that keeps the diagnostics of its last run."""

    def __init__(self, division_policy: DivisionPolicy = DivisionPolicy.ZERO) -> None:
        self.division_policy = division_policy
        self.diagnostics: list[Diagnostic] = []

    def evaluate(self, expr: Expr) -> float:
        """Evaluate ``expr``, resetting diagnostics from any previous run."""
        self.diagnostics = []
        return self._interpret(expr)

    def _interpret(self, expr: Expr) -> float:
        """Post-order walk over an explicit stack.

        A chain of N terms folds into a tree N levels deep, so the walk
        must not use the interpreter's call stack. Left operands are always
        evaluated before right ones.
        """
        values: list[float] = []
        # (node, operands already evaluated)
        stack: list[tuple[Expr, bool]] = [(expr, False)]

        while stack:
            node, ready = stack.pop()

            if isinstance(node, NumberLiteral):
                values.append(node.value)
            elif isinstance(node, BinaryExpr):
                if ready:
                    right = values.pop()
                    left = values.pop()
                    values.append(self._interpret_binary(node.op, left, right))
                else:
                    stack.append((node, True))
                    stack.append((node.right, False))
                    stack.append((node.left, False))
            elif isinstance(node, UnaryExpr):
                if ready:
                    values.append(self._interpret_unary(node.op, values.pop()))
                else:
                    stack.append((node, True))
                    stack.append((node.operand, False))
            else:
                raise EvaluationError(
                    Diagnostic(
                        DiagnosticKind.EVALUATION,
                        f"Unknown expression type: {type(node).__name__}",
                    )
                )

        return values.pop()

    def _interpret_binary(self, op: BinaryOp, left: float, right: float) -> float:
        if op == BinaryOp.ADD:
            return left + right
        if op == BinaryOp.SUB:
            return left - right
        if op == BinaryOp.MUL:
            return left * right
        if op == BinaryOp.DIV:
            if right == 0.0:
                return self._division_by_zero()
            return left / right
        if op == BinaryOp.POW:
            return ieee_pow(left, right)

        raise EvaluationError(
            Diagnostic(DiagnosticKind.EVALUATION, f"Unknown binary op: {op}")
        )

    def _interpret_unary(self, op: UnaryOp, val: float) -> float:
        if op == UnaryOp.NEG:
            return -val
        if op == UnaryOp.POS:
            return val
        raise EvaluationError(
            Diagnostic(DiagnosticKind.EVALUATION, f"Unknown unary op: {op}")
        )

    def _division_by_zero(self) -> float:
        diagnostic = Diagnostic(DiagnosticKind.EVALUATION, "Division by zero")
        if self.division_policy == DivisionPolicy.RAISE:
            raise EvaluationError(diagnostic)
        self.diagnostics.append(diagnostic)
        logger.warning("Division by zero; substituting 0.0")
        return 0.0


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and int(x) % 2 == 1


def ieee_pow(base: float, exponent: float) -> float:
    """C ``pow()`` semantics: never raises, returns inf or nan instead."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0.0:
            # Zero to a negative power is a pole
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        # Negative base with a non-integer exponent
        return math.nan


def evaluate(
    expr: Expr,
    *,
    division_policy: DivisionPolicy = DivisionPolicy.ZERO,
    diagnostics: list[Diagnostic] | None = None,
) -> float:
    """Evaluate an expression AST to a float.

    Args:
        expr: Parsed expression AST.
        division_policy: How division by zero is handled.
        diagnostics: Optional list that receives non-fatal diagnostics
            (e.g. a division by zero substituted with 0.0).

    Returns:
        The computed value.

    Raises:
        EvaluationError: On division by zero under DivisionPolicy.RAISE,
            or when ``expr`` contains something that is not an AST node.
    """
    evaluator = Evaluator(division_policy)
    result = evaluator.evaluate(expr)
    if diagnostics is not None:
        diagnostics.extend(evaluator.diagnostics)
    return result
