"""One-shot parse-and-evaluate helper used by the CLI and library callers."""

from __future__ import annotations

from exprcalc.config import CalculatorConfig
from exprcalc.core.errors import Diagnostic
from exprcalc.core.evaluator import evaluate
from exprcalc.core.parser import parse_expr


def calculate(
    source: str,
    config: CalculatorConfig | None = None,
    diagnostics: list[Diagnostic] | None = None,
) -> float:
    """Parse and evaluate an expression string.

    Raises:
        ExpressionSyntaxError: If the expression does not parse.
        EvaluationError: If evaluation fails under the configured policy.
    """
    config = config or CalculatorConfig()
    expr = parse_expr(source, max_depth=config.max_depth)
    return evaluate(expr, division_policy=config.division_policy, diagnostics=diagnostics)
