"""Tests for the package-level API and diagnostics."""

from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

import exprcalc
from exprcalc import (
    CalculatorConfig,
    Diagnostic,
    DiagnosticKind,
    DivisionPolicy,
    EvaluationError,
    ExpressionSyntaxError,
    calculate,
    evaluate,
    parse,
    tokenize,
)
from exprcalc._version import get_version


class TestPipeline:
    """parse + evaluate through the public names."""

    def test_parse_alias(self) -> None:
        assert parse is exprcalc.parse_expr

    def test_parse_then_evaluate(self) -> None:
        assert evaluate(parse("2^3^2")) == 512.0
        assert evaluate(parse("100/4/5")) == 5.0
        assert evaluate(parse("10-3*2")) == 4.0

    def test_calculate(self) -> None:
        assert calculate("(5+3)*2") == 16.0

    def test_calculate_collects_diagnostics(self) -> None:
        diagnostics: list[Diagnostic] = []
        assert calculate("5/0", diagnostics=diagnostics) == 0.0
        assert [d.kind for d in diagnostics] == [DiagnosticKind.EVALUATION]

    def test_calculate_with_strict_config(self) -> None:
        config = CalculatorConfig(division_policy=DivisionPolicy.RAISE)
        with pytest.raises(EvaluationError):
            calculate("5/0", config)

    def test_calculate_respects_max_depth(self) -> None:
        config = CalculatorConfig(max_depth=2)
        with pytest.raises(ExpressionSyntaxError):
            calculate("(((1)))", config)

    def test_syntax_error_is_calc_error(self) -> None:
        with pytest.raises(exprcalc.CalcError):
            calculate("3 +")

    def test_tokenize_exported(self) -> None:
        assert [t.kind.name for t in tokenize("1")] == ["NUMBER", "EOF"]

    def test_version(self) -> None:
        assert isinstance(exprcalc.__version__, str)
        assert exprcalc.__version__

    def test_version_matches_pyproject(self) -> None:
        pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
        with pyproject.open("rb") as f:
            expected = tomllib.load(f)["project"]["version"]
        assert get_version() == expected
        assert exprcalc.__version__ == expected

    def test_calculate_long_input(self) -> None:
        assert calculate(" + ".join(["1"] * 1000)) == 1000.0
        assert calculate("2" + "^1" * 101) == 2.0
        assert calculate("-" * 102 + "1") == 1.0


class TestDiagnostic:
    def test_format_with_position_and_text(self) -> None:
        diagnostic = Diagnostic(DiagnosticKind.LEXICAL, "Unknown character", 5, "$")
        assert diagnostic.format() == "Lexical error at position 5: Unknown character '$'"

    def test_format_without_position(self) -> None:
        diagnostic = Diagnostic(DiagnosticKind.EVALUATION, "Division by zero")
        assert diagnostic.format() == "Evaluation error: Division by zero"
        assert str(diagnostic) == diagnostic.format()

    def test_error_exposes_diagnostic(self) -> None:
        diagnostic = Diagnostic(DiagnosticKind.EVALUATION, "Division by zero")
        err = EvaluationError(diagnostic)
        assert err.diagnostic is diagnostic
        assert err.message == "Division by zero"
        assert err.position is None
        assert str(err) == "Evaluation error: Division by zero"

    def test_syntax_error_diagnostics_order(self) -> None:
        lexical = Diagnostic(DiagnosticKind.LEXICAL, "Unknown character", 0, "@")
        syntax = Diagnostic(DiagnosticKind.SYNTAX, "Expected number or '('", 0, "@")
        err = ExpressionSyntaxError(syntax, [lexical])
        assert err.diagnostics == [lexical, syntax]
