"""
exprcalc CLI.

Commands:
- eval: Evaluate a single expression
- repl: Interactive calculator (default when no command is given)
- tokens: Show the token stream for an expression
- demo: Show tokens, AST and result for an expression
- selftest: Run the built-in expression cases

Expressions starting with '-' must follow '--' (e.g. exprcalc eval -- -5+3).
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from exprcalc._version import get_version
from exprcalc.calculator import calculate
from exprcalc.config import CalculatorConfig, find_config, load_config
from exprcalc.core.errors import CalcError, Diagnostic, ExpressionSyntaxError
from exprcalc.core.evaluator import DivisionPolicy, evaluate
from exprcalc.core.lexer import tokenize
from exprcalc.core.parser import parse_expr
from exprcalc.core.printer import format_result, format_tokens, render_tree

logger = logging.getLogger(__name__)

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

# (expression, expected result)
SELFTEST_CASES: list[tuple[str, float]] = [
    ("42", 42.0),
    ("3 + 4", 7.0),
    ("10 - 3 * 2", 4.0),
    ("(5 + 3) * 2", 16.0),
    ("2 ^ 3 ^ 2", 512.0),
    ("-5 + 3", -2.0),
    ("+(4 * 3)", 12.0),
    ("100 / 4 / 5", 5.0),
    ("3 + 4 * 2^2 - (5 + 1)", 13.0),
    ("2 * (3 + 4) ^ 2 / 7", 14.0),
]

QUIT_COMMANDS = {"quit", "exit"}


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        typer.echo(f"exprcalc {get_version()}")
        raise typer.Exit()


app = typer.Typer(
    help="""exprcalc – arithmetic expression calculator

Supported operators: + - * / ^ and parentheses.
Run without a command for the interactive calculator.
""",
)


def _get_config(ctx: typer.Context) -> CalculatorConfig:
    if isinstance(ctx.obj, CalculatorConfig):
        return ctx.obj
    return CalculatorConfig()


def _report(diagnostics: list[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        err_console.print(f"[red]{escape(diagnostic.format())}[/red]")


def _report_error(error: CalcError) -> None:
    if isinstance(error, ExpressionSyntaxError):
        _report(error.diagnostics)
    else:
        _report([error.diagnostic])


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    config_path: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Path to exprcalc.toml (default: nearest one above the current directory)",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Treat division by zero as an error instead of yielding 0",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version",
    ),
) -> None:
    """exprcalc main callback for global options."""
    path = config_path or find_config()
    config = load_config(path) if path else CalculatorConfig()
    if strict:
        config = config.model_copy(update={"division_policy": DivisionPolicy.RAISE})

    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if path:
        logger.debug(f"Loaded configuration from {path}")

    ctx.obj = config
    if ctx.invoked_subcommand is None:
        run_repl(config)


@app.command(name="eval")
def eval_command(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression to evaluate"),
) -> None:
    """Evaluate a single expression."""
    config = _get_config(ctx)
    diagnostics: list[Diagnostic] = []
    try:
        result = calculate(expression, config, diagnostics)
    except CalcError as e:
        _report_error(e)
        stage = "parse" if isinstance(e, ExpressionSyntaxError) else "evaluate"
        err_console.print(f"Error: Failed to {stage} expression: {expression}", markup=False)
        raise typer.Exit(code=1)

    _report(diagnostics)
    typer.echo(f"Input: {expression}")
    typer.echo(f"Result: {format_result(result, config.precision)}")


@app.command(name="repl")
def repl_command(ctx: typer.Context) -> None:
    """Interactive calculator ('quit' or 'exit' to leave)."""
    run_repl(_get_config(ctx))


def run_repl(config: CalculatorConfig) -> None:
    """Read expressions line by line until EOF or a quit command."""
    typer.echo("=== INTERACTIVE CALCULATOR ===")
    typer.echo("Enter arithmetic expressions ('quit' to exit):")
    typer.echo("Supported operators: +, -, *, /, ^, (, )")

    while True:
        try:
            line = console.input("calc> ")
        except EOFError:
            break

        line = line.strip()
        if not line:
            continue
        if line in QUIT_COMMANDS:
            break

        diagnostics: list[Diagnostic] = []
        try:
            result = calculate(line, config, diagnostics)
        except CalcError as e:
            _report_error(e)
            continue

        _report(diagnostics)
        typer.echo(f"= {format_result(result, config.precision)}")

    typer.echo("Goodbye")


@app.command(name="tokens")
def tokens_command(
    expression: str = typer.Argument(..., help="Expression to tokenize"),
) -> None:
    """Show the token stream for an expression."""
    typer.echo(f"Input: {expression}")
    typer.echo(format_tokens(tokenize(expression)))


@app.command(name="demo")
def demo_command(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression to demonstrate"),
) -> None:
    """Show tokens, AST structure and result for an expression."""
    config = _get_config(ctx)

    console.rule("Lexer")
    typer.echo(f"Input: {expression}")
    typer.echo(format_tokens(tokenize(expression)))

    console.rule("Parser")
    try:
        expr = parse_expr(expression, max_depth=config.max_depth)
    except ExpressionSyntaxError as e:
        _report_error(e)
        err_console.print("Error: Failed to parse expression", markup=False)
        raise typer.Exit(code=1)

    typer.echo("AST Structure")
    typer.echo(render_tree(expr))
    typer.echo("")

    diagnostics: list[Diagnostic] = []
    try:
        result = evaluate(
            expr, division_policy=config.division_policy, diagnostics=diagnostics
        )
    except CalcError as e:
        _report_error(e)
        raise typer.Exit(code=1)

    _report(diagnostics)
    typer.echo(f"Result: {format_result(result, config.precision)}")


@app.command(name="selftest")
def selftest_command(ctx: typer.Context) -> None:
    """Run the built-in expression cases and compare with expected results."""
    config = _get_config(ctx)

    table = Table(title="Built-in cases")
    table.add_column("#", justify="right")
    table.add_column("Expression", style="cyan")
    table.add_column("Result", justify="right")
    table.add_column("Status")

    failures = 0
    for i, (expression, expected) in enumerate(SELFTEST_CASES, start=1):
        try:
            result = calculate(expression, config)
        except CalcError as e:
            failures += 1
            table.add_row(str(i), escape(expression), "-", f"[red]{escape(e.message)}[/red]")
            continue

        if result == expected:
            status = "[green]ok[/green]"
        else:
            failures += 1
            status = f"[red]expected {format_result(expected, config.precision)}[/red]"
        table.add_row(str(i), escape(expression), format_result(result, config.precision), status)

    console.print(table)
    if failures:
        console.print(f"[red]{failures} of {len(SELFTEST_CASES)} cases failed[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]All {len(SELFTEST_CASES)} cases passed[/green]")


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
