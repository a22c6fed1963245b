"""
Recursive descent parser for arithmetic expressions.

Grammar (precedence low to high):
    expression → term (("+" | "-") term)*        left-associative
    term       → factor (("*" | "/") factor)*    left-associative
    factor     → ("+" | "-") factor | power      unary, applies right to left
    power      → primary ("^" power)?            right-associative
    primary    → NUMBER | "(" expression ")"

Tokens are pulled from the lexer one at a time; the parser holds exactly
one lookahead token.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import cast

from exprcalc.core.errors import Diagnostic, DiagnosticKind, ExpressionSyntaxError
from exprcalc.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    NumberLiteral,
    UnaryExpr,
    UnaryOp,
)
from exprcalc.core.lexer import Lexer, Token, TokenKind

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100

_ADDITIVE: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
}

_MULTIPLICATIVE: dict[TokenKind, BinaryOp] = {
    TokenKind.MULTIPLY: BinaryOp.MUL,
    TokenKind.DIVIDE: BinaryOp.DIV,
}

_UNARY: dict[TokenKind, UnaryOp] = {
    TokenKind.PLUS: UnaryOp.POS,
    TokenKind.MINUS: UnaryOp.NEG,
}


def _describe(tok: Token) -> str:
    if tok.value is None:
        return tok.kind.name
    return f"{tok.kind.name}({tok.value})"


class Parser:
    """Recursive descent parser over a lexer's token stream."""

    def __init__(self, lexer: Lexer, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.lexer = lexer
        self.max_depth = max_depth
        self.depth = 0
        self.current: Token = lexer.next_token()

    def error(self, message: str, tok: Token | None = None) -> ExpressionSyntaxError:
        """Build a syntax error at ``tok`` (default: the lookahead token)."""
        tok = tok or self.current
        diagnostic = Diagnostic(DiagnosticKind.SYNTAX, message, tok.pos, tok.value)
        logger.debug(diagnostic.format())
        return ExpressionSyntaxError(diagnostic, self.lexer.diagnostics)

    def eat(self, expected: TokenKind) -> Token:
        """Consume the lookahead token if it is of the expected kind."""
        tok = self.current
        if tok.kind != expected:
            raise self.error(f"Expected {expected.name}, got {_describe(tok)}")
        self.current = self.lexer.next_token()
        return tok

    @contextmanager
    def nested(self) -> Iterator[None]:
        """Track recursion into a parenthesized group."""
        if self.depth >= self.max_depth:
            raise self.error("Expression nested too deeply")
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    # -- Grammar rules --

    def parse(self) -> Expr:
        """Parse a complete expression; nothing but EOF may follow it."""
        expr = self.parse_expression()
        if self.current.kind != TokenKind.EOF:
            raise self.error("Unexpected token after expression")
        return expr

    def parse_expression(self) -> Expr:
        """term (('+' | '-') term)*"""
        left = self.parse_term()
        while self.current.kind in _ADDITIVE:
            op = _ADDITIVE[self.current.kind]
            self.eat(self.current.kind)
            right = self.parse_term()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_term(self) -> Expr:
        """factor (('*' | '/') factor)*"""
        left = self.parse_factor()
        while self.current.kind in _MULTIPLICATIVE:
            op = _MULTIPLICATIVE[self.current.kind]
            self.eat(self.current.kind)
            right = self.parse_factor()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_factor(self) -> Expr:
        """('+' | '-') factor | power

        Leading signs are collected in a loop and applied innermost first,
        so a run of signs costs no recursion.
        """
        ops: list[UnaryOp] = []
        while self.current.kind in _UNARY:
            ops.append(_UNARY[self.current.kind])
            self.eat(self.current.kind)

        expr = self.parse_power()
        for op in reversed(ops):
            expr = UnaryExpr(op=op, operand=expr)
        return expr

    def parse_power(self) -> Expr:
        """primary ('^' power)?

        Operands are collected left to right and folded from the right.
        """
        operands = [self.parse_primary()]
        while self.current.kind == TokenKind.POWER:
            self.eat(TokenKind.POWER)
            operands.append(self.parse_primary())

        expr = operands.pop()
        while operands:
            expr = BinaryExpr(op=BinaryOp.POW, left=operands.pop(), right=expr)
        return expr

    def parse_primary(self) -> Expr:
        """NUMBER | '(' expression ')'"""
        tok = self.current

        if tok.kind == TokenKind.NUMBER:
            self.eat(TokenKind.NUMBER)
            return NumberLiteral(value=float(cast(str, tok.value)))

        if tok.kind == TokenKind.LPAREN:
            self.eat(TokenKind.LPAREN)
            with self.nested():
                expr = self.parse_expression()
            self.eat(TokenKind.RPAREN)
            return expr

        raise self.error(f"Expected number or '(', got {_describe(tok)}")


def parse_expr(source: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Expr:
    """Parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "3 + 4 * 2^2")
        max_depth: Maximum nesting of parenthesized groups

    Returns:
        Parsed expression AST.

    Raises:
        ExpressionSyntaxError: If the expression is invalid. Lexical
            diagnostics found along the way are attached to the error.
    """
    parser = Parser(Lexer(source), max_depth=max_depth)
    try:
        return parser.parse()
    except RecursionError as e:
        raise parser.error("Expression nested too deeply") from e
