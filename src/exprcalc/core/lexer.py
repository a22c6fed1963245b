"""
Lexer for arithmetic expressions.

Converts an expression string into typed tokens, one at a time, on demand.
Malformed input never raises here: it becomes an INVALID token plus a
lexical diagnostic, and the parser decides what to do with it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum, auto

from exprcalc.core.errors import Diagnostic, DiagnosticKind

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for arithmetic expressions."""

    # Literals
    NUMBER = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    POWER = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()

    # End of input
    EOF = auto()

    # Unrecognized or malformed input
    INVALID = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A single token produced by the lexer.

    ``pos`` is the index of the token's first character in the source
    string (a code point offset, not a UTF-8 byte offset). Diagnostic
    positions use the same unit.
    """

    kind: TokenKind
    value: str | None
    pos: int

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r}, pos={self.pos})"


_SINGLE_CHAR: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.MULTIPLY,
    "/": TokenKind.DIVIDE,
    "^": TokenKind.POWER,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}

_WHITESPACE = " \t\n\r\v\f"

# Current-character value once the input is exhausted
_END = ""


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Lexer:
    """Produces tokens from an expression string, one per ``next_token()`` call."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.length = len(source)
        self.pos = 0
        self.current = source[0] if source else _END
        self.diagnostics: list[Diagnostic] = []

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens until end of input (the EOF token is not yielded)."""
        while True:
            tok = self.next_token()
            if tok.kind == TokenKind.EOF:
                return
            yield tok

    def advance(self) -> None:
        """Move one character forward, stopping at the end of input."""
        if self.pos < self.length:
            self.pos += 1
        self.current = self.source[self.pos] if self.pos < self.length else _END

    def peek(self, offset: int = 1) -> str:
        idx = self.pos + offset
        if idx < self.length:
            return self.source[idx]
        return _END

    def skip_whitespace(self) -> None:
        while self.current != _END and self.current in _WHITESPACE:
            self.advance()

    def next_token(self) -> Token:
        """Return the next token. Returns EOF forever once input is exhausted."""
        self.skip_whitespace()

        if self.current == _END:
            return Token(TokenKind.EOF, None, self.pos)

        c = self.current

        # Numbers, including ".5"
        if _is_digit(c) or (c == "." and _is_digit(self.peek())):
            return self._read_number()

        if c == ".":
            # A decimal point not followed by a digit
            start = self.pos
            self.error("Invalid number format", start, c)
            self.advance()
            return Token(TokenKind.INVALID, c, start)

        start = self.pos
        self.advance()
        kind = _SINGLE_CHAR.get(c)
        if kind is not None:
            return Token(kind, c, start)

        self.error("Unknown character", start, c)
        return Token(TokenKind.INVALID, c, start)

    def _read_number(self) -> Token:
        """Read the longest run of digits containing at most one decimal point."""
        start = self.pos
        has_decimal = False
        while self.current != _END and (
            _is_digit(self.current) or (self.current == "." and not has_decimal)
        ):
            if self.current == ".":
                has_decimal = True
            self.advance()
        return Token(TokenKind.NUMBER, self.source[start : self.pos], start)

    def error(self, message: str, position: int, text: str) -> None:
        """Record a lexical diagnostic."""
        diagnostic = Diagnostic(DiagnosticKind.LEXICAL, message, position, text)
        self.diagnostics.append(diagnostic)
        logger.debug(diagnostic.format())


def iter_tokens(source: str) -> Iterator[Token]:
    """Lazily yield the tokens of ``source``, excluding EOF."""
    return iter(Lexer(source))


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens ending with EOF."""
    lexer = Lexer(source)
    tokens: list[Token] = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.kind == TokenKind.EOF:
            return tokens
