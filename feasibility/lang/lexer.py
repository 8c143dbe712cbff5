"""Tokenizer for SSE-Lang input statements.

Produces a flat token stream terminated by an EOF token. Any malformed
input raises LexError with the 1-based line/column of the failure and a
short context snippet.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum

from .errors import LexError, context_snippet

IDENT_START = frozenset(string.ascii_letters + "_")
IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "_-")
DIGITS = frozenset(string.digits)

KEYWORDS = {"CHECK", "EVAL"}


class TokenType(str, Enum):
    """Token type tags."""

    COLON = "COLON"
    EQUAL = "EQUAL"
    SEMI = "SEMI"
    DOT = "DOT"
    STRING = "STRING"
    SYMBOL = "SYMBOL"
    NUMBER = "NUMBER"
    IDENT = "IDENT"
    KW_CHECK = "KW_CHECK"
    KW_EVAL = "KW_EVAL"
    EOF = "EOF"


PUNCTUATION = {
    ":": TokenType.COLON,
    "=": TokenType.EQUAL,
    ";": TokenType.SEMI,
    ".": TokenType.DOT,
}


@dataclass(frozen=True)
class SourceLocation:
    line: int
    column: int
    offset: int


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str | None
    location: SourceLocation

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column


class Lexer:
    """Single-pass scanner over the raw input text."""

    def __init__(self, source: str):
        self.source = source or ""
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def _peek(self, ahead: int = 0) -> str:
        index = self.pos + ahead
        return self.source[index] if index < len(self.source) else ""

    def _advance(self, count: int = 1) -> None:
        self.pos += count
        self.column += count

    def _location(self) -> SourceLocation:
        return SourceLocation(self.line, self.column, self.pos)

    def _error(self, message: str) -> LexError:
        return LexError(
            message,
            line=self.line,
            column=self.column,
            context=context_snippet(self.source, self.pos),
        )

    def _push(self, type_: TokenType, value: str | None, location: SourceLocation) -> None:
        self.tokens.append(Token(type_, value, location))

    def tokenize(self) -> list[Token]:
        while self.pos < len(self.source):
            char = self.source[self.pos]

            if char in " \t\r":
                self._advance()
            elif char == "\n":
                self.pos += 1
                self.line += 1
                self.column = 1
            elif char == "/" and self._peek(1) == "/":
                self._skip_comment()
            elif char in PUNCTUATION:
                self._push(PUNCTUATION[char], char, self._location())
                self._advance()
            elif char == '"':
                self._read_string()
            elif char == "#":
                self._read_symbol()
            elif char == "-" or char in DIGITS:
                self._read_number()
            elif char in IDENT_START:
                self._read_identifier()
            else:
                raise self._error(f"Unexpected character '{char}'")

        self._push(TokenType.EOF, None, self._location())
        return self.tokens

    def _skip_comment(self) -> None:
        while self.pos < len(self.source) and self.source[self.pos] != "\n":
            self._advance()

    def _read_string(self) -> None:
        start = self._location()
        self._advance()  # opening quote
        chars: list[str] = []
        while self.pos < len(self.source) and self.source[self.pos] != '"':
            char = self.source[self.pos]
            if char == "\n":
                raise self._error("Unterminated string literal")
            if char == "\\" and self._peek(1) in ('"', "\\"):
                chars.append(self._peek(1))
                self._advance(2)
                continue
            chars.append(char)
            self._advance()
        if self.pos >= len(self.source):
            raise self._error("Unterminated string literal")
        self._advance()  # closing quote
        self._push(TokenType.STRING, "".join(chars), start)

    def _read_symbol(self) -> None:
        start = self._location()
        if self._peek(1) == "!":
            raise self._error("Directive syntax '#!' not supported in v0.1.1 input")
        self._advance()
        if self._peek() not in IDENT_CHARS:
            raise self._error("Expected symbol after '#'")
        begin = self.pos
        while self.pos < len(self.source) and self.source[self.pos] in IDENT_CHARS:
            self._advance()
        self._push(TokenType.SYMBOL, self.source[begin:self.pos], start)

    def _read_number(self) -> None:
        start = self._location()
        end = self.pos
        if self.source[end] == "-":
            end += 1
        if end >= len(self.source) or self.source[end] not in DIGITS:
            raise self._error("Unexpected '-'")
        while end < len(self.source) and self.source[end] in DIGITS:
            end += 1
        # A dot only belongs to the number when a digit follows it
        if (
            end + 1 < len(self.source)
            and self.source[end] == "."
            and self.source[end + 1] in DIGITS
        ):
            end += 1
            while end < len(self.source) and self.source[end] in DIGITS:
                end += 1
        raw = self.source[self.pos:end]
        self._advance(end - self.pos)
        self._push(TokenType.NUMBER, raw, start)

    def _read_identifier(self) -> None:
        start = self._location()
        begin = self.pos
        while self.pos < len(self.source) and self.source[self.pos] in IDENT_CHARS:
            self._advance()
        name = self.source[begin:self.pos]
        upper = name.upper()
        if upper in KEYWORDS:
            self._push(TokenType[f"KW_{upper}"], upper, start)
        else:
            self._push(TokenType.IDENT, name, start)


def tokenize(text: str) -> list[Token]:
    """Convert raw input text into a token stream ending with EOF."""
    return Lexer(text).tokenize()
