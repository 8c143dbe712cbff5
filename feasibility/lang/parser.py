"""Recursive-descent parser for SSE-Lang statements.

Grammar::

    program    := statement*
    statement  := assignment | query
    assignment := fieldPath (":" | "=") value ";"
    fieldPath  := IDENT ("." IDENT)*
    value      := NUMBER | STRING | SYMBOL | enumPath
    enumPath   := IDENT ("." IDENT)*
    query      := (CHECK | EVAL) ";"

Assignments are applied in order into a canonical field map; a later
assignment to the same canonical key replaces the earlier one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from .aliases import build_alias_index, resolve_alias
from .errors import ParseError, context_snippet
from .lexer import Token, TokenType, tokenize

if TYPE_CHECKING:
    from feasibility.rules.schema import Ruleset

QUERY_TOKENS = (TokenType.KW_CHECK, TokenType.KW_EVAL)


def normalize_text(value: str) -> str:
    """Lowercase and drop backticks, the stored form of textual values."""
    return value.lower().replace("`", "")


def parse_number(raw: str) -> int | float:
    return float(raw) if "." in raw else int(raw)


class Parser:
    """Consumes a token stream and builds the canonical field map."""

    def __init__(
        self,
        tokens: list[Token],
        alias_index: Mapping[str, str] | None = None,
        source: str = "",
    ):
        self.tokens = tokens
        self.index = 0
        self.alias_index = alias_index or {}
        self.fields: dict[str, Any] = {}
        self.seen_query = False
        self.source = source

    def _peek(self) -> Token:
        return self.tokens[self.index]

    def _next(self) -> Token:
        token = self.tokens[self.index]
        if token.type is not TokenType.EOF:
            self.index += 1
        return token

    def _error(self, message: str, token: Token) -> ParseError:
        context = context_snippet(self.source, token.location.offset) if self.source else None
        return ParseError(message, line=token.line, column=token.column, context=context)

    def _expect(self, type_: TokenType) -> Token:
        token = self._next()
        if token.type is not type_:
            raise self._error(f"expected {type_.value} but got {token.type.value}", token)
        return token

    def parse(self) -> dict[str, Any]:
        while self._peek().type is not TokenType.EOF:
            token = self._peek()
            if token.type is TokenType.IDENT:
                self._parse_assignment()
            elif token.type in QUERY_TOKENS:
                self._parse_query()
            else:
                raise self._error(f"unexpected token {token.type.value}", token)
        return self.fields

    def _parse_path(self) -> list[str]:
        parts = [self._expect(TokenType.IDENT).value or ""]
        while self._peek().type is TokenType.DOT:
            self._next()
            parts.append(self._expect(TokenType.IDENT).value or "")
        return parts

    def _parse_assignment(self) -> None:
        key = ".".join(self._parse_path())
        operator = self._next()
        if operator.type not in (TokenType.COLON, TokenType.EQUAL):
            raise self._error("expected ':' or '='", operator)
        value = self._parse_value()
        self._expect(TokenType.SEMI)
        if isinstance(value, str):
            value = normalize_text(value)
        self.fields[resolve_alias(self.alias_index, key)] = value

    def _parse_value(self) -> Any:
        token = self._peek()
        if token.type is TokenType.NUMBER:
            self._next()
            return parse_number(token.value or "")
        if token.type in (TokenType.STRING, TokenType.SYMBOL):
            self._next()
            return token.value or ""
        if token.type is TokenType.IDENT:
            # Enum paths keep only their last segment: reliability.partial -> partial
            return self._parse_path()[-1]
        raise self._error("expected value", token)

    def _parse_query(self) -> None:
        self._next()
        self._expect(TokenType.SEMI)
        self.seen_query = True


def parse_program(text: str, ruleset: "Ruleset | None" = None) -> tuple[dict[str, Any], bool]:
    """Parse DSL text into ``(field_map, seen_query)``.

    Raises:
        LexError: if the text cannot be tokenized.
        ParseError: if the tokens do not follow the grammar.
    """
    parser = Parser(tokenize(text), build_alias_index(ruleset), source=text)
    fields = parser.parse()
    return fields, parser.seen_query
