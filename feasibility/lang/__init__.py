"""SSE-Lang input front end - lexer, parsers, alias resolution."""

from .aliases import build_alias_index, resolve_alias, canonicalize
from .dialect import Dialect, ParsedInput, detect_dialect, parse_input
from .errors import InputSyntaxError, LexError, ParseError
from .legacy import parse_legacy_lines
from .lexer import Lexer, SourceLocation, Token, TokenType, tokenize
from .parser import Parser, parse_program

__all__ = [
    # Aliases
    "build_alias_index",
    "resolve_alias",
    "canonicalize",
    # Dialects
    "Dialect",
    "ParsedInput",
    "detect_dialect",
    "parse_input",
    # Errors
    "InputSyntaxError",
    "LexError",
    "ParseError",
    # Lexer
    "Lexer",
    "SourceLocation",
    "Token",
    "TokenType",
    "tokenize",
    # Parsers
    "Parser",
    "parse_program",
    "parse_legacy_lines",
]
