"""Errors raised by the input language front end.

Both kinds are fatal: they abort the evaluation and are shown to the user
verbatim so the statement can be corrected and resubmitted.
"""

from __future__ import annotations

from typing import Any

# Characters of source shown either side of the failure offset
CONTEXT_RADIUS = 20


def context_snippet(source: str, offset: int, radius: int = CONTEXT_RADIUS) -> str:
    """Return the source around ``offset`` with a caret line under it."""
    start = max(0, offset - radius)
    end = min(len(source), offset + radius)
    caret = min(radius, offset)
    return f"...{source[start:end]}\n{' ' * (3 + caret)}^"


class InputSyntaxError(Exception):
    """Base class for malformed DSL input."""

    kind = "syntax_error"

    def __init__(self, message: str, line: int, column: int, context: str | None = None):
        self.message = message
        self.line = line
        self.column = column
        self.context = context
        super().__init__(str(self))

    def __str__(self) -> str:
        text = f"SSE-Lang parse error: {self.message} at {self.line}:{self.column}"
        if self.context:
            text = f"{text}\n{self.context}"
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.kind,
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "context": self.context,
        }


class LexError(InputSyntaxError):
    """Malformed token in the raw input text."""

    kind = "lex_error"


class ParseError(InputSyntaxError):
    """Token stream does not follow the statement grammar."""

    kind = "parse_error"
