"""Input dialect selection and the combined parse entry point."""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from .legacy import parse_legacy_lines
from .parser import parse_program

if TYPE_CHECKING:
    from feasibility.rules.schema import Ruleset

logger = logging.getLogger(__name__)

QUERY_KEYWORD = re.compile(r"\b(CHECK|EVAL)\b", re.IGNORECASE | re.ASCII)
SYMBOL_TAG = re.compile(r"#\w+", re.ASCII)
DOTTED_IDENT = re.compile(r"[A-Za-z_]\w*\.[A-Za-z_]\w*", re.ASCII)


class Dialect(str, Enum):
    """Supported input formats."""

    DSL = "dsl"
    LEGACY = "legacy"


class ParsedInput(BaseModel):
    """Canonical field map produced from one submission."""

    dialect: Dialect
    fields: dict[str, Any] = Field(default_factory=dict)
    seen_query: bool = False


def detect_dialect(text: str) -> Dialect:
    """Choose the parser for ``text``; a pure function of the text alone."""
    stripped = (text or "").strip()
    if not stripped:
        return Dialect.LEGACY
    if ";" in stripped:
        return Dialect.DSL
    if QUERY_KEYWORD.search(stripped):
        return Dialect.DSL
    if SYMBOL_TAG.search(stripped):
        return Dialect.DSL
    if DOTTED_IDENT.search(stripped):
        return Dialect.DSL
    return Dialect.LEGACY


def parse_input(text: str, ruleset: "Ruleset | None" = None) -> ParsedInput:
    """Select the dialect once and parse ``text`` with it.

    Raises:
        LexError, ParseError: only when the DSL dialect is selected.
    """
    dialect = detect_dialect(text)
    logger.debug("Selected %s dialect for %d characters of input", dialect.value, len(text or ""))

    if dialect is Dialect.DSL:
        fields, seen_query = parse_program(text, ruleset)
        return ParsedInput(dialect=dialect, fields=fields, seen_query=seen_query)

    return ParsedInput(dialect=dialect, fields=parse_legacy_lines(text, ruleset))
