"""Lenient line-oriented ``Key: value`` input format.

This path never raises: lines that do not look like an assignment are
dropped so the user can retry interactively.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from .aliases import build_alias_index, resolve_alias
from .parser import parse_number

if TYPE_CHECKING:
    from feasibility.rules.schema import Ruleset

LINE_BREAK = re.compile(r"\r?\n")
ASSIGNMENT_LINE = re.compile(r"^([^:=]+)\s*[:=]\s*(.+)$")
NUMERIC_VALUE = re.compile(r"^-?[0-9]+(\.[0-9]+)?$")


def parse_legacy_lines(text: str, ruleset: "Ruleset | None" = None) -> dict[str, Any]:
    """Parse ``Key: value`` / ``Key = value`` lines into a canonical field map."""
    alias_index = build_alias_index(ruleset)
    fields: dict[str, Any] = {}

    for line in LINE_BREAK.split(text or ""):
        line = line.strip()
        if not line:
            continue
        match = ASSIGNMENT_LINE.match(line)
        if not match:
            continue

        key = match.group(1).strip()
        value = match.group(2).strip().replace("`", "")
        if NUMERIC_VALUE.match(value):
            fields[resolve_alias(alias_index, key)] = parse_number(value)
        else:
            fields[resolve_alias(alias_index, key)] = value.lower()

    return fields
