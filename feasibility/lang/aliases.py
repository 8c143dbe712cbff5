"""Alias resolution for field names.

The index is rebuilt from the ruleset on every call; nothing is cached
between evaluations, so swapping rulesets mid-session never leaves stale
synonyms behind.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from feasibility.rules.schema import Ruleset


def build_alias_index(ruleset: "Ruleset | None") -> dict[str, str]:
    """Build a lowercase synonym -> canonical name lookup.

    Canonical names are registered after synonyms so a canonical name
    always resolves to itself, which keeps canonicalization idempotent.
    """
    aliases: Mapping[str, Any] = ruleset.aliases if ruleset is not None else {}
    index: dict[str, str] = {}
    for canonical, synonyms in aliases.items():
        for synonym in synonyms or []:
            index[str(synonym).strip().lower()] = canonical
    for canonical in aliases:
        index[str(canonical).lower()] = canonical
    return index


def resolve_alias(index: Mapping[str, str], raw_key: str) -> str:
    """Look up ``raw_key`` in a prebuilt index; unknown keys map to themselves."""
    return index.get(str(raw_key).strip().lower(), raw_key)


def canonicalize(ruleset: "Ruleset | None", raw_key: str) -> str:
    """Return the canonical field name for ``raw_key`` under ``ruleset``."""
    return resolve_alias(build_alias_index(ruleset), raw_key)
