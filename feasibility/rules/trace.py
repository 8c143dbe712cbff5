"""
Citation trace identifiers for decisions.

A decision is reduced to a canonical record, serialized with sorted keys
and hashed with 32-bit FNV-1a. Two identifiers are produced:

- ``trace_id``: covers the record including the submission timestamp, so
  the same decision taken at two instants gets two different ids.
- ``fingerprint``: the same record without the timestamp, stable for
  identical decisions.

Neither is a uniqueness or security guarantee; collisions are expected
at scale.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from .decision import DecisionResult
from .schema import Ruleset

FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193
DEFAULT_PREFIX = "SSE-"


def isoformat_utc(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _canonical(value: Any, ancestors: set[int]) -> Any:
    if isinstance(value, (dict, list, tuple)):
        marker = id(value)
        if marker in ancestors:
            return None
        ancestors.add(marker)
        try:
            if isinstance(value, dict):
                return {str(key): _canonical(value[key], ancestors) for key in sorted(value, key=str)}
            return [_canonical(item, ancestors) for item in value]
        finally:
            ancestors.discard(marker)
    return value


def stable_serialize(value: Any) -> str:
    """Deterministic compact JSON: keys sorted at every level, cycles -> null."""
    return json.dumps(_canonical(value, set()), separators=(",", ":"), ensure_ascii=False)


def _utf16_units(text: str):
    for char in text:
        code = ord(char)
        if code > 0xFFFF:
            code -= 0x10000
            yield 0xD800 + (code >> 10)
            yield 0xDC00 + (code & 0x3FF)
        else:
            yield code


def fnv1a_32(text: str) -> int:
    """32-bit FNV-1a over the UTF-16 code units of ``text``."""
    value = FNV_OFFSET_BASIS
    for unit in _utf16_units(text):
        value ^= unit
        value = (value * FNV_PRIME) & 0xFFFFFFFF
    return value


def format_id(record: dict[str, Any], prefix: str = DEFAULT_PREFIX) -> str:
    return f"{prefix}{fnv1a_32(stable_serialize(record)):08x}"


def build_trace_record(
    result: DecisionResult, ruleset: Ruleset, when: str | None
) -> dict[str, Any]:
    """Canonical record of a decision; ``when`` is omitted when None."""
    primary = result.primary_rule
    derivations = []
    for derivation in result.derivations:
        entry: dict[str, Any] = {"name": derivation.name, "value": derivation.value}
        if derivation.contributors is not None:
            entry["from"] = [
                {"field": c.field, "level": c.level} for c in derivation.contributors
            ]
        derivations.append(entry)

    record: dict[str, Any] = {
        "ruleset": {
            "spec": ruleset.spec,
            "version": ruleset.version,
            "source": ruleset.source,
        },
        "verdict": result.verdict.value,
        "judgement": result.judgement,
        "primary_rule": (
            {"id": primary.id, "cit": primary.cit, "level": primary.level}
            if primary is not None
            else None
        ),
        "triggered": result.triggered_ids,
        "derivations": derivations,
    }
    if when is not None:
        record["when"] = when
    return record


def attach_trace(
    result: DecisionResult,
    ruleset: Ruleset,
    now: datetime | None = None,
    prefix: str = DEFAULT_PREFIX,
) -> DecisionResult:
    """Return a copy of ``result`` carrying its timestamp, fingerprint and trace id."""
    when = isoformat_utc(now or datetime.now(timezone.utc))
    return result.model_copy(
        update={
            "submitted_at": when,
            "fingerprint": format_id(build_trace_record(result, ruleset, None), prefix),
            "trace_id": format_id(build_trace_record(result, ruleset, when), prefix),
        }
    )
