"""Condition matching for a single rule against a field map."""

from __future__ import annotations

import operator
from typing import Any, Callable, Mapping

from pydantic import BaseModel

from .schema import ComparisonOp, Rule, Ruleset, UnparsedCondition

ORDERING: dict[ComparisonOp, Callable[[Any, Any], bool]] = {
    ComparisonOp.EQ: operator.eq,
    ComparisonOp.NE: operator.ne,
    ComparisonOp.GT: operator.gt,
    ComparisonOp.GE: operator.ge,
    ComparisonOp.LT: operator.lt,
    ComparisonOp.LE: operator.le,
}


class ConditionUnresolvable(Exception):
    """A condition names a field the submission did not provide."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing field: {field}")


class RuleMatch(BaseModel):
    """Outcome of matching one rule."""

    rule_id: str
    matched: bool
    reason: str | None = None


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def as_text(value: Any) -> str:
    """Lowercase text form used for ordinal lookup and string comparison."""
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).lower()


def ordinal_position(ruleset: Ruleset, field: str, value: Any) -> int | None:
    """Index of ``value`` on the field's configured scale, if any."""
    scale = ruleset.ordinal_scales.get(field)
    if not scale:
        return None
    levels = [level.lower() for level in scale]
    text = as_text(value)
    return levels.index(text) if text in levels else None


def compare_values(ruleset: Ruleset, field: str, op: ComparisonOp, left: Any, right: Any) -> bool:
    """Compare two values: ordinal first, then numeric, then text equality."""
    compare = ORDERING[op]

    left_pos = ordinal_position(ruleset, field, left)
    right_pos = ordinal_position(ruleset, field, right)
    if left_pos is not None and right_pos is not None:
        return compare(left_pos, right_pos)

    if is_number(left) and is_number(right):
        return compare(left, right)

    # Plain strings only support (in)equality
    if op in (ComparisonOp.EQ, ComparisonOp.NE):
        return compare(as_text(left), as_text(right))
    return False


def _lookup(fields: Mapping[str, Any], field: str) -> Any:
    try:
        return fields[field]
    except KeyError:
        raise ConditionUnresolvable(field) from None


def evaluate_rule(ruleset: Ruleset, rule: Rule, fields: Mapping[str, Any]) -> RuleMatch:
    """Match a rule; every condition must hold. No conditions always matches."""
    for condition in rule.conditions:
        if isinstance(condition, UnparsedCondition):
            return RuleMatch(rule_id=rule.id, matched=False, reason="Unparsed condition")

        try:
            left = _lookup(fields, condition.field)
        except ConditionUnresolvable as exc:
            return RuleMatch(rule_id=rule.id, matched=False, reason=str(exc))

        if not compare_values(ruleset, condition.field, condition.op, left, condition.value):
            return RuleMatch(
                rule_id=rule.id,
                matched=False,
                reason=f"Condition failed: {condition.describe()}",
            )

    return RuleMatch(rule_id=rule.id, matched=True)
