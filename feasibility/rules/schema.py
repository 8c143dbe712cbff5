"""Pydantic models for the feasibility ruleset resource.

The models mirror the ruleset JSON shape::

    {spec, version, source, defaults: {level},
     aliases: {canonical: [synonyms]},
     ordinal_scales: {field: [levels weakest -> strongest]},
     rules: [{id, name, group, cit, level,
              if: [{field, op, value} | {raw}],
              then: {judgement, ...}, rationale, status}]}

A ruleset is frozen once validated and shared read-only by every
evaluation.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    field_validator,
    model_validator,
)


# =============================================================================
# Severity and Operators
# =============================================================================


class Severity(str, Enum):
    """Rule severity tiers."""

    HARD = "hard"
    SOFT = "soft"


class ComparisonOp(str, Enum):
    """Comparison operators allowed in rule conditions."""

    EQ = "="
    NE = "!="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="


OPERATOR_SYNONYMS = {"==": "="}
OPERATORS = {op.value for op in ComparisonOp}


def normalize_operator(op: Any) -> Any:
    if isinstance(op, str):
        op = op.strip()
        return OPERATOR_SYNONYMS.get(op, op)
    return op


# =============================================================================
# Conditions
# =============================================================================


class Comparison(BaseModel):
    """A machine-evaluable ``field op value`` condition."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["comparison"] = "comparison"
    field: str
    op: ComparisonOp
    value: Any = None

    @field_validator("op", mode="before")
    @classmethod
    def _normalize_op(cls, value: Any) -> Any:
        return normalize_operator(value)

    def describe(self) -> str:
        return f"{self.field} {self.op.value} {self.value}"


class UnparsedCondition(BaseModel):
    """A condition kept only as source text; it can never be evaluated."""

    model_config = ConfigDict(frozen=True, extra="allow")

    kind: Literal["unparsed"] = "unparsed"
    raw: str = ""

    @model_validator(mode="before")
    @classmethod
    def _coerce_raw(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"raw": data}
        if isinstance(data, dict) and not data.get("raw"):
            data = dict(data)
            data["raw"] = " ".join(
                str(data[key]) for key in ("field", "op", "value") if data.get(key) is not None
            )
        return data

    def describe(self) -> str:
        return self.raw


def _condition_kind(data: Any) -> str:
    """Tag a raw condition: complete field/op pairs are comparisons."""
    if isinstance(data, (Comparison, UnparsedCondition)):
        return data.kind
    if isinstance(data, dict):
        if data.get("kind") in ("comparison", "unparsed"):
            return data["kind"]
        if data.get("field") and normalize_operator(data.get("op")) in OPERATORS:
            return "comparison"
    return "unparsed"


Condition = Annotated[
    Union[
        Annotated[Comparison, Tag("comparison")],
        Annotated[UnparsedCondition, Tag("unparsed")],
    ],
    Discriminator(_condition_kind),
]


# =============================================================================
# Rules
# =============================================================================


class Consequence(BaseModel):
    """What a triggered rule concludes."""

    model_config = ConfigDict(frozen=True, extra="allow")

    judgement: str = ""

    @field_validator("judgement", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class Rule(BaseModel):
    """A single feasibility rule; all conditions must hold for it to trigger."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    id: str
    name: str = ""
    group: str = ""
    cit: str = ""
    level: str | None = None
    conditions: list[Condition] = Field(default_factory=list, alias="if")
    then: Consequence = Field(default_factory=Consequence)
    rationale: str | None = None
    status: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, (int, float)) else value

    @field_validator("name", "group", "cit", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("conditions", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("then", mode="before")
    @classmethod
    def _none_to_consequence(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def judgement(self) -> str:
        return self.then.judgement or ""


# =============================================================================
# Ruleset
# =============================================================================


class RulesetDefaults(BaseModel):
    """Ruleset-wide defaults."""

    model_config = ConfigDict(frozen=True, extra="allow")

    level: str = Severity.HARD.value

    @field_validator("level", mode="before")
    @classmethod
    def _none_to_hard(cls, value: Any) -> Any:
        return Severity.HARD.value if value is None else value


class Ruleset(BaseModel):
    """A versioned bundle of aliases, ordinal scales and ordered rules."""

    model_config = ConfigDict(frozen=True, extra="allow")

    spec: str = ""
    version: str = ""
    source: str = ""
    defaults: RulesetDefaults = Field(default_factory=RulesetDefaults)
    aliases: dict[str, list[str]] = Field(default_factory=dict)
    ordinal_scales: dict[str, list[str]] = Field(default_factory=dict)
    rules: list[Rule] = Field(default_factory=list)

    @field_validator("spec", "version", "source", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if value is None:
            return ""
        return str(value) if isinstance(value, (int, float)) else value

    @field_validator("defaults", mode="before")
    @classmethod
    def _none_to_defaults(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("aliases", "ordinal_scales", mode="before")
    @classmethod
    def _string_lists(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {
                str(key): [str(item) for item in (items or [])]
                for key, items in value.items()
            }
        return value

    @field_validator("rules", mode="before")
    @classmethod
    def _none_to_rules(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="after")
    def _unique_rule_ids(self) -> "Ruleset":
        seen: set[str] = set()
        for rule in self.rules:
            if rule.id in seen:
                raise ValueError(f"Duplicate rule id: {rule.id}")
            seen.add(rule.id)
        return self

    def severity_of(self, rule: Rule) -> Severity:
        """Resolve a rule's severity; anything other than 'soft' is hard."""
        level = rule.level or self.defaults.level or Severity.HARD.value
        if str(level).strip().lower() == Severity.SOFT.value:
            return Severity.SOFT
        return Severity.HARD

    def get_rule(self, rule_id: str) -> Rule | None:
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        return None
