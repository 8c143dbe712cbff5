"""Verdict resolution over triggered rules.

Triggered rules are ranked by an explicit tier sequence::

    HARD_INFEASIBLE > HARD_OTHER > SOFT > NONE

The first tier with a candidate decides the verdict. Within a tier the
first rule in ruleset declaration order wins.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, Field

from feasibility.lang.dialect import Dialect
from .derivation import Derivation
from .evaluator import evaluate_rule
from .schema import Rule, Ruleset, Severity

logger = logging.getLogger(__name__)

INFEASIBLE = "infeasible"


class Verdict(str, Enum):
    """Overall feasibility verdict."""

    NO = "NO"
    YES_QUALIFIED = "YES*"
    YES_ADVISORY = "YES(ADVISORY)"
    YES = "YES"


class DecisionTier(str, Enum):
    """Priority tiers, strongest first."""

    HARD_INFEASIBLE = "hard_infeasible"
    HARD_OTHER = "hard_other"
    SOFT = "soft"
    NONE = "none"


TIER_SEQUENCE = (
    DecisionTier.HARD_INFEASIBLE,
    DecisionTier.HARD_OTHER,
    DecisionTier.SOFT,
    DecisionTier.NONE,
)

TIER_VERDICTS = {
    DecisionTier.HARD_INFEASIBLE: Verdict.NO,
    DecisionTier.HARD_OTHER: Verdict.YES_QUALIFIED,
    DecisionTier.SOFT: Verdict.YES_ADVISORY,
    DecisionTier.NONE: Verdict.YES,
}

INFEASIBLE_JUDGEMENT = "Infeasible"
ADVISORY_JUDGEMENT = "Advisory flags present"
DEFAULT_JUDGEMENT = "No hard infeasibility triggered"


class RuleRef(BaseModel):
    """The parts of a rule a renderer needs to cite it."""

    id: str
    name: str = ""
    group: str = ""
    cit: str = ""
    level: str = ""
    severity: Severity = Severity.HARD
    judgement: str = ""
    rationale: str | None = None
    status: str | None = None

    @classmethod
    def from_rule(cls, rule: Rule, severity: Severity) -> "RuleRef":
        return cls(
            id=rule.id,
            name=rule.name,
            group=rule.group,
            cit=rule.cit,
            level=rule.level or "",
            severity=severity,
            judgement=rule.judgement,
            rationale=rule.rationale,
            status=rule.status,
        )


class DecisionResult(BaseModel):
    """Complete outcome of one evaluation."""

    verdict: Verdict
    judgement: str
    tier: DecisionTier
    primary_rule: RuleRef | None = None
    triggered: list[RuleRef] = Field(default_factory=list)
    triggered_hard: list[RuleRef] = Field(default_factory=list)
    triggered_soft: list[RuleRef] = Field(default_factory=list)
    derivations: list[Derivation] = Field(default_factory=list)

    # Submission metadata
    dialect: Dialect | None = None
    seen_query: bool = False

    # Citation trace
    submitted_at: str | None = None
    fingerprint: str | None = None
    trace_id: str | None = None

    @property
    def triggered_ids(self) -> list[str]:
        return [ref.id for ref in self.triggered]


def is_infeasible(rule: Rule) -> bool:
    return rule.judgement.lower() == INFEASIBLE


def select_candidate(tier: DecisionTier, hard: list[Rule], soft: list[Rule]) -> Rule | None:
    """First rule (declaration order) eligible for ``tier``."""
    if tier is DecisionTier.HARD_INFEASIBLE:
        return next((rule for rule in hard if is_infeasible(rule)), None)
    if tier is DecisionTier.HARD_OTHER:
        return next((rule for rule in hard if not is_infeasible(rule)), None)
    if tier is DecisionTier.SOFT:
        return soft[0] if soft else None
    return None


def judgement_for(tier: DecisionTier, primary: Rule | None) -> str:
    if tier is DecisionTier.HARD_INFEASIBLE:
        return INFEASIBLE_JUDGEMENT
    if tier is DecisionTier.HARD_OTHER and primary is not None:
        return primary.judgement
    if tier is DecisionTier.SOFT and primary is not None:
        return primary.judgement or ADVISORY_JUDGEMENT
    return DEFAULT_JUDGEMENT


def resolve_decision(
    ruleset: Ruleset,
    fields: Mapping[str, Any],
    derivations: list[Derivation] | None = None,
) -> DecisionResult:
    """Evaluate every rule in order and resolve the verdict."""
    triggered: list[Rule] = []
    hard: list[Rule] = []
    soft: list[Rule] = []

    for rule in ruleset.rules:
        match = evaluate_rule(ruleset, rule, fields)
        if not match.matched:
            logger.debug("Rule %s not matched: %s", rule.id, match.reason)
            continue
        triggered.append(rule)
        if ruleset.severity_of(rule) is Severity.SOFT:
            soft.append(rule)
        else:
            hard.append(rule)

    tier = DecisionTier.NONE
    primary: Rule | None = None
    for candidate_tier in TIER_SEQUENCE:
        primary = select_candidate(candidate_tier, hard, soft)
        if primary is not None:
            tier = candidate_tier
            break

    def ref(rule: Rule) -> RuleRef:
        return RuleRef.from_rule(rule, ruleset.severity_of(rule))

    return DecisionResult(
        verdict=TIER_VERDICTS[tier],
        judgement=judgement_for(tier, primary),
        tier=tier,
        primary_rule=ref(primary) if primary is not None else None,
        triggered=[ref(rule) for rule in triggered],
        triggered_hard=[ref(rule) for rule in hard],
        triggered_soft=[ref(rule) for rule in soft],
        derivations=list(derivations or []),
    )
