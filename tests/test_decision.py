"""Tests for verdict resolution."""

import pytest

from feasibility.rules import (
    TIER_SEQUENCE,
    DecisionTier,
    Verdict,
    resolve_decision,
)


def always(rule_id: str, judgement: str, level: str | None = None) -> dict:
    """A rule with no conditions, so it always triggers."""
    rule = {"id": rule_id, "name": rule_id.lower(), "if": [], "then": {"judgement": judgement}}
    if level:
        rule["level"] = level
    return rule


def never(rule_id: str, judgement: str, level: str | None = None) -> dict:
    rule = always(rule_id, judgement, level)
    rule["if"] = [{"field": "NotSubmitted", "op": "=", "value": 1}]
    return rule


class TestTierSequence:
    def test_order(self):
        assert TIER_SEQUENCE == (
            DecisionTier.HARD_INFEASIBLE,
            DecisionTier.HARD_OTHER,
            DecisionTier.SOFT,
            DecisionTier.NONE,
        )

    def test_verdict_values(self):
        assert {v.value for v in Verdict} == {"NO", "YES*", "YES(ADVISORY)", "YES"}


class TestResolveDecision:
    def test_hard_infeasible_overrides_everything(self, make_ruleset):
        ruleset = make_ruleset(rules=[
            always("S1", "Watch out", "soft"),
            always("H1", "Needs review", "hard"),
            always("H2", "Infeasible", "hard"),
        ])
        result = resolve_decision(ruleset, {})

        assert result.verdict is Verdict.NO
        assert result.tier is DecisionTier.HARD_INFEASIBLE
        assert result.judgement == "Infeasible"
        assert result.primary_rule.id == "H2"
        assert result.triggered_ids == ["S1", "H1", "H2"]

    def test_infeasible_judgement_case_insensitive(self, make_ruleset):
        ruleset = make_ruleset(rules=[always("H1", "INFEASIBLE")])
        assert resolve_decision(ruleset, {}).verdict is Verdict.NO

    def test_padded_infeasible_judgement_is_not_infeasible(self, make_ruleset):
        ruleset = make_ruleset(rules=[always("H1", "  Infeasible ")])
        result = resolve_decision(ruleset, {})

        assert result.verdict is Verdict.YES_QUALIFIED
        assert result.tier is DecisionTier.HARD_OTHER

    def test_first_infeasible_wins(self, make_ruleset):
        ruleset = make_ruleset(rules=[always("H1", "Infeasible"), always("H2", "infeasible")])
        assert resolve_decision(ruleset, {}).primary_rule.id == "H1"

    def test_first_hard_other_wins(self, make_ruleset):
        ruleset = make_ruleset(rules=[
            always("S1", "Advice", "soft"),
            always("H1", "Conditionally feasible"),
            always("H2", "Needs review"),
        ])
        result = resolve_decision(ruleset, {})

        assert result.verdict is Verdict.YES_QUALIFIED
        assert result.judgement == "Conditionally feasible"
        assert result.primary_rule.id == "H1"

    def test_soft_only_is_advisory(self, make_ruleset):
        ruleset = make_ruleset(rules=[
            never("H1", "Infeasible"),
            always("S1", "Monitor flexibility", "soft"),
            always("S2", "Check data", "soft"),
        ])
        result = resolve_decision(ruleset, {})

        assert result.verdict is Verdict.YES_ADVISORY
        assert result.judgement == "Monitor flexibility"
        assert result.primary_rule.id == "S1"
        assert [r.id for r in result.triggered_soft] == ["S1", "S2"]
        assert result.triggered_hard == []

    def test_soft_without_judgement(self, make_ruleset):
        ruleset = make_ruleset(rules=[always("S1", "", "soft")])
        assert resolve_decision(ruleset, {}).judgement == "Advisory flags present"

    def test_nothing_triggered(self, make_ruleset):
        ruleset = make_ruleset(rules=[never("H1", "Infeasible"), never("S1", "x", "soft")])
        result = resolve_decision(ruleset, {})

        assert result.verdict is Verdict.YES
        assert result.tier is DecisionTier.NONE
        assert result.primary_rule is None
        assert result.judgement == "No hard infeasibility triggered"
        assert result.triggered == []

    def test_empty_ruleset(self, make_ruleset):
        assert resolve_decision(make_ruleset(), {"A": 1}).verdict is Verdict.YES

    def test_soft_infeasible_does_not_block(self, make_ruleset):
        ruleset = make_ruleset(rules=[always("S1", "Infeasible", "soft")])
        result = resolve_decision(ruleset, {})
        assert result.verdict is Verdict.YES_ADVISORY

    def test_default_level_from_ruleset(self, make_ruleset):
        ruleset = make_ruleset(rules=[always("R1", "Infeasible")], defaults={"level": "soft"})
        result = resolve_decision(ruleset, {})

        assert result.verdict is Verdict.YES_ADVISORY
        assert result.triggered_soft[0].severity.value == "soft"

    def test_partition_preserves_order(self, make_ruleset):
        ruleset = make_ruleset(rules=[
            always("H1", "a"),
            always("S1", "b", "soft"),
            always("H2", "c"),
            always("S2", "d", "soft"),
        ])
        result = resolve_decision(ruleset, {})
        assert [r.id for r in result.triggered_hard] == ["H1", "H2"]
        assert [r.id for r in result.triggered_soft] == ["S1", "S2"]

    def test_primary_rule_carries_citation(self, make_ruleset):
        ruleset = make_ruleset(rules=[{
            "id": "H1",
            "name": "Blocked path",
            "group": "Transport",
            "cit": "Notes §2.1",
            "level": "hard",
            "if": [],
            "then": {"judgement": "Infeasible"},
            "rationale": "No transport.",
            "status": "stable",
        }])
        primary = resolve_decision(ruleset, {}).primary_rule

        assert primary.cit == "Notes §2.1"
        assert primary.level == "hard"
        assert primary.rationale == "No transport."
        assert primary.status == "stable"

    @pytest.mark.parametrize("fields", [{}, {"NotSubmitted": 1}])
    def test_no_requires_hard_infeasible(self, make_ruleset, fields):
        ruleset = make_ruleset(rules=[
            never("H1", "Infeasible"),
            always("S1", "Infeasible", "soft"),
            always("H2", "Fine"),
        ])
        result = resolve_decision(ruleset, fields)
        assert result.verdict in set(Verdict)
        if result.verdict is Verdict.NO:
            assert result.primary_rule.severity.value == "hard"
            assert result.primary_rule.judgement.lower() == "infeasible"
