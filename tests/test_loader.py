"""Tests for ruleset loading."""

from pathlib import Path

import pytest

from feasibility.rules import (
    Comparison,
    RuleDataError,
    RulesetLoader,
    Severity,
    UnparsedCondition,
)


class TestRulesetLoader:
    def test_load_bundled_file(self, ruleset_path: Path):
        loader = RulesetLoader(ruleset_path)
        ruleset = loader.load_file()

        assert ruleset.spec == "SSE-Lang"
        assert ruleset.version == "0.2.0"
        assert len(ruleset.rules) == 7
        assert loader.issues == []

    def test_rules_in_declared_order(self, rule_loader: RulesetLoader):
        ids = [rule.id for rule in rule_loader.get_all_rules()]
        assert ids[0] == "SSE-H01"
        assert ids[-1] == "SSE-A03"

    def test_get_rule(self, rule_loader: RulesetLoader):
        rule = rule_loader.get_rule("SSE-H03")
        assert rule is not None
        assert rule.cit == "Notes §3.1"
        assert isinstance(rule.conditions[0], Comparison)
        assert rule.then.model_extra == {"unit": "S/cm"}
        assert rule_loader.get_rule("missing") is None

    def test_raw_condition_loaded_as_unparsed(self, rule_loader: RulesetLoader):
        rule = rule_loader.get_rule("SSE-A03")
        assert isinstance(rule.conditions[0], UnparsedCondition)

    def test_missing_collections_degrade(self):
        loader = RulesetLoader()
        ruleset = loader.load_data({"spec": "partial", "version": 1})

        assert ruleset.rules == []
        assert ruleset.aliases == {}
        assert ruleset.ordinal_scales == {}
        assert ruleset.version == "1"
        assert len(loader.issues) == 3
        assert all(isinstance(issue, RuleDataError) for issue in loader.issues)

    def test_null_collections_degrade(self):
        loader = RulesetLoader()
        ruleset = loader.load_data({"aliases": None, "ordinal_scales": {}, "rules": None})
        assert ruleset.rules == []
        assert len(loader.issues) == 2

    def test_null_judgement_and_default_level(self):
        loader = RulesetLoader()
        ruleset = loader.load_data({
            "defaults": {"level": None},
            "aliases": {},
            "ordinal_scales": {},
            "rules": [{"id": "R1", "if": [], "then": {"judgement": None}}],
        })

        rule = ruleset.get_rule("R1")
        assert rule.judgement == ""
        assert ruleset.defaults.level == "hard"
        assert ruleset.severity_of(rule) is Severity.HARD
        assert loader.issues == []

    def test_non_mapping_rejected(self):
        with pytest.raises(ValueError, match="must be a mapping"):
            RulesetLoader().load_data(["not", "a", "ruleset"])

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError, match="Duplicate rule id"):
            RulesetLoader().load_data({"rules": [{"id": "R1"}, {"id": "R1"}]})

    def test_file_not_found(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            RulesetLoader(tmp_path / "missing.json").load_file()

    def test_no_path(self):
        with pytest.raises(ValueError, match="No ruleset path"):
            RulesetLoader().load_file()

    def test_yaml_file(self, tmp_path: Path):
        path = tmp_path / "rules.yaml"
        path.write_text(
            "spec: SSE-Lang\n"
            "version: '0.1'\n"
            "aliases:\n"
            "  PathContinuity: [Continuity]\n"
            "ordinal_scales: {}\n"
            "rules:\n"
            "  - id: Y1\n"
            "    if:\n"
            "      - {field: PathContinuity, op: '==', value: blocked}\n"
            "    then: {judgement: Infeasible}\n",
            encoding="utf-8",
        )
        loader = RulesetLoader()
        ruleset = loader.load_file(path)

        assert loader.path == path
        assert ruleset.rules[0].conditions[0].op.value == "="
        assert ruleset.aliases == {"PathContinuity": ["Continuity"]}

    def test_ruleset_before_load(self):
        loader = RulesetLoader()
        assert loader.loaded is False
        with pytest.raises(RuntimeError):
            loader.ruleset
