"""Ruleset loader.

Reads the ruleset resource (JSON, or YAML for hand-maintained rule files)
and validates it into an immutable Ruleset. Missing collections are
tolerated: they are recorded as RuleDataError issues, logged, and treated
as empty.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .schema import Rule, Ruleset

logger = logging.getLogger(__name__)

EXPECTED_COLLECTIONS = ("aliases", "ordinal_scales", "rules")


class RuleDataError(Exception):
    """Ruleset data is missing an expected collection.

    Never raised out of the loader; instances are kept on
    ``RulesetLoader.issues`` for inspection.
    """


class RulesetLoader:
    """Loads and validates a ruleset from a file or a parsed document."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else None
        self._ruleset: Ruleset | None = None
        self.issues: list[RuleDataError] = []

    @property
    def loaded(self) -> bool:
        return self._ruleset is not None

    @property
    def ruleset(self) -> Ruleset:
        """The loaded ruleset."""
        if self._ruleset is None:
            raise RuntimeError("No ruleset loaded")
        return self._ruleset

    def load_file(self, path: str | Path | None = None) -> Ruleset:
        """Load a ruleset from a JSON or YAML file."""
        path = Path(path) if path else self.path
        if not path:
            raise ValueError("No ruleset path specified")
        if not path.exists():
            raise FileNotFoundError(f"Ruleset file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                content = json.load(f)
            else:
                content = yaml.safe_load(f)

        ruleset = self.load_data(content)
        self.path = path
        logger.info(
            "Loaded ruleset %s v%s with %d rule(s) from %s",
            ruleset.spec or "<unnamed>",
            ruleset.version or "?",
            len(ruleset.rules),
            path,
        )
        return ruleset

    def load_data(self, data: Any) -> Ruleset:
        """Validate an already-parsed ruleset document."""
        if not isinstance(data, dict):
            raise ValueError(
                f"Ruleset document must be a mapping, got {type(data).__name__}"
            )

        self.issues = []
        for name in EXPECTED_COLLECTIONS:
            if data.get(name) is None:
                issue = RuleDataError(f"Ruleset is missing '{name}'; treating it as empty")
                self.issues.append(issue)
                logger.warning("%s", issue)

        self._ruleset = Ruleset.model_validate(data)
        return self._ruleset

    def get_rule(self, rule_id: str) -> Rule | None:
        """Get a loaded rule by ID."""
        return self.ruleset.get_rule(rule_id)

    def get_all_rules(self) -> list[Rule]:
        """Get all loaded rules in declaration order."""
        return list(self.ruleset.rules)
