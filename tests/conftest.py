"""Pytest fixtures for test suite."""

from pathlib import Path
from typing import Any, Callable

import pytest

from feasibility.rules import FeasibilityEngine, Ruleset, RulesetLoader


# =============================================================================
# Core Fixtures
# =============================================================================


@pytest.fixture
def ruleset_path() -> Path:
    """Path to the bundled ruleset."""
    return Path(__file__).parent.parent / "feasibility" / "rules" / "data" / "rules.json"


@pytest.fixture
def rule_loader(ruleset_path: Path) -> RulesetLoader:
    """Loader with the bundled ruleset loaded."""
    loader = RulesetLoader(ruleset_path)
    loader.load_file()
    return loader


@pytest.fixture
def ruleset(rule_loader: RulesetLoader) -> Ruleset:
    """The bundled ruleset."""
    return rule_loader.ruleset


@pytest.fixture
def engine(rule_loader: RulesetLoader) -> FeasibilityEngine:
    """Feasibility engine over the bundled ruleset."""
    return FeasibilityEngine(rule_loader)


@pytest.fixture
def make_ruleset() -> Callable[..., Ruleset]:
    """Factory for small in-memory rulesets."""

    def _make(
        rules: list[dict[str, Any]] | None = None,
        aliases: dict[str, list[str]] | None = None,
        ordinal_scales: dict[str, list[str]] | None = None,
        **extra: Any,
    ) -> Ruleset:
        data = {
            "spec": "SSE-Lang",
            "version": "test",
            "source": "unit tests",
            "aliases": aliases or {},
            "ordinal_scales": ordinal_scales or {},
            "rules": rules or [],
        }
        data.update(extra)
        return Ruleset.model_validate(data)

    return _make


# =============================================================================
# Sample Inputs
# =============================================================================


@pytest.fixture
def scenario_a_text() -> str:
    """DSL submission with enum paths, symbols and ratings."""
    return (
        "IonPathDimensionality: #3D;\n"
        "PathContinuity: flexible;\n"
        "DataReliability: reliability.partial;\n"
        "Rating.Stability: rating.moderate;\n"
        "Rating.Interface: rating.good;\n"
        "Rating.Synthesis: rating.major;\n"
        "CHECK;"
    )


@pytest.fixture
def scenario_b_text() -> str:
    """Legacy 'Key: value' submission."""
    return "Ion Path Dimensionality: 3D\nPath Continuity: flexible"
