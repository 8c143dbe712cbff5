"""Rules domain - ruleset loading, derivation, evaluation and verdicts."""

from .schema import (
    Severity,
    ComparisonOp,
    Comparison,
    UnparsedCondition,
    Condition,
    Consequence,
    Rule,
    RulesetDefaults,
    Ruleset,
)
from .loader import RulesetLoader, RuleDataError
from .derivation import (
    Contributor,
    Derivation,
    derive_fields,
    rating_rank,
    RATING_SCALE,
)
from .evaluator import (
    ConditionUnresolvable,
    RuleMatch,
    compare_values,
    evaluate_rule,
    ordinal_position,
)
from .decision import (
    Verdict,
    DecisionTier,
    TIER_SEQUENCE,
    RuleRef,
    DecisionResult,
    resolve_decision,
)
from .trace import (
    attach_trace,
    build_trace_record,
    fnv1a_32,
    stable_serialize,
)
from .engine import FeasibilityEngine, evaluate_text

__all__ = [
    # Schema
    "Severity",
    "ComparisonOp",
    "Comparison",
    "UnparsedCondition",
    "Condition",
    "Consequence",
    "Rule",
    "RulesetDefaults",
    "Ruleset",
    # Loader
    "RulesetLoader",
    "RuleDataError",
    # Derivation
    "Contributor",
    "Derivation",
    "derive_fields",
    "rating_rank",
    "RATING_SCALE",
    # Evaluator
    "ConditionUnresolvable",
    "RuleMatch",
    "compare_values",
    "evaluate_rule",
    "ordinal_position",
    # Decision
    "Verdict",
    "DecisionTier",
    "TIER_SEQUENCE",
    "RuleRef",
    "DecisionResult",
    "resolve_decision",
    # Trace
    "attach_trace",
    "build_trace_record",
    "fnv1a_32",
    "stable_serialize",
    # Engine
    "FeasibilityEngine",
    "evaluate_text",
]
