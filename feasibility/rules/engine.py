"""Feasibility engine: input text in, traced decision out."""

from __future__ import annotations

import logging
from datetime import datetime

from feasibility.lang.dialect import parse_input
from .decision import DecisionResult, resolve_decision
from .derivation import derive_fields
from .loader import RulesetLoader
from .schema import Ruleset
from .trace import DEFAULT_PREFIX, attach_trace

logger = logging.getLogger(__name__)


def evaluate_text(
    text: str,
    ruleset: Ruleset,
    now: datetime | None = None,
    trace_prefix: str = DEFAULT_PREFIX,
) -> DecisionResult:
    """Run the full pipeline for one submission.

    Raises:
        LexError, ParseError: when the DSL dialect is selected and the
            input is malformed. The legacy dialect never raises.
    """
    parsed = parse_input(text, ruleset)
    fields, derivations = derive_fields(parsed.fields, ruleset)
    result = resolve_decision(ruleset, fields, derivations)
    result = result.model_copy(
        update={"dialect": parsed.dialect, "seen_query": parsed.seen_query}
    )
    result = attach_trace(result, ruleset, now=now, prefix=trace_prefix)

    logger.debug(
        "Evaluated %d field(s) against %d rule(s): %s (%s), %d triggered, trace %s",
        len(fields),
        len(ruleset.rules),
        result.verdict.value,
        result.judgement,
        len(result.triggered),
        result.trace_id,
    )
    return result


class FeasibilityEngine:
    """Evaluates submissions against the loader's current ruleset."""

    def __init__(self, loader: RulesetLoader | None = None, trace_prefix: str = DEFAULT_PREFIX):
        self.loader = loader or RulesetLoader()
        self.trace_prefix = trace_prefix

    @property
    def ruleset(self) -> Ruleset:
        return self.loader.ruleset

    def evaluate(self, text: str, now: datetime | None = None) -> DecisionResult:
        """Evaluate raw input text against the loaded ruleset."""
        return evaluate_text(text, self.ruleset, now=now, trace_prefix=self.trace_prefix)
