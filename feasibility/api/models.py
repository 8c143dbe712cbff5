"""Pydantic models for API requests and responses."""

from typing import Any

from pydantic import BaseModel, Field

from feasibility.lang import Dialect


# =============================================================================
# Check Models
# =============================================================================


class CheckRequest(BaseModel):
    """Request to evaluate a submission."""

    text: str = Field(..., description="SSE-Lang statements or legacy 'Key: value' lines")


class DialectResponse(BaseModel):
    """Which input dialect a submission selects."""

    dialect: Dialect


class SyntaxErrorResponse(BaseModel):
    """Location of a fatal lex/parse error, for user correction."""

    error: str
    message: str
    line: int
    column: int
    context: str | None = None


class ReloadResponse(BaseModel):
    status: str
    rules_loaded: int
    issues: list[str] = Field(default_factory=list)


# =============================================================================
# Rule Inspection Models
# =============================================================================


class RuleSummary(BaseModel):
    """Summary of a rule for listing."""

    id: str
    name: str
    group: str
    cit: str
    severity: str
    judgement: str
    conditions: int


class RulesListResponse(BaseModel):
    spec: str
    version: str
    source: str
    rules: list[RuleSummary]
    total: int


class RuleDetailResponse(BaseModel):
    """Full rule as declared in the ruleset."""

    id: str
    severity: str
    rule: dict[str, Any]
