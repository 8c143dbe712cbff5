"""Routes for read-only ruleset inspection."""

from fastapi import APIRouter, HTTPException

from .models import RuleDetailResponse, RuleSummary, RulesListResponse
from .routes_check import get_loader

router = APIRouter(prefix="/rules", tags=["Rules"])


@router.get("", response_model=RulesListResponse)
async def list_rules() -> RulesListResponse:
    """List rules in declaration order."""
    ruleset = get_loader().ruleset
    rules = [
        RuleSummary(
            id=rule.id,
            name=rule.name,
            group=rule.group,
            cit=rule.cit,
            severity=ruleset.severity_of(rule).value,
            judgement=rule.judgement,
            conditions=len(rule.conditions),
        )
        for rule in ruleset.rules
    ]
    return RulesListResponse(
        spec=ruleset.spec,
        version=ruleset.version,
        source=ruleset.source,
        rules=rules,
        total=len(rules),
    )


@router.get("/{rule_id}", response_model=RuleDetailResponse)
async def get_rule(rule_id: str) -> RuleDetailResponse:
    """Get one rule as declared."""
    ruleset = get_loader().ruleset
    rule = ruleset.get_rule(rule_id)
    if rule is None:
        raise HTTPException(status_code=404, detail=f"Rule not found: {rule_id}")

    return RuleDetailResponse(
        id=rule.id,
        severity=ruleset.severity_of(rule).value,
        rule=rule.model_dump(mode="json", by_alias=True),
    )
