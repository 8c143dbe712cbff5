"""Routes for feasibility checks."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from feasibility.core.config import get_settings
from feasibility.lang import InputSyntaxError, detect_dialect
from feasibility.rules import DecisionResult, FeasibilityEngine, RulesetLoader
from .models import CheckRequest, DialectResponse, ReloadResponse, SyntaxErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/check", tags=["Checks"])

# Global instances
_loader: RulesetLoader | None = None
_engine: FeasibilityEngine | None = None


def get_loader() -> RulesetLoader:
    """Get or create the ruleset loader instance."""
    global _loader
    if _loader is None:
        settings = get_settings()
        _loader = RulesetLoader(settings.ruleset_path)
        _loader.load_file()
    return _loader


def get_engine() -> FeasibilityEngine:
    """Get or create the feasibility engine instance."""
    global _engine
    if _engine is None:
        _engine = FeasibilityEngine(get_loader(), trace_prefix=get_settings().trace_prefix)
    return _engine


@router.post(
    "",
    response_model=DecisionResult,
    response_model_by_alias=True,
    responses={422: {"model": SyntaxErrorResponse}},
)
async def check_submission(request: CheckRequest):
    """Evaluate a submission against the loaded ruleset.

    Malformed SSE-Lang input is rejected with its line/column and context.
    """
    engine = get_engine()
    try:
        return engine.evaluate(request.text)
    except InputSyntaxError as exc:
        logger.info("Rejected submission: %s", exc.message)
        return JSONResponse(status_code=422, content=exc.to_dict())


@router.post("/dialect", response_model=DialectResponse)
async def check_dialect(request: CheckRequest) -> DialectResponse:
    """Report which dialect a submission would be parsed with."""
    return DialectResponse(dialect=detect_dialect(request.text))


@router.post("/reload", response_model=ReloadResponse)
async def reload_ruleset() -> ReloadResponse:
    """Reload the ruleset from disk."""
    global _loader, _engine
    _loader = None
    _engine = None

    loader = get_loader()
    return ReloadResponse(
        status="reloaded",
        rules_loaded=len(loader.get_all_rules()),
        issues=[str(issue) for issue in loader.issues],
    )
