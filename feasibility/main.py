"""FastAPI application entry point."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from feasibility import __version__
from feasibility.api import check_router, get_loader, rules_router
from feasibility.core.config import configure_logging, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    settings = get_settings()
    configure_logging(settings)
    logger.info("Starting %s...", settings.app_name)
    logger.info("Ruleset path: %s", settings.ruleset_path)

    # The ruleset is read once per session and shared read-only
    get_loader()

    yield

    # Shutdown
    logger.info("Shutting down...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Feasibility verdicts for SSE-Lang submissions with citable traces",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS middleware - configurable via CORS_ORIGINS env var
    cors_origins_str = os.getenv("CORS_ORIGINS", "*")
    cors_origins = cors_origins_str.split(",") if cors_origins_str != "*" else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(check_router)  # /check
    app.include_router(rules_router)  # /rules

    @app.get("/")
    async def root():
        """Root endpoint."""
        ruleset = get_loader().ruleset
        return {
            "name": settings.app_name,
            "version": __version__,
            "ruleset": {
                "spec": ruleset.spec,
                "version": ruleset.version,
                "source": ruleset.source,
            },
            "endpoints": {
                "check": "/check - Evaluate a submission",
                "dialect": "/check/dialect - Detect the input dialect",
                "reload": "/check/reload - Reload the ruleset",
                "rules": "/rules - Rule inspection",
            },
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
