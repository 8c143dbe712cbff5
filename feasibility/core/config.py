"""Application configuration and logging setup."""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RULESET_PATH = Path(__file__).resolve().parent.parent / "rules" / "data" / "rules.json"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # API
    app_name: str = "SSE Feasibility Checker"
    debug: bool = False

    # Ruleset
    ruleset_path: str = str(DEFAULT_RULESET_PATH)

    # Trace ids are rendered as "<prefix><8 hex digits>"
    trace_prefix: str = "SSE-"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="SSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging once for the process."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
