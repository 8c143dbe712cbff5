"""Core configuration and logging."""

from .config import Settings, get_settings, configure_logging

__all__ = ["Settings", "get_settings", "configure_logging"]
