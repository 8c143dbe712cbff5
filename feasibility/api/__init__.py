"""HTTP API routers."""

from .routes_check import router as check_router, get_loader, get_engine
from .routes_rules import router as rules_router

__all__ = ["check_router", "rules_router", "get_loader", "get_engine"]
