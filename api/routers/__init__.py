"""API routers package."""

from .orchestrator import router as orchestrator_router
from .plugins import router as plugins_router

__all__ = ["orchestrator_router", "plugins_router"]
