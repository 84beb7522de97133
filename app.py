"""Main FastAPI application for the L0 orchestrator."""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# Configure logging BEFORE importing any modules that use logger
log_level = os.getenv('LOG_LEVEL', 'INFO')
logging.basicConfig(
    level=getattr(logging, log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Import after logging is configured
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.constants import ENABLE_MEMORY_PLUGIN, PLUGIN_PATHS
from api.plugins.manager import create_plugin_registry
from api.routers import orchestrator_router, plugins_router
from api.services.orchestrator import L0Orchestrator


def create_app(orchestrator: Optional[L0Orchestrator] = None) -> FastAPI:
    """Build the application around an orchestrator.

    Args:
        orchestrator: Orchestrator to serve (default: bundled plugins, plus the
            memory plugin when L0_ENABLE_MEMORY is set, plus PLUGIN_PATHS)
    """
    if orchestrator is None:
        registry = create_plugin_registry(
            include_builtins=True,
            include_memory_services=ENABLE_MEMORY_PLUGIN,
            extra_paths=PLUGIN_PATHS or None,
        )
        orchestrator = L0Orchestrator(registry)

    app = FastAPI(
        title="L0 Orchestrator",
        description="Intent routing and plugin orchestration service",
        version="1.0.0"
    )
    app.state.orchestrator = orchestrator

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(orchestrator_router)  # /api/l0 endpoints
    app.include_router(plugins_router)  # /api/plugins endpoints

    @app.get("/")
    async def root():
        registry = app.state.orchestrator.registry
        return {
            "message": "L0 Orchestrator API",
            "docs": "/docs",
            "plugins": registry.enabled_count,
        }

    logger.info(f"L0 orchestrator ready with {orchestrator.registry.enabled_count} enabled plugin(s)")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", "9090"))
    uvicorn.run("app:app", host="0.0.0.0", port=port, reload=True)
