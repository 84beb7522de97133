"""Request-scoped access to the services created in create_app()."""

from fastapi import Request

from api.plugins.registry import PluginRegistry
from api.services.orchestrator import L0Orchestrator


def get_orchestrator(request: Request) -> L0Orchestrator:
    """Orchestrator stored on the application state."""
    return request.app.state.orchestrator


def get_plugin_registry(request: Request) -> PluginRegistry:
    """Registry behind the application's orchestrator."""
    return get_orchestrator(request).registry
