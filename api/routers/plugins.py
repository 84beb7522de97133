"""Plugin management REST API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_plugin_registry
from api.plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/plugins", tags=["plugins"])


def _registration_or_404(registry: PluginRegistry, name: str) -> dict:
    registration = registry.get_registration(name)
    if registration is None:
        raise HTTPException(status_code=404, detail=f"Plugin '{name}' not found")
    return registration.to_dict()


@router.get("/")
async def list_plugins(registry: PluginRegistry = Depends(get_plugin_registry)):
    """List all registered plugins and their status."""
    return {
        "plugins": registry.list_detailed(),
        "count": registry.count,
        "enabled": registry.enabled_count,
    }


@router.get("/{name}")
async def get_plugin(name: str, registry: PluginRegistry = Depends(get_plugin_registry)):
    """Get detailed information about a specific plugin."""
    return _registration_or_404(registry, name)


@router.post("/{name}/enable")
async def enable_plugin(name: str, registry: PluginRegistry = Depends(get_plugin_registry)):
    """Enable a plugin. Takes effect for the next query."""
    if not registry.set_enabled(name, True):
        raise HTTPException(status_code=404, detail=f"Plugin '{name}' not found")
    return {"message": f"Plugin '{name}' enabled", "plugin": _registration_or_404(registry, name)}


@router.post("/{name}/disable")
async def disable_plugin(name: str, registry: PluginRegistry = Depends(get_plugin_registry)):
    """Disable a plugin. It stays registered but no longer matches queries."""
    if not registry.set_enabled(name, False):
        raise HTTPException(status_code=404, detail=f"Plugin '{name}' not found")
    return {"message": f"Plugin '{name}' disabled", "plugin": _registration_or_404(registry, name)}


@router.delete("/{name}")
async def unregister_plugin(name: str, registry: PluginRegistry = Depends(get_plugin_registry)):
    """Unregister a plugin. Restart the service to load it again."""
    if not registry.unregister(name):
        raise HTTPException(status_code=404, detail=f"Plugin '{name}' not found")
    return {"message": f"Plugin '{name}' unregistered"}
