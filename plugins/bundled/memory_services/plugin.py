"""Memory services plugin entry point."""

import logging
from pathlib import Path
from typing import Optional

from api.plugins.discovery import PluginDiscovery
from api.plugins.manifest import L0Plugin
from plugins.bundled.memory_services.client import MemoryClient
from plugins.bundled.memory_services.config import MemoryPluginConfig
from plugins.bundled.memory_services.handler import MemoryPluginHandler

logger = logging.getLogger(__name__)

PLUGIN_DIR = Path(__file__).resolve().parent


def register(config: dict) -> MemoryPluginHandler:
    """Plugin entry point - called by PluginLoader.load().

    Args:
        config: Overrides for MemoryPluginConfig (api_url, auth_token, user_id, timeout_ms)

    Returns:
        Handler bound to a client for the configured service
    """
    plugin_config = MemoryPluginConfig.from_env().with_overrides(config)
    valid, error = plugin_config.validate()
    if not valid:
        raise ValueError(error)

    logger.info(
        f"[Memory] Memory plugin registered: api_url={plugin_config.api_url}, "
        f"auth={'yes' if plugin_config.auth_token else 'no'}, timeout={plugin_config.timeout_ms}ms"
    )
    return MemoryPluginHandler(MemoryClient(plugin_config))


def create_memory_plugin(config: Optional[MemoryPluginConfig] = None) -> L0Plugin:
    """Build the memory plugin without going through discovery.

    Args:
        config: Explicit configuration; defaults to the LANONASIS_* environment

    Returns:
        L0Plugin ready to register
    """
    discovered = PluginDiscovery([]).discover_single(PLUGIN_DIR, "bundled")
    if discovered is None:
        raise RuntimeError(f"Memory plugin manifest missing at {PLUGIN_DIR}")

    manifest = discovered.manifest
    client = MemoryClient(config or MemoryPluginConfig.from_env())
    return L0Plugin(
        metadata=manifest.to_metadata(),
        triggers=list(manifest.triggers),
        handler=MemoryPluginHandler(client),
        priority=manifest.priority,
    )
