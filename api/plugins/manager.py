"""Plugin manager - builds registries from bundled and external plugins."""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from api.constants import BUNDLED_PLUGINS_DIR
from api.plugins.discovery import DiscoveredPlugin, PluginDiscovery
from api.plugins.loader import PluginLoader
from api.plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)

WORKFLOW_PLUGIN_TYPE = "workflow"
SERVICE_PLUGIN_TYPE = "service"


class PluginManager:
    """Coordinates discovery, loading, and registration of on-disk plugins."""

    def __init__(
        self,
        registry: PluginRegistry,
        bundled_dir: Path = BUNDLED_PLUGINS_DIR,
        extra_paths: Optional[List[Path]] = None,
        plugin_config: Optional[Dict[str, Dict[str, Any]]] = None,
    ):
        self.registry = registry
        self.plugin_config = plugin_config or {}
        self.loader = PluginLoader()

        # Build search paths: (path, source_label)
        search_paths = [(bundled_dir, "bundled")]
        if extra_paths:
            for p in extra_paths:
                search_paths.append((p, "external"))

        self.discovery = PluginDiscovery(search_paths)

    def load_all(self, types: Iterable[str]) -> int:
        """Discover plugins, then load and register those of the given types.

        External plugins are always loaded, whatever their type.

        Returns:
            Number of plugins registered
        """
        wanted = set(types)
        registered = 0
        for discovered in self.discovery.discover_all():
            if discovered.source == "bundled" and discovered.manifest.type not in wanted:
                logger.debug(f"Plugin '{discovered.name}' ({discovered.manifest.type}) not requested, skipping")
                continue
            if self.activate(discovered):
                registered += 1

        logger.info(f"Plugin registry initialized, {registered} plugin(s) registered")
        return registered

    def activate(self, discovered: DiscoveredPlugin) -> bool:
        """Load a discovered plugin and register it.

        Returns:
            True if the plugin ended up registered
        """
        config = self.plugin_config.get(discovered.name, {})
        plugin = self.loader.load(discovered, config)
        if plugin is None:
            return False
        return self.registry.register(plugin, source=discovered.source)


def create_plugin_registry(
    include_builtins: bool = True,
    include_memory_services: bool = False,
    plugin_config: Optional[Dict[str, Dict[str, Any]]] = None,
    extra_paths: Optional[List[Path]] = None,
) -> PluginRegistry:
    """Create a fresh registry populated with bundled plugins.

    Args:
        include_builtins: Register the bundled workflow plugins
            (dev-tools, analytics, collaboration)
        include_memory_services: Register the memory-services plugin
        plugin_config: Per-plugin configuration keyed by plugin name
        extra_paths: Extra directories to scan for plugins

    Returns:
        A new PluginRegistry
    """
    registry = PluginRegistry()

    types = []
    if include_builtins:
        types.append(WORKFLOW_PLUGIN_TYPE)
    if include_memory_services:
        types.append(SERVICE_PLUGIN_TYPE)

    if types or extra_paths:
        manager = PluginManager(registry, extra_paths=extra_paths, plugin_config=plugin_config)
        manager.load_all(types)

    return registry
