"""Plugin loader - imports a discovered plugin and builds its L0Plugin."""

import importlib.util
import logging
import re
import sys
from typing import Any, Callable, Dict, Optional

from api.plugins.discovery import DiscoveredPlugin
from api.plugins.manifest import L0Plugin

logger = logging.getLogger(__name__)


class PluginLoader:
    """Resolves a plugin's entry point and calls its factory.

    The entry point (e.g. "plugin:register") names a factory that takes the
    plugin's config dict and returns the handler.
    """

    def load(self, discovered: DiscoveredPlugin, config: Optional[Dict[str, Any]] = None) -> Optional[L0Plugin]:
        """Load a discovered plugin.

        Args:
            discovered: Plugin found by PluginDiscovery
            config: Plugin configuration passed to the factory

        Returns:
            L0Plugin if loaded successfully, None otherwise
        """
        manifest = discovered.manifest
        try:
            factory = self._resolve_entry_point(discovered)
            handler = factory(dict(config or {}))
            if not callable(handler):
                raise TypeError(f"{manifest.entry_point} did not return a callable handler")

            plugin = L0Plugin(
                metadata=manifest.to_metadata(),
                triggers=list(manifest.triggers),
                handler=handler,
                priority=manifest.priority,
            )
            logger.info(f"Loaded plugin: {manifest.name}")
            return plugin

        except Exception as e:
            logger.error(f"Failed to load plugin {manifest.name}: {e}")
            return None

    def _resolve_entry_point(self, discovered: DiscoveredPlugin) -> Callable:
        module_name, func_name = discovered.manifest.entry_point.split(":")

        # Add plugin directory to sys.path temporarily for sibling imports
        plugin_dir = str(discovered.path)
        added = plugin_dir not in sys.path
        if added:
            sys.path.insert(0, plugin_dir)

        try:
            safe_name = re.sub(r"\W", "_", discovered.name)
            spec = importlib.util.spec_from_file_location(
                f"l0_plugin_{safe_name}_{module_name}",
                discovered.path / f"{module_name}.py",
            )
            if spec is None or spec.loader is None:
                raise ImportError(f"Cannot find module {module_name}.py in {discovered.path}")

            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
        finally:
            if added and plugin_dir in sys.path:
                sys.path.remove(plugin_dir)

        factory = getattr(module, func_name, None)
        if factory is None:
            raise AttributeError(f"Module {module_name} has no function '{func_name}'")
        if not callable(factory):
            raise TypeError(f"{module_name}.{func_name} is not callable")
        return factory
