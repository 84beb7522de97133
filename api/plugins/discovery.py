"""Plugin discovery - scans directories to find plugins."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import ValidationError

from api.plugins.manifest import PluginManifest

logger = logging.getLogger(__name__)


@dataclass
class DiscoveredPlugin:
    """A plugin found on disk, not yet loaded."""

    manifest: PluginManifest
    path: Path
    source: str  # "bundled" | "external"

    @property
    def name(self) -> str:
        return self.manifest.name


class PluginDiscovery:
    """Discovers plugins by scanning directories for plugin.json manifests."""

    MANIFEST_FILE = "plugin.json"

    def __init__(self, search_paths: List[Tuple[Path, str]]):
        """Initialize discovery with search paths.

        Args:
            search_paths: List of (path, source_label) tuples.
                          Will be searched in order.
        """
        self.search_paths = search_paths

    def discover_all(self) -> List[DiscoveredPlugin]:
        """Discover all plugins from configured search paths.

        Returns:
            List of discovered plugins, first-found name wins
        """
        discovered = []
        seen_names = set()

        for search_path, source in self.search_paths:
            if not search_path.exists():
                logger.debug(f"Plugin search path does not exist: {search_path}")
                continue

            for plugin in self._scan_directory(search_path, source):
                if plugin.name in seen_names:
                    logger.warning(
                        f"Duplicate plugin name '{plugin.name}' found at {plugin.path}, "
                        f"skipping (first-found wins)"
                    )
                    continue
                seen_names.add(plugin.name)
                discovered.append(plugin)

        logger.info(f"Discovered {len(discovered)} plugin(s)")
        return discovered

    def discover_single(self, plugin_path: Path, source: str = "external") -> Optional[DiscoveredPlugin]:
        """Discover a single plugin from a specific path.

        Args:
            plugin_path: Path to the plugin directory
            source: Source label

        Returns:
            DiscoveredPlugin if valid, None otherwise
        """
        manifest_file = plugin_path / self.MANIFEST_FILE
        if not manifest_file.exists():
            logger.error(f"No {self.MANIFEST_FILE} found at {plugin_path}")
            return None
        return self._load_manifest(manifest_file, source)

    def _scan_directory(self, search_path: Path, source: str) -> List[DiscoveredPlugin]:
        plugins = []

        for item in sorted(search_path.iterdir()):
            if not item.is_dir():
                continue
            manifest_file = item / self.MANIFEST_FILE
            if not manifest_file.exists():
                continue

            plugin = self._load_manifest(manifest_file, source)
            if plugin:
                plugins.append(plugin)

        return plugins

    def _load_manifest(self, manifest_file: Path, source: str) -> Optional[DiscoveredPlugin]:
        """Load and validate a plugin manifest.

        Args:
            manifest_file: Path to plugin.json
            source: Source label

        Returns:
            DiscoveredPlugin if valid, None otherwise
        """
        try:
            with open(manifest_file, "r", encoding="utf-8") as f:
                data = json.load(f)

            manifest = PluginManifest(**data)
            logger.debug(f"Discovered plugin: {manifest.name} at {manifest_file.parent}")
            return DiscoveredPlugin(manifest=manifest, path=manifest_file.parent, source=source)

        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {manifest_file}: {e}")
        except ValidationError as e:
            logger.error(f"Invalid manifest in {manifest_file}: {e}")
        except Exception as e:
            logger.error(f"Error loading {manifest_file}: {e}")

        return None
