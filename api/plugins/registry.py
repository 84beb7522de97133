"""Plugin registry - tracks registered plugins, ranks them, and dispatches queries."""
from __future__ import annotations

import inspect
import json
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from api.models.responses import L0Response, ResponseType
from api.plugins.manifest import L0Plugin, PluginContext, PluginMetadata
from api.plugins.matcher import MatchResult, match_plugin

logger = logging.getLogger(__name__)


@dataclass
class PluginRegistration:
    """A registered plugin and its mutable registry state."""

    plugin: L0Plugin
    enabled: bool = True
    registered_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    source: str = "programmatic"  # "programmatic" | "bundled" | "external"

    @property
    def name(self) -> str:
        return self.plugin.name

    def to_dict(self) -> dict:
        """Serialize registration for API responses."""
        return {
            **self.plugin.metadata.model_dump(),
            "enabled": self.enabled,
            "triggers": list(self.plugin.triggers),
            "priority": self.plugin.priority,
            "source": self.source,
            "registered_at": self.registered_at.isoformat(),
        }


class PluginRegistry:
    """Registry of L0 plugins.

    A name maps to at most one registration. Re-registering an existing name
    is rejected; call unregister() first. Mutators are serialized with a
    lock, and matching works on a snapshot of the registrations, so
    concurrent queries never see a half-applied change.
    """

    def __init__(self):
        self._plugins: Dict[str, PluginRegistration] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, plugin: L0Plugin, source: str = "programmatic") -> bool:
        """Register a plugin.

        Args:
            plugin: Plugin to register
            source: Where the plugin came from (for introspection only)

        Returns:
            True if registered, False if invalid or the name is taken
        """
        if not self._validate(plugin):
            return False

        name = plugin.metadata.name
        with self._lock:
            if name in self._plugins:
                logger.warning(f"Plugin '{name}' is already registered, unregister it first")
                return False
            self._plugins[name] = PluginRegistration(plugin=plugin, source=source)

        logger.info(f"Registered plugin: {name} ({source})")
        return True

    def unregister(self, name: str) -> bool:
        """Remove a plugin from the registry."""
        with self._lock:
            removed = self._plugins.pop(name, None)
        if removed:
            logger.info(f"Unregistered plugin: {name}")
        return removed is not None

    def set_enabled(self, name: str, enabled: bool) -> bool:
        """Enable or disable a plugin. Returns False if it is not registered."""
        with self._lock:
            registration = self._plugins.get(name)
            if registration is None:
                return False
            registration.enabled = enabled
        logger.info(f"Plugin '{name}' {'enabled' if enabled else 'disabled'}")
        return True

    # ------------------------------------------------------------------
    # Matching & execution
    # ------------------------------------------------------------------

    def find_matching_scored(self, query: str) -> List[MatchResult]:
        """Score enabled plugins against a query, best first.

        Ties keep registration order (sorted() is stable).
        """
        lowered = query.lower()
        matches = []
        for registration in self._snapshot():
            if not registration.enabled:
                continue
            result = match_plugin(lowered, registration.plugin)
            if result is not None:
                matches.append(result)
        return sorted(matches, key=lambda m: m.score, reverse=True)

    def find_matching(self, query: str) -> List[L0Plugin]:
        """Find enabled plugins whose triggers appear in the query, best first."""
        return [m.plugin for m in self.find_matching_scored(query)]

    async def execute(self, query: str, options: Optional[Dict[str, Any]] = None) -> Optional[L0Response]:
        """Run the best matching plugin for a query.

        Args:
            query: User query
            options: Opaque options passed through to the handler

        Returns:
            The handler's response, a failure response if the handler raised,
            or None if no plugin matches
        """
        matches = self.find_matching(query)
        if not matches:
            return None

        plugin = matches[0]
        context = PluginContext(query=query, options=dict(options or {}))
        logger.debug(f"Dispatching query to plugin '{plugin.name}'")

        try:
            result = plugin.handler(context)
            if inspect.isawaitable(result):
                result = await result
            return self._coerce_response(plugin, result)
        except Exception as e:
            logger.exception(f"Plugin '{plugin.name}' failed while handling query")
            return L0Response(
                message=f"Plugin '{plugin.name}' failed: {e}",
                type=ResponseType.ORCHESTRATION,
                related=["Try rephrasing the request", "Check the plugin logs"],
            )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def list(self) -> List[PluginMetadata]:
        """Metadata of all enabled plugins."""
        return [r.plugin.metadata for r in self._snapshot() if r.enabled]

    def list_detailed(self) -> List[dict]:
        """Detailed info about every plugin, enabled or not."""
        return [r.to_dict() for r in self._snapshot()]

    @property
    def count(self) -> int:
        return len(self._plugins)

    @property
    def enabled_count(self) -> int:
        return sum(1 for r in self._snapshot() if r.enabled)

    def has(self, name: str) -> bool:
        """Check if a plugin is registered (enabled or not)."""
        return name in self._plugins

    def get(self, name: str) -> Optional[L0Plugin]:
        """Get a plugin by name."""
        registration = self._plugins.get(name)
        return registration.plugin if registration else None

    def get_registration(self, name: str) -> Optional[PluginRegistration]:
        """Get the registration record for a plugin."""
        return self._plugins.get(name)

    def to_json(self) -> str:
        """Export the registry as JSON (metadata only, no handlers)."""
        data = [
            {
                "name": r.name,
                "metadata": r.plugin.metadata.model_dump(exclude_none=True),
                "triggers": list(r.plugin.triggers),
                "enabled": r.enabled,
                "registeredAt": r.registered_at.isoformat(),
            }
            for r in self._snapshot()
        ]
        return json.dumps(data, indent=2, ensure_ascii=False)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _snapshot(self) -> List[PluginRegistration]:
        with self._lock:
            return list(self._plugins.values())

    @staticmethod
    def _validate(plugin: L0Plugin) -> bool:
        metadata = getattr(plugin, "metadata", None)
        if metadata is None or not all(
            isinstance(value, str) and value.strip()
            for value in (
                getattr(metadata, "name", None),
                getattr(metadata, "version", None),
                getattr(metadata, "description", None),
            )
        ):
            logger.error("Plugin validation failed: metadata must include name, version, and description")
            return False

        triggers = getattr(plugin, "triggers", None)
        if (
            isinstance(triggers, str)
            or not isinstance(triggers, (list, tuple))
            or not triggers
            or not all(isinstance(t, str) and t for t in triggers)
        ):
            logger.error(f"Plugin validation failed for '{metadata.name}': triggers must be a non-empty list of strings")
            return False

        if not callable(getattr(plugin, "handler", None)):
            logger.error(f"Plugin validation failed for '{metadata.name}': handler must be callable")
            return False

        return True

    @staticmethod
    def _coerce_response(plugin: L0Plugin, result: Any) -> L0Response:
        if isinstance(result, L0Response):
            return result
        if isinstance(result, dict):
            try:
                return L0Response.model_validate(result)
            except ValidationError as e:
                raise TypeError(f"invalid response from handler: {e.error_count()} validation error(s)") from e
        raise TypeError(f"handler returned {type(result).__name__}, expected L0Response")
