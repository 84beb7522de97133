"""L0 orchestration service."""

import logging
from typing import Any, Dict, Optional

from api.models.responses import L0Response
from api.plugins.registry import PluginRegistry
from api.services.intents import classify, orchestrate_general

logger = logging.getLogger(__name__)


class L0Orchestrator:
    """
    Routes a free-text query to a response.

    Responsibilities:
    - Try the built-in intents in their fixed order (first hit wins)
    - Otherwise delegate to the best matching registered plugin
    - Otherwise fall back to the general orchestration response

    Holds no per-query state; the registry is the only shared object.
    """

    def __init__(self, registry: Optional[PluginRegistry] = None):
        """
        Args:
            registry: Plugin registry to dispatch to (default: a fresh registry
                with the bundled workflow plugins)
        """
        if registry is None:
            from api.plugins.manager import create_plugin_registry
            registry = create_plugin_registry()
        self._registry = registry

    @property
    def registry(self) -> PluginRegistry:
        return self._registry

    def classify(self, query: str) -> Optional[str]:
        """Name of the built-in intent that would handle the query, if any."""
        intent = classify(query)
        return intent.name if intent else None

    async def query(self, query: str, options: Optional[Dict[str, Any]] = None) -> L0Response:
        intent = classify(query)
        if intent is not None:
            logger.debug(f"Query handled by built-in intent '{intent.name}'")
            return intent.generate(query)

        response = await self._registry.execute(query, options)
        if response is not None:
            return response

        logger.debug("No intent or plugin matched, using general orchestration")
        return orchestrate_general(query)
