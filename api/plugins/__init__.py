"""Plugin system for the L0 orchestrator.

Imports are lazy so that lightweight pieces (manifest models, the trigger
matcher) can be used without pulling in discovery and loading.
"""

__all__ = [
    "PluginMetadata",
    "PluginManifest",
    "PluginContext",
    "L0Plugin",
    "MatchResult",
    "score_triggers",
    "PluginRegistry",
    "PluginRegistration",
    "PluginDiscovery",
    "DiscoveredPlugin",
    "PluginLoader",
    "PluginManager",
    "create_plugin_registry",
]


def __getattr__(name):
    if name in ("PluginMetadata", "PluginManifest", "PluginContext", "L0Plugin"):
        from api.plugins import manifest
        return getattr(manifest, name)
    if name in ("MatchResult", "score_triggers"):
        from api.plugins import matcher
        return getattr(matcher, name)
    if name in ("PluginRegistry", "PluginRegistration"):
        from api.plugins import registry
        return getattr(registry, name)
    if name in ("PluginDiscovery", "DiscoveredPlugin"):
        from api.plugins import discovery
        return getattr(discovery, name)
    if name == "PluginLoader":
        from api.plugins.loader import PluginLoader
        return PluginLoader
    if name in ("PluginManager", "create_plugin_registry"):
        from api.plugins import manager
        return getattr(manager, name)
    raise AttributeError(f"module 'api.plugins' has no attribute {name!r}")
