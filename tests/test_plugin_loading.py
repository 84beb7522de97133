"""Tests for plugin discovery, loading, and registry construction."""

import asyncio
import json
import textwrap

import pytest

from api.plugins.discovery import PluginDiscovery
from api.plugins.loader import PluginLoader
from api.plugins.manager import create_plugin_registry

PLUGIN_SOURCE = textwrap.dedent('''
    def register(config):
        greeting = config.get("greeting", "hi")

        def handle(ctx):
            return {"message": f"{greeting}: {ctx.query}", "type": "context"}

        return handle
''')


def write_plugin(root, dirname, name=None, source=PLUGIN_SOURCE, **manifest):
    plugin_dir = root / dirname
    plugin_dir.mkdir(parents=True)
    data = {
        "name": name or dirname,
        "version": "0.1.0",
        "description": "Test plugin",
        "triggers": ["wave"],
        "entry_point": "plugin:register",
    }
    data.update(manifest)
    (plugin_dir / "plugin.json").write_text(json.dumps(data), encoding="utf-8")
    (plugin_dir / "plugin.py").write_text(source, encoding="utf-8")
    return plugin_dir


class TestPluginDiscovery:
    """Tests for PluginDiscovery."""

    def test_discovers_valid_manifests(self, tmp_path):
        """Directories with plugin.json are discovered in name order."""
        write_plugin(tmp_path, "b-plugin")
        write_plugin(tmp_path, "a-plugin", priority=7)
        (tmp_path / "not-a-plugin").mkdir()

        found = PluginDiscovery([(tmp_path, "external")]).discover_all()

        assert [p.name for p in found] == ["a-plugin", "b-plugin"]
        assert found[0].manifest.priority == 7
        assert found[0].source == "external"

    def test_skips_invalid_json(self, tmp_path):
        """A broken manifest is logged and skipped."""
        write_plugin(tmp_path, "good")
        broken = tmp_path / "broken"
        broken.mkdir()
        (broken / "plugin.json").write_text("{not json", encoding="utf-8")

        found = PluginDiscovery([(tmp_path, "external")]).discover_all()
        assert [p.name for p in found] == ["good"]

    def test_skips_manifest_without_entry_point(self, tmp_path):
        """Manifests failing validation are skipped."""
        plugin_dir = tmp_path / "no-entry"
        plugin_dir.mkdir()
        (plugin_dir / "plugin.json").write_text(json.dumps({"name": "no-entry"}), encoding="utf-8")

        assert PluginDiscovery([(tmp_path, "external")]).discover_all() == []

    def test_first_found_name_wins(self, tmp_path):
        """Duplicate names across search paths keep the first one."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        write_plugin(first, "dup", description="first")
        write_plugin(second, "dup", description="second")

        found = PluginDiscovery([(first, "bundled"), (second, "external")]).discover_all()

        assert len(found) == 1
        assert found[0].manifest.description == "first"
        assert found[0].source == "bundled"

    def test_missing_search_path(self, tmp_path):
        """Nonexistent search paths are ignored."""
        assert PluginDiscovery([(tmp_path / "missing", "external")]).discover_all() == []

    def test_discover_single(self, tmp_path):
        """A single plugin directory can be inspected directly."""
        plugin_dir = write_plugin(tmp_path, "single")
        discovery = PluginDiscovery([])
        assert discovery.discover_single(plugin_dir).name == "single"
        assert discovery.discover_single(tmp_path) is None


class TestPluginLoader:
    """Tests for PluginLoader."""

    def test_load_builds_plugin_from_manifest(self, tmp_path):
        """The factory receives the config and its handler is wrapped in an L0Plugin."""
        write_plugin(tmp_path, "greeter", triggers=["wave", "hello"], priority=4)
        discovered = PluginDiscovery([(tmp_path, "external")]).discover_all()[0]

        plugin = PluginLoader().load(discovered, {"greeting": "yo"})

        assert plugin.name == "greeter"
        assert list(plugin.triggers) == ["wave", "hello"]
        assert plugin.priority == 4
        assert plugin.handler(type("Ctx", (), {"query": "wave"})())["message"] == "yo: wave"

    def test_factory_returning_non_callable(self, tmp_path):
        """A factory that returns no handler fails to load."""
        write_plugin(tmp_path, "bad", source="def register(config):\n    return 'nope'\n")
        discovered = PluginDiscovery([(tmp_path, "external")]).discover_all()[0]
        assert PluginLoader().load(discovered) is None

    def test_missing_entry_function(self, tmp_path):
        """An unknown factory name fails to load."""
        write_plugin(tmp_path, "bad", entry_point="plugin:missing")
        discovered = PluginDiscovery([(tmp_path, "external")]).discover_all()[0]
        assert PluginLoader().load(discovered) is None

    def test_import_error(self, tmp_path):
        """A module that fails to import fails to load."""
        write_plugin(tmp_path, "bad", source="raise ImportError('no deps')\n")
        discovered = PluginDiscovery([(tmp_path, "external")]).discover_all()[0]
        assert PluginLoader().load(discovered) is None


class TestCreatePluginRegistry:
    """Tests for create_plugin_registry."""

    def test_default_registers_workflow_plugins(self):
        """Bundled workflow plugins are registered, the memory plugin is not."""
        registry = create_plugin_registry()
        assert {p["name"] for p in registry.list_detailed()} == {"dev-tools", "analytics", "collaboration"}
        assert all(p["source"] == "bundled" for p in registry.list_detailed())
        assert registry.get("dev-tools").priority == 10
        assert registry.get("collaboration").priority == 5

    def test_memory_services_opt_in(self, monkeypatch):
        """The memory plugin is present as soon as the call returns."""
        monkeypatch.setenv("LANONASIS_API_URL", "http://127.0.0.1:9")
        registry = create_plugin_registry(include_memory_services=True)
        assert registry.has("memory-services")
        assert registry.get("memory-services").priority == 100
        assert registry.count == 4

    def test_memory_services_only(self, monkeypatch):
        """Built-ins can be left out."""
        monkeypatch.setenv("LANONASIS_API_URL", "http://127.0.0.1:9")
        registry = create_plugin_registry(include_builtins=False, include_memory_services=True)
        assert [m.name for m in registry.list()] == ["memory-services"]

    def test_invalid_memory_config_not_registered(self):
        """A failing factory leaves the plugin out."""
        registry = create_plugin_registry(
            include_builtins=False,
            include_memory_services=True,
            plugin_config={"memory-services": {"api_url": "ftp://nowhere"}},
        )
        assert registry.count == 0

    def test_empty_registry(self):
        """Nothing requested, nothing registered."""
        assert create_plugin_registry(include_builtins=False).count == 0

    def test_extra_paths(self, tmp_path):
        """Plugins under extra paths are registered as external."""
        write_plugin(tmp_path, "greeter")
        registry = create_plugin_registry(include_builtins=False, extra_paths=[tmp_path])

        assert registry.get_registration("greeter").source == "external"
        response = asyncio.run(registry.execute("wave please"))
        assert response.message == "hi: wave please"


@pytest.fixture(scope="module")
def workflow_registry():
    return create_plugin_registry()


class TestBundledWorkflowPlugins:
    """Tests for the bundled workflow plugin handlers."""

    @pytest.mark.parametrize("query,expected", [
        ("debug my application", "Debugging"),
        ("run our tests", "Testing"),
        ("deploy to staging", "Deployment"),
        ("refactor this module", "Development Workflow"),
        ("show the kpi dashboard", "KPI"),
        ("quarterly report", "Reporting"),
        ("run the standup", "Daily Standup"),
        ("sprint retrospective", "Retrospective"),
        ("plan with the team", "Team Collaboration"),
    ])
    def test_routes_to_workflow(self, workflow_registry, query, expected):
        """Each bundled plugin answers its own trigger words."""
        response = asyncio.run(workflow_registry.execute(query))
        assert expected in response.message
        assert response.type == "orchestration"
        assert response.workflow
