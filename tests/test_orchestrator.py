"""Tests for L0Orchestrator and the built-in intents."""

import asyncio

import pytest
from unittest.mock import AsyncMock

from api.models.responses import L0Response, ResponseType
from api.plugins.manager import create_plugin_registry
from api.plugins.manifest import L0Plugin, PluginMetadata
from api.plugins.registry import PluginRegistry
from api.services import intents
from api.services.orchestrator import L0Orchestrator


def make_plugin(name, triggers, handler, priority=0):
    return L0Plugin(
        metadata=PluginMetadata(name=name, version="1.0.0", description=f"{name} plugin"),
        triggers=triggers,
        handler=handler,
        priority=priority,
    )


@pytest.fixture(scope="module")
def orchestrator():
    return L0Orchestrator(create_plugin_registry())


class TestClassify:
    """Tests for built-in intent classification."""

    @pytest.mark.parametrize("query,expected", [
        ("help", "help"),
        ("can you help me", "help"),
        ("that was unhelpful", None),
        ("I need help with oauth", "help"),
        ("how to launch a campaign", "help"),
        ("find code for floating card", "code"),
        ("show me a snippet", "code"),
        ("search my memory", "memory"),
        ("notes from the meeting", "memory"),
        ("plan a viral campaign", "campaign"),
        ("social media push", "campaign"),
        ("create content for the blog", "content"),
        ("content strategy", "content"),
        ("content calendar", None),
        ("show trending hashtags", "trend"),
        ("analytics for last week", "trend"),
        ("debug my application", None),
    ])
    def test_classify(self, orchestrator, query, expected):
        """Each classifier fires on its own keywords."""
        assert orchestrator.classify(query) == expected

    def test_first_hit_wins(self, orchestrator):
        """Earlier classifiers take precedence over later ones."""
        assert orchestrator.classify("help with code") == "help"
        assert orchestrator.classify("code for my memory notes") == "code"
        assert orchestrator.classify("memory of a viral campaign") == "memory"
        assert orchestrator.classify("viral content strategy trend") == "campaign"


class TestQuery:
    """Tests for L0Orchestrator.query."""

    def test_builtin_help(self, orchestrator):
        """Help requests get the help response."""
        response = asyncio.run(orchestrator.query("help"))
        assert response.type == "help"
        assert "VortexAI L0" in response.message

    def test_help_topic(self, orchestrator):
        """A known topic returns that topic's help text."""
        response = asyncio.run(orchestrator.query("help with oauth"))
        assert response.message.startswith("OAuth Implementation")
        assert "oauth" not in response.related

    def test_plugin_handles_unclassified_query(self, orchestrator):
        """Queries no built-in claims go to the best plugin."""
        response = asyncio.run(orchestrator.query("debug my application"))
        assert response.message == "🔧 Development Debugging Workflow"

    def test_general_fallback(self, orchestrator):
        """Nothing matches: the general orchestration response."""
        response = asyncio.run(orchestrator.query("xyzzy"))
        assert response.type == "orchestration"
        assert response.message == '🧠 L0 analyzing: "xyzzy"'
        assert len(response.workflow) == 5

    def test_builtin_takes_precedence_over_plugin(self):
        """A plugin with a built-in keyword as trigger is never reached."""
        handler = AsyncMock(return_value=L0Response(message="plugin", type=ResponseType.CONTEXT))
        registry = PluginRegistry()
        registry.register(make_plugin("greedy", ["help", "code"], handler, priority=1000))

        response = asyncio.run(L0Orchestrator(registry).query("help me with testing"))

        assert response.type == "help"
        handler.assert_not_called()

    def test_echo_plugin(self):
        """A registered echo plugin answers its trigger."""
        registry = PluginRegistry()
        registry.register(make_plugin(
            "echo", ["echo"],
            lambda ctx: L0Response(message=f"echo: {ctx.query}", type=ResponseType.CONTEXT),
        ))
        orchestrator = L0Orchestrator(registry)

        assert asyncio.run(orchestrator.query("echo hello")).message == "echo: echo hello"
        assert asyncio.run(orchestrator.query("hello")).message == '🧠 L0 analyzing: "hello"'

    def test_options_reach_plugin(self):
        """Options are passed through to the plugin context."""
        handler = AsyncMock(return_value=L0Response(message="ok", type=ResponseType.CONTEXT))
        registry = PluginRegistry()
        registry.register(make_plugin("echo", ["echo"], handler))

        asyncio.run(L0Orchestrator(registry).query("echo", {"project": "web"}))

        assert handler.await_args.args[0].options == {"project": "web"}

    def test_failing_plugin_does_not_escape(self):
        """Handler errors come back as a response."""
        registry = PluginRegistry()
        registry.register(make_plugin("broken", ["echo"], AsyncMock(side_effect=ValueError("bad input"))))

        response = asyncio.run(L0Orchestrator(registry).query("echo"))

        assert response.type == "orchestration"
        assert "broken" in response.message

    def test_default_registry(self):
        """Without a registry the bundled workflow plugins are loaded."""
        orchestrator = L0Orchestrator()
        assert orchestrator.registry.has("dev-tools")
        assert not orchestrator.registry.has("memory-services")

    def test_deterministic(self, orchestrator):
        """The same query gives the same response."""
        first = asyncio.run(orchestrator.query("run the standup"))
        second = asyncio.run(orchestrator.query("run the standup"))
        assert first == second


class TestFindCode:
    """Tests for find_code."""

    def test_match(self):
        """Matching keywords return the snippet with its code."""
        response = intents.find_code("find code for floating card")
        assert response.type == "snippet"
        assert response.message == "Found 1 matching snippet:"
        assert "bg-black" in response.code
        assert response.clipboard is True
        assert response.dashboard_url == "/memories/floating-card-1"
        assert response.data["language"] == "react"

    def test_single_keyword_in_title(self):
        """One keyword hitting a title is enough."""
        response = intents.find_code("scheduler")
        assert response.data["title"] == "Social Media Post Scheduler"

    def test_nonexistent(self):
        """The "nonexistent" keyword always yields no match."""
        response = intents.find_code("code for nonexistent widget")
        assert response.message.startswith("No code snippets found")
        assert response.code is None

    def test_only_stop_words(self):
        """Queries without usable keywords yield no match."""
        assert intents.find_code("the and for").message.startswith("No code snippets found")


class TestSearchMemories:
    """Tests for search_memories."""

    def test_match(self):
        """Matching memories are listed with previews."""
        response = intents.search_memories("memory oauth")
        assert response.type == "memory"
        assert response.message == "Found 1 relevant memories:"
        assert response.data.startswith("OAuth Integration Best Practices:")
        assert response.dashboard_url == "/memories?q=memory%20oauth"

    def test_no_match(self):
        """No match is still a memory response."""
        response = intents.search_memories("memory zzz")
        assert response.message.startswith("No memories found")
        assert response.data is None


class TestCannedGenerators:
    """Tests for the campaign, content, and trend generators."""

    def test_campaign_type(self):
        """A known campaign type names the campaign."""
        response = intents.orchestrate_campaign("plan a viral campaign")
        assert response.type == "campaign"
        assert response.message == "🎯 Orchestrating Viral Campaign Strategy"
        assert len(response.agents) == 4

    def test_campaign_default(self):
        response = intents.orchestrate_campaign("social media push")
        assert response.message == "🎯 Orchestrating Social Media Campaign"

    def test_content(self):
        response = intents.orchestrate_content("create content")
        assert response.type == "orchestration"
        assert "Content Creation" in response.message

    def test_trends(self):
        response = intents.analyze_trends("trending")
        assert response.data["trendingHashtags"][0]["hashtag"] == "#EcoFriendly"

    def test_response_serialization(self):
        """Unset fields are omitted and aliases are used."""
        data = intents.find_code("floating card").to_dict()
        assert data["type"] == "snippet"
        assert data["dashboardUrl"] == "/memories/floating-card-1"
        assert "workflow" not in data
