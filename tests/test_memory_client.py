"""Tests for MemoryClient against a local memory service."""

import asyncio
import os
from unittest.mock import patch

import aiohttp

from fake_memory_service import FakeMemoryService
from plugins.bundled.memory_services.client import MemoryClient
from plugins.bundled.memory_services.config import MemoryPluginConfig

MEMORY = {"id": "mem-1", "title": "Deploy key", "content": "The deploy key rotates monthly", "memory_type": "context"}


def run_with_service(routes, call, delay=0.0, **config):
    """Start the fake service, run `call(client)` against it, return (result, service)."""

    async def scenario():
        async with FakeMemoryService(routes, delay=delay) as service:
            client = MemoryClient(MemoryPluginConfig(api_url=service.url, **config))
            return await call(client), service

    return asyncio.run(scenario())


class TestCoreOperations:
    """Tests for search, create, list, get, and delete."""

    def test_search(self):
        """Search posts query, limit, and threshold."""
        routes = {("POST", "/api/v1/memory/search"): (200, {"results": [MEMORY], "total": 1})}
        result, service = run_with_service(routes, lambda c: c.search("deploy key"))

        assert result.success
        assert result.data.results[0].title == "Deploy key"
        request = service.requests[0]
        assert request.json == {"query": "deploy key", "limit": 5, "threshold": 0.65}
        assert request.headers["Content-Type"] == "application/json"

    def test_create(self):
        """Create posts the memory with the default type."""
        routes = {("POST", "/api/v1/memory"): (201, MEMORY)}
        result, service = run_with_service(routes, lambda c: c.create("Deploy key", "The deploy key rotates monthly"))

        assert result.data.id == "mem-1"
        assert service.requests[0].json == {
            "title": "Deploy key",
            "content": "The deploy key rotates monthly",
            "memory_type": "context",
            "tags": [],
        }

    def test_list(self):
        """List sends the limit as a query parameter."""
        routes = {("GET", "/api/v1/memory"): (200, {"data": [MEMORY, MEMORY]})}
        result, service = run_with_service(routes, lambda c: c.list())

        assert len(result.data.data) == 2
        assert service.requests[0].query == {"limit": "10"}
        assert service.requests[0].json is None

    def test_get_and_delete(self):
        """Get and delete address the memory by id."""
        routes = {
            ("GET", "/api/v1/memory/mem-1"): (200, MEMORY),
            ("DELETE", "/api/v1/memory/mem-1"): (200, ""),
        }

        async def call(client):
            return await client.get("mem-1"), await client.delete("mem-1")

        (fetched, deleted), service = run_with_service(routes, call)

        assert fetched.data.content == MEMORY["content"]
        assert deleted.success
        assert deleted.data == {}
        assert [r.method for r in service.requests] == ["GET", "DELETE"]


class TestIntelligenceAndBehavior:
    """Tests for the intelligence and behavior endpoints."""

    def test_suggest_tags_sends_user_id(self):
        routes = {("POST", "/api/v1/intelligence/suggest-tags"): (200, {"suggestions": [{"tag": "ops", "confidence": 0.9}]})}
        result, service = run_with_service(routes, lambda c: c.suggest_tags("mem-1"), user_id="u-1")

        assert result.data.suggestions[0].tag == "ops"
        assert service.requests[0].json == {"memory_id": "mem-1", "user_id": "u-1"}

    def test_detect_duplicates(self):
        routes = {("POST", "/api/v1/intelligence/detect-duplicates"): (200, {"duplicates": []})}
        result, service = run_with_service(routes, lambda c: c.detect_duplicates(0.85))

        assert result.data.duplicates == []
        assert service.requests[0].json == {"user_id": None, "similarity_threshold": 0.85, "max_pairs": 10}

    def test_recall_behavior(self):
        routes = {("POST", "/api/v1/behavior/recall"): (200, {"patterns": [{"trigger": "deploy", "actions": ["build"], "confidence": 0.7}]})}
        result, service = run_with_service(routes, lambda c: c.recall_behavior("deploy"))

        assert result.data.patterns[0].trigger == "deploy"
        assert service.requests[0].json["limit"] == 3
        assert service.requests[0].json["context"]["current_task"] == "deploy"

    def test_record_pattern(self):
        routes = {("POST", "/api/v1/behavior/record"): (200, {"pattern_id": "p-1", "recorded": True})}
        result, service = run_with_service(routes, lambda c: c.record_pattern("debug auth", ["check logs", "verify tokens"]))

        assert result.data.pattern_id == "p-1"
        body = service.requests[0].json
        assert body["trigger"] == "debug auth"
        assert [a["tool"] for a in body["actions"]] == ["check logs", "verify tokens"]
        assert body["final_outcome"] == "success"
        assert body["confidence"] == 0.8
        assert body["context"] == {"directory": os.getcwd()}


class TestTransport:
    """Tests for headers and failure handling."""

    def test_bearer_token(self):
        """A configured token is sent as a bearer token."""
        routes = {("GET", "/api/v1/memory"): (200, {"data": []})}
        _, service = run_with_service(routes, lambda c: c.list(), auth_token="secret")
        assert service.requests[0].headers["Authorization"] == "Bearer secret"

    def test_no_token(self):
        """Without a token no Authorization header is sent."""
        routes = {("GET", "/api/v1/memory"): (200, {"data": []})}
        _, service = run_with_service(routes, lambda c: c.list())
        assert "Authorization" not in service.requests[0].headers

    def test_http_error(self):
        """Non-2xx responses become errors with status and body."""
        routes = {("POST", "/api/v1/memory/search"): (500, "boom")}
        result, _ = run_with_service(routes, lambda c: c.search("x"))

        assert not result.success
        assert result.error == "API error (500): boom"

    def test_http_error_with_undecodable_body(self):
        """Bodies that are not valid UTF-8 still produce an API error."""
        routes = {("POST", "/api/v1/memory/search"): (500, b"\xff\xfe bad")}
        result, _ = run_with_service(routes, lambda c: c.search("x"))

        assert not result.success
        assert result.error.startswith("API error (500): ")
        assert "bad" in result.error

    def test_success_with_undecodable_body(self):
        """An undecodable 2xx body is an error, not an exception."""
        routes = {("POST", "/api/v1/memory/search"): (200, b"\xff\xfe bad")}
        result, _ = run_with_service(routes, lambda c: c.search("x"))

        assert not result.success
        assert result.error.startswith("Invalid JSON response")

    def test_default_timeout(self):
        """Without an explicit timeout each call gets a 30 second deadline."""
        routes = {("GET", "/api/v1/memory"): (200, {"data": []})}
        with patch.object(aiohttp, "ClientTimeout", wraps=aiohttp.ClientTimeout) as client_timeout:
            result, _ = run_with_service(routes, lambda c: c.list())

        assert result.success
        client_timeout.assert_called_once_with(total=30.0)

    def test_timeout(self):
        """A slow service is reported as a timeout."""
        routes = {("POST", "/api/v1/memory/search"): (200, {"results": []})}
        result, _ = run_with_service(routes, lambda c: c.search("x"), delay=0.5, timeout_ms=50)

        assert result.error == "Request timed out"

    def test_invalid_json(self):
        """Unparseable bodies become errors."""
        routes = {("GET", "/api/v1/memory"): (200, "<html>")}
        result, _ = run_with_service(routes, lambda c: c.list())

        assert result.error.startswith("Invalid JSON response")

    def test_unexpected_payload(self):
        """Payloads of the wrong shape become errors."""
        routes = {("GET", "/api/v1/memory"): (200, {"data": "not a list"})}
        result, _ = run_with_service(routes, lambda c: c.list())

        assert result.error.startswith("Unexpected response")

    def test_connection_refused(self):
        """Transport errors are returned, not raised."""
        client = MemoryClient(MemoryPluginConfig(api_url="http://127.0.0.1:1", timeout_ms=2000))
        result = asyncio.run(client.list())

        assert not result.success
        assert result.error
