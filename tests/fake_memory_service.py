"""Local stand-in for the memory service REST API, served by aiohttp."""

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from aiohttp import web
from aiohttp.test_utils import TestServer


@dataclass
class RecordedRequest:
    method: str
    path: str
    query: Dict[str, str]
    headers: Any
    json: Optional[Any]


class FakeMemoryService:
    """Answers every request from a (method, path) -> (status, body) table.

    Unknown routes answer 404. Use as an async context manager inside the
    event loop that runs the client.
    """

    def __init__(self, routes: Optional[Dict[Tuple[str, str], Tuple[int, Any]]] = None, delay: float = 0.0):
        self.routes = dict(routes or {})
        self.delay = delay
        self.requests = []
        self._server: Optional[TestServer] = None

    @property
    def url(self) -> str:
        return f"http://{self._server.host}:{self._server.port}"

    async def __aenter__(self) -> "FakeMemoryService":
        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", self._handle)
        self._server = TestServer(app)
        await self._server.start_server()
        return self

    async def __aexit__(self, *exc_info):
        await self._server.close()

    async def _handle(self, request: web.Request) -> web.Response:
        text = await request.text()
        self.requests.append(RecordedRequest(
            method=request.method,
            path=request.path,
            query=dict(request.query),
            headers=request.headers.copy(),
            json=json.loads(text) if text else None,
        ))

        if self.delay:
            await asyncio.sleep(self.delay)

        status, body = self.routes.get((request.method, request.path), (404, "not found"))
        if isinstance(body, bytes):
            return web.Response(status=status, body=body, content_type="application/json")
        if isinstance(body, str):
            return web.Response(status=status, text=body)
        return web.json_response(body, status=status)
