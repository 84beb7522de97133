"""Memory service REST client."""

import asyncio
import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type, TypeVar

import aiohttp
from pydantic import BaseModel, ValidationError

from plugins.bundled.memory_services.config import MemoryPluginConfig
from plugins.bundled.memory_services.models import (
    ApiResult,
    BehaviorPatterns,
    DuplicateReport,
    Memory,
    MemoryList,
    NextActions,
    RecordedPattern,
    RelatedMemories,
    SearchResult,
    TagSuggestions,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

SEARCH_THRESHOLD = 0.65
DUPLICATE_MAX_PAIRS = 10
RECALL_LIMIT = 3
DEFAULT_CONFIDENCE = 0.8


class MemoryClient:
    """Talks to the memory service.

    Every call is bounded by the configured timeout and returns an
    ApiResult; network errors, timeouts and non-2xx responses come back as
    `ApiResult.error` rather than exceptions. Nothing is retried.
    """

    def __init__(self, config: MemoryPluginConfig):
        self.config = config

    # ------------------------------------------------------------------
    # Core CRUD
    # ------------------------------------------------------------------

    async def search(self, query: str, limit: int = 5, threshold: float = SEARCH_THRESHOLD) -> ApiResult[SearchResult]:
        result = await self._request(
            "POST", "/api/v1/memory/search",
            {"query": query, "limit": limit, "threshold": threshold},
        )
        return self._parse(result, SearchResult)

    async def create(
        self,
        title: str,
        content: str,
        memory_type: str = "context",
        tags: Optional[List[str]] = None,
    ) -> ApiResult[Memory]:
        result = await self._request(
            "POST", "/api/v1/memory",
            {"title": title, "content": content, "memory_type": memory_type, "tags": tags or []},
        )
        return self._parse(result, Memory)

    async def list(self, limit: int = 10) -> ApiResult[MemoryList]:
        result = await self._request("GET", f"/api/v1/memory?limit={limit}")
        return self._parse(result, MemoryList)

    async def get(self, memory_id: str) -> ApiResult[Memory]:
        result = await self._request("GET", f"/api/v1/memory/{memory_id}")
        return self._parse(result, Memory)

    async def delete(self, memory_id: str) -> ApiResult[Dict[str, Any]]:
        return await self._request("DELETE", f"/api/v1/memory/{memory_id}")

    # ------------------------------------------------------------------
    # Intelligence
    # ------------------------------------------------------------------

    async def suggest_tags(self, memory_id: str) -> ApiResult[TagSuggestions]:
        result = await self._request(
            "POST", "/api/v1/intelligence/suggest-tags",
            {"memory_id": memory_id, "user_id": self.config.user_id},
        )
        return self._parse(result, TagSuggestions)

    async def find_related(self, memory_id: str, limit: int = 5) -> ApiResult[RelatedMemories]:
        result = await self._request(
            "POST", "/api/v1/intelligence/find-related",
            {"memory_id": memory_id, "user_id": self.config.user_id, "limit": limit},
        )
        return self._parse(result, RelatedMemories)

    async def detect_duplicates(self, threshold: float = 0.9) -> ApiResult[DuplicateReport]:
        result = await self._request(
            "POST", "/api/v1/intelligence/detect-duplicates",
            {
                "user_id": self.config.user_id,
                "similarity_threshold": threshold,
                "max_pairs": DUPLICATE_MAX_PAIRS,
            },
        )
        return self._parse(result, DuplicateReport)

    # ------------------------------------------------------------------
    # Behavior
    # ------------------------------------------------------------------

    async def recall_behavior(
        self,
        current_task: str,
        current_directory: Optional[str] = None,
    ) -> ApiResult[BehaviorPatterns]:
        result = await self._request(
            "POST", "/api/v1/behavior/recall",
            {
                "user_id": self.config.user_id,
                "context": {"current_task": current_task, "current_directory": current_directory},
                "limit": RECALL_LIMIT,
            },
        )
        return self._parse(result, BehaviorPatterns)

    async def suggest_next_action(
        self,
        task_description: str,
        completed_steps: Optional[List[str]] = None,
    ) -> ApiResult[NextActions]:
        result = await self._request(
            "POST", "/api/v1/behavior/suggest",
            {
                "user_id": self.config.user_id,
                "current_state": {
                    "task_description": task_description,
                    "completed_steps": completed_steps or [],
                },
            },
        )
        return self._parse(result, NextActions)

    async def record_pattern(
        self,
        trigger: str,
        actions: List[str],
        outcome: str = "success",
        context: Optional[Dict[str, Any]] = None,
        confidence: Optional[float] = None,
    ) -> ApiResult[RecordedPattern]:
        """Record a workflow that worked.

        Args:
            trigger: Task description the workflow applies to
            actions: Ordered action names
            outcome: "success" | "partial" | "failed"
            context: Where it happened; defaults to the current directory
            confidence: Defaults to 0.8
        """
        timestamp = datetime.now(timezone.utc).isoformat()
        result = await self._request(
            "POST", "/api/v1/behavior/record",
            {
                "user_id": self.config.user_id,
                "trigger": trigger,
                "context": context or {"directory": os.getcwd()},
                "actions": [
                    {"tool": action, "parameters": {}, "outcome": outcome, "timestamp": timestamp}
                    for action in actions
                ],
                "final_outcome": outcome,
                "confidence": confidence or DEFAULT_CONFIDENCE,
            },
        )
        return self._parse(result, RecordedPattern)

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.auth_token:
            headers["Authorization"] = f"Bearer {self.config.auth_token}"
        return headers

    async def _request(
        self,
        method: str,
        endpoint: str,
        payload: Optional[Dict[str, Any]] = None,
        timeout_ms: Optional[int] = None,
    ) -> ApiResult[Any]:
        """Send one request to the memory service.

        The timeout is a deadline for the whole call; when it expires the
        request is cancelled and reported as "Request timed out".
        """
        url = f"{self.config.api_url.rstrip('/')}{endpoint}"
        timeout = aiohttp.ClientTimeout(total=(timeout_ms or self.config.timeout_ms) / 1000)
        body = json.dumps(payload) if payload is not None else None

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(method, url, data=body, headers=self._headers()) as response:
                    text = await response.text(errors="replace")
                    if response.status < 200 or response.status >= 300:
                        logger.error(f"[MemoryClient] {method} {endpoint} -> HTTP {response.status}: {text}")
                        return ApiResult(error=f"API error ({response.status}): {text or response.reason}")
                    return ApiResult(data=json.loads(text) if text.strip() else {})
        except asyncio.TimeoutError:
            logger.error(f"[MemoryClient] {method} {endpoint} timed out after {timeout.total}s")
            return ApiResult(error="Request timed out")
        except json.JSONDecodeError as e:
            logger.error(f"[MemoryClient] {method} {endpoint} returned invalid JSON: {e}")
            return ApiResult(error=f"Invalid JSON response: {e}")
        except aiohttp.ClientError as e:
            logger.error(f"[MemoryClient] {method} {endpoint} request error: {e}")
            return ApiResult(error=str(e) or type(e).__name__)

    @staticmethod
    def _parse(result: ApiResult[Any], model: Type[M]) -> ApiResult[M]:
        if not result.success:
            return ApiResult(error=result.error)
        try:
            return ApiResult(data=model.model_validate(result.data or {}))
        except ValidationError as e:
            logger.error(f"[MemoryClient] Unexpected {model.__name__} payload: {e}")
            return ApiResult(error=f"Unexpected response from memory service ({e.error_count()} validation error(s))")
