"""Query endpoint for the L0 orchestrator."""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_orchestrator
from api.models.requests import QueryRequest
from api.services.orchestrator import L0Orchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/l0", tags=["orchestrator"])


@router.post("/query")
async def query_orchestrator(body: QueryRequest, orchestrator: L0Orchestrator = Depends(get_orchestrator)):
    """
    Route a query to a built-in intent or a plugin.

    Request Body (QueryRequest):
        - query: str (required) - free-text request
        - project: str (optional) - project the request relates to
        - format: str (optional) - "text" | "json" | "workflow"
        - options: dict (optional) - passed through to plugin handlers

    Example:
        ```
        POST /api/l0/query
        {"query": "debug the login flow", "project": "web"}
        ```

    Returns:
        L0Response JSON; unset fields are omitted
    """
    logger.info(f"L0 query: {body.query[:80]}")
    response = await orchestrator.query(body.query, body.plugin_options())
    return response.to_dict()
