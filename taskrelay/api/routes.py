"""
API route aggregator: register endpoints and delegate to handlers.

Both POST routes always answer 200 with a ResultEnvelope; failures live in the envelope.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from taskrelay.agent.tools import CapabilityInvoker, default_registry
from taskrelay.core.config import Settings
from taskrelay.schemas.envelope import ResultEnvelope
from taskrelay.services.query_service import QueryHandler
from taskrelay.services.task_service import TaskHandler

logger = logging.getLogger(__name__)
router = APIRouter()


def get_settings() -> Settings:
    """Environment is read per request."""
    return Settings.from_env()


def get_invoker() -> CapabilityInvoker:
    return default_registry


def get_task_handler(
    settings: Settings = Depends(get_settings),
    invoker: CapabilityInvoker = Depends(get_invoker),
) -> TaskHandler:
    return TaskHandler(settings, invoker)


def get_query_handler(settings: Settings = Depends(get_settings)) -> QueryHandler:
    return QueryHandler(settings)


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "taskrelay running"}


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Handlers ---

@router.post(
    "/agent",
    response_model=ResultEnvelope,
    tags=["agent"],
    summary="Run a capability directly or via a model-generated plan",
    description="Body: {task, app?, func?, args?, model?, base_url?} or a one-element list holding it.",
)
async def post_agent(
    body: Any = Body(default=None),
    handler: TaskHandler = Depends(get_task_handler),
) -> ResultEnvelope:
    result = await handler.run(body)
    logger.info("[api:post_agent] OUT success=%s", result.success)
    return result


@router.post(
    "/query",
    response_model=ResultEnvelope,
    tags=["query"],
    summary="Forward one chat completion and relay the text",
    description="Body: {behavior?, prompt, model?, temperature?, base_url?} or a one-element list holding it.",
)
async def post_query(
    body: Any = Body(default=None),
    handler: QueryHandler = Depends(get_query_handler),
) -> ResultEnvelope:
    result = await handler.run(body)
    logger.info("[api:post_query] OUT success=%s", result.success)
    return result
