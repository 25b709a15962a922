"""
Minimal MCP-style tool server: exposes the capability registry over HTTP so
external agents can discover and call (app, func) pairs.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from taskrelay.agent.tools import CapabilityRegistry, default_registry
from taskrelay.core.errors import error_to_result
from taskrelay.schemas.envelope import ResultEnvelope

logger = logging.getLogger(__name__)

mcp_router = APIRouter(tags=["mcp"])


def get_registry() -> CapabilityRegistry:
    return default_registry


class InvokeRequest(BaseModel):
    """Request body for invoking a capability."""
    args: list[Any] = Field(default_factory=list)


@mcp_router.get("/tools", summary="MCP: list capabilities")
def mcp_list_tools(registry: CapabilityRegistry = Depends(get_registry)) -> dict[str, list[dict[str, Any]]]:
    return {"tools": [c.describe() for c in registry.list_capabilities()]}


@mcp_router.post(
    "/tools/{app}/{func}",
    response_model=ResultEnvelope,
    summary="MCP: invoke a capability",
    description="Call the (app, func) capability with positional args. Unknown pairs return a failure envelope.",
)
async def mcp_invoke_tool(
    app: str,
    func: str,
    body: InvokeRequest | None = None,
    registry: CapabilityRegistry = Depends(get_registry),
) -> ResultEnvelope:
    logger.info("MCP tool called: %s.%s", app, func)
    args = body.args if body is not None else []
    try:
        output = await registry.invoke(app, func, args)
    except Exception as e:
        return error_to_result(e)
    return ResultEnvelope.ok({"app": app, "func": func, "output": output})
