"""
Planning: ask the model which capability to call, then parse its JSON answer.
"""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from taskrelay.core.errors import InvalidModelOutputError, InvalidPlanError
from taskrelay.schemas.task import Plan

logger = logging.getLogger(__name__)

PLANNER_SYSTEM_PROMPT = (
    "You are an agent that decides which tool to use via MCP inside the host application.\n"
    'Reply only with JSON in the format: {"app":"name","func":"name","args":[...]} without comments.'
)

# Opening ```json (with optional newline) or closing ``` (with optional leading newline).
_FENCE_RE = re.compile(r"```json\n?|\n?```")


def build_plan_messages(task: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": PLANNER_SYSTEM_PROMPT},
        {"role": "user", "content": f"Task: {task}"},
    ]


def strip_code_fence(content: str) -> str:
    """Remove markdown code fences and surrounding whitespace."""
    return _FENCE_RE.sub("", content).strip()


def parse_plan(content: Any) -> Plan:
    """
    Parse model content into a Plan.

    Raises InvalidModelOutputError (with the raw content) when it is not JSON, and
    InvalidPlanError (with the parsed value) when app or func is missing.
    """
    if not isinstance(content, str):
        logger.warning("[plan] content is not a string: %r", type(content).__name__)
        raise InvalidModelOutputError(json.dumps(content, ensure_ascii=False, default=str))
    cleaned = strip_code_fence(content)
    try:
        raw: Any = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning("[plan] content is not JSON: %s", e)
        raise InvalidModelOutputError(content) from e

    if not isinstance(raw, dict) or not raw.get("app") or not raw.get("func"):
        raise InvalidPlanError(raw)
    if raw.get("args") is None:
        raw = {**raw, "args": []}
    try:
        plan = Plan.model_validate(raw)
    except ValidationError as e:
        logger.warning("[plan] plan has wrong field types: %s", e)
        raise InvalidPlanError(raw) from e
    logger.info("[plan] OUT app=%s func=%s args=%d", plan.app, plan.func, len(plan.args))
    return plan
