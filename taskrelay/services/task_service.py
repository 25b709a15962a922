"""
Agent handler: run a capability directly, or let the model plan which one to run.

validate -> (plan via chat completions) -> invoke capability -> envelope.
Single pass, no retries. Every failure becomes a failure envelope.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from taskrelay.agent.llm import ChatCompletionClient, chat_completions_url, extract_content
from taskrelay.agent.plan import build_plan_messages, parse_plan
from taskrelay.agent.tools import CapabilityInvoker
from taskrelay.core.config import PLAN_TEMPERATURE, Settings
from taskrelay.core.errors import MissingCredentialError, MissingInputError, error_to_result
from taskrelay.schemas.envelope import ResultEnvelope
from taskrelay.schemas.task import TaskRequest, normalize_params

logger = logging.getLogger(__name__)

STEP_EXECUTED = "executed"


def parse_task_request(params: Any) -> TaskRequest:
    try:
        return TaskRequest.model_validate(normalize_params(params))
    except ValidationError as e:
        raise MissingInputError(f"Invalid parameters: {e}") from e


class TaskHandler:
    """
    settings: resolved configuration (credential, default model and base URL).
    invoker: host capability mechanism (see taskrelay.agent.tools).
    transport: optional httpx transport for the completion request.
    """

    def __init__(
        self,
        settings: Settings,
        invoker: CapabilityInvoker,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.invoker = invoker
        self.transport = transport

    async def run(self, params: Any) -> ResultEnvelope:
        try:
            return await self._run(params)
        except Exception as e:
            return error_to_result(e)

    async def _run(self, params: Any) -> ResultEnvelope:
        request = parse_task_request(params)
        if not request.task:
            raise MissingInputError("Task description is required")
        if not self.settings.api_key:
            raise MissingCredentialError()

        model = request.model or self.settings.model

        if request.app and request.func:
            logger.info("[task] direct app=%s func=%s", request.app, request.func)
            output = await self.invoker.invoke(request.app, request.func, request.args or [])
            return ResultEnvelope.ok(
                {"step": STEP_EXECUTED, "app": request.app, "func": request.func, "output": output}
            )

        url = chat_completions_url(request.base_url or self.settings.base_url)
        logger.info("[task] planning task=%r model=%s", request.task, model)
        client = ChatCompletionClient(self.settings.api_key, transport=self.transport)
        data = await client.complete(
            url,
            model=model,
            messages=build_plan_messages(request.task),
            temperature=PLAN_TEMPERATURE,
            timeout=self.settings.plan_timeout,
        )
        plan = parse_plan(extract_content(data, default="{}"))
        output = await self.invoker.invoke(plan.app, plan.func, plan.args)
        logger.info("[task] OUT executed %s.%s", plan.app, plan.func)
        return ResultEnvelope.ok({"step": STEP_EXECUTED, "plan": plan.model_dump(), "output": output})
