"""
Free-form query handler: one chat completion, text relayed back.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from taskrelay.agent.llm import ChatCompletionClient, chat_completions_url, extract_content
from taskrelay.core.config import DEFAULT_BEHAVIOR, DEFAULT_TEMPERATURE, Settings
from taskrelay.core.errors import MissingCredentialError, MissingInputError, error_to_result
from taskrelay.schemas.envelope import ResultEnvelope
from taskrelay.schemas.task import QueryRequest, normalize_params

logger = logging.getLogger(__name__)


class QueryHandler:
    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self.transport = transport

    async def run(self, params: Any) -> ResultEnvelope:
        try:
            return await self._run(params)
        except Exception as e:
            return error_to_result(e)

    async def _run(self, params: Any) -> ResultEnvelope:
        if not self.settings.api_key:
            raise MissingCredentialError()
        try:
            request = QueryRequest.model_validate(normalize_params(params))
        except ValidationError as e:
            raise MissingInputError(f"Invalid parameters: {e}") from e
        if not request.prompt:
            raise MissingInputError("Prompt is required")

        model = request.model or self.settings.model
        temperature = request.temperature if request.temperature is not None else DEFAULT_TEMPERATURE
        url = chat_completions_url(request.base_url or self.settings.base_url)
        messages = [
            {"role": "system", "content": request.behavior or DEFAULT_BEHAVIOR},
            {"role": "user", "content": request.prompt},
        ]
        logger.info("[query] IN  model=%s temperature=%s prompt_len=%d", model, temperature, len(request.prompt))

        client = ChatCompletionClient(self.settings.api_key, transport=self.transport)
        data = await client.complete(
            url,
            model=model,
            messages=messages,
            temperature=temperature,
            timeout=self.settings.query_timeout,
        )
        content = extract_content(data)
        usage = data.get("usage") if isinstance(data, dict) else None
        logger.info("[query] OUT content_len=%d", len(str(content)))
        return ResultEnvelope.ok({"model": model, "content": content, "usage": usage})
