"""
Chat completions client for OpenAI-compatible endpoints.

One POST to <base_url>/v1/chat/completions per call. Non-2xx, timeouts and
transport failures are raised as TaskRelayError subclasses; callers map them to
result envelopes.
"""

import asyncio
import logging
from typing import Any

import httpx

from taskrelay.core.config import CHAT_COMPLETIONS_PATH
from taskrelay.core.errors import NetworkError, UpstreamHTTPError, UpstreamTimeoutError

logger = logging.getLogger(__name__)


def chat_completions_url(base_url: str) -> str:
    """Strip one trailing slash from base_url and append the completions path."""
    base = base_url[:-1] if base_url.endswith("/") else base_url
    return base + CHAT_COMPLETIONS_PATH


def extract_content(data: Any, default: str = "") -> str:
    """Return choices[0].message.content, or default when any level is missing."""
    if not isinstance(data, dict):
        return default
    choices = data.get("choices") or []
    if choices and isinstance(choices[0], dict):
        msg = choices[0].get("message") or {}
        content = msg.get("content") if isinstance(msg, dict) else None
        if content is not None:
            return content
    return default


class ChatCompletionClient:
    """
    Thin async wrapper around httpx for chat completions.

    transport: optional httpx transport (e.g. httpx.MockTransport in tests).
    """

    def __init__(self, api_key: str, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._api_key = api_key
        self._transport = transport

    async def complete(
        self,
        url: str,
        model: str,
        messages: list[dict[str, Any]],
        temperature: float,
        timeout: float | None = None,
    ) -> Any:
        """
        POST {model, temperature, messages} and return the decoded JSON body.
        timeout=None means the request may wait indefinitely.
        """
        payload = {"model": model, "temperature": temperature, "messages": messages}
        logger.info("[llm] IN  url=%s model=%s messages=%d timeout=%s", url, model, len(messages), timeout)
        try:
            if timeout is None:
                response = await self._post(url, payload)
            else:
                response = await asyncio.wait_for(self._post(url, payload), timeout=timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning("[llm] request timed out after %ss: %r", timeout, e)
            raise UpstreamTimeoutError() from e
        except httpx.HTTPError as e:
            logger.warning("[llm] request failed: %s", e)
            raise NetworkError(str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.warning("[llm] error %s: %s", response.status_code, response.text[:200])
            raise UpstreamHTTPError(response.status_code, response.text)
        try:
            data = response.json()
        except ValueError as e:
            logger.warning("[llm] response body is not JSON: %s", response.text[:200])
            raise NetworkError(f"invalid JSON response: {e}") from e
        logger.info("[llm] OUT status=%s usage=%r", response.status_code, data.get("usage") if isinstance(data, dict) else None)
        return data

    async def _post(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self._api_key}", "Content-Type": "application/json"}
        async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
            return await client.post(url, json=payload, headers=headers)
