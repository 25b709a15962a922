"""
Shared fixtures: stub chat-completions endpoint and a small capability registry.
"""

import json
from typing import Any, Callable

import httpx
import pytest

from taskrelay.agent.tools import CapabilityRegistry
from taskrelay.core.config import Settings


class StubEndpoint:
    """httpx.MockTransport wrapper that records every request it receives."""

    def __init__(self, handler: Callable[[httpx.Request], Any]) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler
        self.transport = httpx.MockTransport(self._handle)

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self._handler(request)
        if not isinstance(result, httpx.Response):
            result = await result
        return result

    def body(self, index: int = 0) -> dict[str, Any]:
        return json.loads(self.requests[index].content)


def completion(content: str | None, usage: dict | None = None) -> httpx.Response:
    message = {} if content is None else {"content": content}
    data: dict[str, Any] = {"choices": [{"message": message}]}
    if usage is not None:
        data["usage"] = usage
    return httpx.Response(200, json=data)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="sk-test", model="gpt-test", base_url="https://llm.example.com/")


@pytest.fixture
def registry() -> CapabilityRegistry:
    reg = CapabilityRegistry()
    reg.register("docs", "list", lambda *args: {"docs": ["a.txt", "b.txt"], "args": list(args)})

    async def echo(*args):
        return list(args)

    reg.register("util", "echo", echo)
    return reg


@pytest.fixture(autouse=True)
def _clear_openai_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's real .env / shell credentials out of the tests."""
    for name in ("OPENAI_API_KEY", "openaiApiKey", "OPENAI_MODEL", "OPENAI_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
