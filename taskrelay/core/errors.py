"""
Application errors and the single error-to-envelope mapping.

Handlers raise these internally; error_to_result converts any exception into a
failure ResultEnvelope at the handler boundary so nothing propagates to callers.
"""

import json
import logging
from typing import Any

from taskrelay.schemas.envelope import ResultEnvelope

logger = logging.getLogger(__name__)


class TaskRelayError(Exception):
    """Base for expected failures. `message` is what the caller sees."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MissingInputError(TaskRelayError):
    """A required request field (task, prompt) is absent."""


class MissingCredentialError(TaskRelayError):
    """No API key could be resolved."""

    def __init__(self, message: str = "OPENAI_API_KEY or openaiApiKey is not configured") -> None:
        super().__init__(message)


class UpstreamTimeoutError(TaskRelayError):
    def __init__(self, message: str = "Timeout on request to OpenAI") -> None:
        super().__init__(message)


class NetworkError(TaskRelayError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Network error: {detail}")


class UpstreamHTTPError(TaskRelayError):
    """Chat completions returned a non-2xx status. Body is kept verbatim."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"OpenAI request failed {status_code}: {body}")


class InvalidModelOutputError(TaskRelayError):
    """Model content could not be parsed as JSON."""

    def __init__(self, content: str) -> None:
        self.content = content
        super().__init__(f"Invalid model response: {content}")


class InvalidPlanError(TaskRelayError):
    """Parsed plan is not an object or lacks app/func."""

    def __init__(self, plan: Any) -> None:
        self.plan = plan
        super().__init__(f"Invalid plan returned by model: {json.dumps(plan, ensure_ascii=False, default=str)}")


class CapabilityNotFoundError(TaskRelayError):
    def __init__(self, app: str, func: str) -> None:
        self.app = app
        self.func = func
        super().__init__(f"Unknown capability: {app}.{func}")


def error_to_result(exc: BaseException) -> ResultEnvelope:
    """Map any exception raised inside a handler to a failure envelope."""
    if isinstance(exc, TaskRelayError):
        logger.info("[errors] %s: %s", type(exc).__name__, exc.message)
        return ResultEnvelope.fail(exc.message)
    logger.error("[errors] unexpected failure: %s", exc, exc_info=exc)
    return ResultEnvelope.fail(f"Unexpected error: {exc}")
