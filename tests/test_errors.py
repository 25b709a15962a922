"""
Tests for the error-to-envelope mapping.
"""

from taskrelay.core.errors import (
    InvalidPlanError,
    MissingCredentialError,
    UpstreamHTTPError,
    UpstreamTimeoutError,
    error_to_result,
)


def test_known_errors_keep_their_message() -> None:
    """TaskRelayError subclasses map to a failure envelope with their message."""
    assert error_to_result(MissingCredentialError()).error == "OPENAI_API_KEY or openaiApiKey is not configured"
    assert error_to_result(UpstreamTimeoutError()).error == "Timeout on request to OpenAI"
    assert error_to_result(UpstreamHTTPError(503, "down")).error == "OpenAI request failed 503: down"
    assert error_to_result(InvalidPlanError({"app": "x"})).error == 'Invalid plan returned by model: {"app": "x"}'


def test_unexpected_error_is_generic() -> None:
    """Other exceptions map to 'Unexpected error: ...'."""
    result = error_to_result(KeyError("choices"))
    assert result.success is False
    assert result.payload is None
    assert result.error == "Unexpected error: 'choices'"
