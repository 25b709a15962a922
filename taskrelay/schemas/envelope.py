"""Uniform result shape returned by every handler."""

from typing import Any

from pydantic import BaseModel, Field


class ResultEnvelope(BaseModel):
    """One per invocation: success flag, payload on success, error message on failure."""

    success: bool = Field(..., description="True when the handler completed.")
    payload: Any | None = Field(None, description="Handler-specific result data.")
    error: str | None = Field(None, description="Human-readable failure message.")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"success": True, "payload": {"model": "gpt-4o-mini", "content": "4", "usage": {"total_tokens": 5}}, "error": None},
                {"success": False, "payload": None, "error": "Prompt is required"},
            ]
        }
    }

    @classmethod
    def ok(cls, payload: Any = None) -> "ResultEnvelope":
        return cls(success=True, payload=payload)

    @classmethod
    def fail(cls, error: str) -> "ResultEnvelope":
        return cls(success=False, error=error)
