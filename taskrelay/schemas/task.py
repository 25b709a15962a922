"""Schemas for the agent and query handlers."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


def normalize_params(params: Any) -> dict[str, Any]:
    """
    Unwrap a single-element list holding an object (how some hosts pass params).
    None becomes {}. Anything else that is not a dict is returned as {}.
    """
    if isinstance(params, list) and len(params) == 1 and isinstance(params[0], dict):
        params = params[0]
    if not isinstance(params, dict):
        return {}
    return params


class TaskRequest(BaseModel):
    """Request for the agent handler. Either app+func are given, or the model plans them from task."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    task: str | None = Field(None, validation_alias=AliasChoices("task", "tarefa"), description="Natural-language task.")
    app: str | None = Field(None, description="Capability app name; skips planning when set with func.")
    func: str | None = Field(None, description="Capability function name.")
    args: list[Any] | None = Field(None, description="Positional arguments for the capability.")
    model: str | None = Field(None, description="Overrides OPENAI_MODEL.")
    base_url: str | None = Field(None, validation_alias=AliasChoices("base_url", "baseUrl"), description="Overrides OPENAI_BASE_URL.")


class Plan(BaseModel):
    """Plan chosen by the model: which capability to call and with what."""

    app: str
    func: str
    args: list[Any] = Field(default_factory=list)


class QueryRequest(BaseModel):
    """Request for the free-form query handler."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    behavior: str | None = Field(
        None,
        validation_alias=AliasChoices("behavior", "comportamento"),
        description="System message; a generic assistant persona when empty.",
    )
    prompt: str | None = Field(None, description="User message.")
    model: str | None = None
    temperature: float | None = None
    base_url: str | None = Field(None, validation_alias=AliasChoices("base_url", "baseUrl"))
