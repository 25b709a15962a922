"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Handlers receive a Settings object instead of reading the environment
themselves, so tests can pass their own.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

# OpenAI-compatible chat completions
DEFAULT_MODEL: str = "gpt-4o-mini"
DEFAULT_BASE_URL: str = "https://api.openai.com"
CHAT_COMPLETIONS_PATH: str = "/v1/chat/completions"

# Credential lookup order (first non-empty wins)
API_KEY_ENV_VARS: tuple[str, ...] = ("OPENAI_API_KEY", "openaiApiKey")

# Planning request: deterministic output, hard 30s cancellation
PLAN_TIMEOUT: float = 30.0
PLAN_TEMPERATURE: float = 0.0

# Free-form query defaults
DEFAULT_TEMPERATURE: float = 0.2
DEFAULT_BEHAVIOR: str = "You are a helpful assistant."


def _env(name: str) -> str:
    return os.getenv(name, "").strip()


def resolve_api_key() -> str:
    """Return the first non-empty credential from API_KEY_ENV_VARS, or ""."""
    for name in API_KEY_ENV_VARS:
        value = _env(name)
        if value:
            return value
    return ""


@dataclass(frozen=True)
class Settings:
    """Per-invocation configuration for the handlers."""

    api_key: str = ""
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    plan_timeout: float = PLAN_TIMEOUT
    # None means no timeout on the free-form query request.
    query_timeout: float | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Read OPENAI_* variables now (not at import time)."""
        return cls(
            api_key=resolve_api_key(),
            model=_env("OPENAI_MODEL") or DEFAULT_MODEL,
            base_url=_env("OPENAI_BASE_URL") or DEFAULT_BASE_URL,
        )
