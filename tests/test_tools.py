"""
Tests for the capability registry and built-in capabilities.
"""

import re

import pytest

from taskrelay.agent.tools import CapabilityRegistry, build_default_registry, calculate, current_date
from taskrelay.core.errors import CapabilityNotFoundError


class TestCalculate:
    def test_evaluates(self) -> None:
        """Arithmetic expressions are evaluated to a string."""
        assert calculate("2+3*4") == "14"
        assert calculate(" (10 - 4) / 2 ") == "3.0"

    def test_rejects_names(self) -> None:
        """Expressions containing names are rejected before evaluation."""
        assert calculate("__import__('os')") == "Error: only numbers and + - * / ( ) . allowed"

    def test_empty(self) -> None:
        """An empty expression returns an error string."""
        assert calculate("") == "Error: empty expression"

    def test_division_by_zero_is_reported(self) -> None:
        """Evaluation errors come back as an error string."""
        assert calculate("1/0").startswith("Error: ")


def test_current_date_format() -> None:
    """current_date returns a 'YYYY-MM-DD HH:MM:SS UTC' string."""
    assert re.match(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} UTC$", current_date())


@pytest.mark.asyncio
class TestRegistry:
    async def test_sync_and_async_handlers(self, registry: CapabilityRegistry) -> None:
        """Both sync and async capability handlers are invoked and awaited."""
        assert await registry.invoke("util", "echo", [1, 2]) == [1, 2]
        assert (await registry.invoke("docs", "list", []))["docs"] == ["a.txt", "b.txt"]

    async def test_unknown_pair_raises(self, registry: CapabilityRegistry) -> None:
        """An unregistered (app, func) raises CapabilityNotFoundError."""
        with pytest.raises(CapabilityNotFoundError) as exc:
            await registry.invoke("docs", "delete", [])
        assert exc.value.message == "Unknown capability: docs.delete"

    async def test_default_registry_builtins(self) -> None:
        """The default registry exposes math.calculate and system.current_date."""
        reg = build_default_registry()
        assert [(c.app, c.func) for c in reg.list_capabilities()] == [("math", "calculate"), ("system", "current_date")]
        assert await reg.invoke("math", "calculate", ["6*7"]) == "42"


def test_register_replaces_existing() -> None:
    """Registering the same (app, func) twice keeps only the latest."""
    reg = CapabilityRegistry()
    reg.register("a", "f", lambda: 1)
    reg.register("a", "f", lambda: 2, description="second")
    assert len(reg.list_capabilities()) == 1
    assert reg.get("a", "f").describe() == {"app": "a", "func": "f", "description": "second", "params": []}
