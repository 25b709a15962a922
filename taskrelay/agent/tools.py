"""
Host capabilities: the (app, func) -> callable mechanism the handlers dispatch to.

CapabilityInvoker is the interface handlers depend on. CapabilityRegistry is the
in-process implementation; hosts with their own call mechanism can pass any
object with a matching async invoke().

Built-ins: system.current_date, math.calculate.
"""

import inspect
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Protocol

from taskrelay.core.errors import CapabilityNotFoundError

logger = logging.getLogger(__name__)

CapabilityFn = Callable[..., Any]


class CapabilityInvoker(Protocol):
    async def invoke(self, app: str, func: str, args: list[Any]) -> Any: ...


@dataclass(frozen=True)
class Capability:
    """One invocable capability. params documents the positional arguments."""

    app: str
    func: str
    handler: CapabilityFn
    description: str = ""
    params: tuple[str, ...] = field(default_factory=tuple)

    def describe(self) -> dict[str, Any]:
        return {"app": self.app, "func": self.func, "description": self.description, "params": list(self.params)}


class CapabilityRegistry:
    """In-process CapabilityInvoker keyed by (app, func)."""

    def __init__(self) -> None:
        self._capabilities: dict[tuple[str, str], Capability] = {}

    def register(
        self,
        app: str,
        func: str,
        handler: CapabilityFn,
        description: str = "",
        params: tuple[str, ...] = (),
    ) -> Capability:
        cap = Capability(app=app, func=func, handler=handler, description=description, params=tuple(params))
        self._capabilities[(app, func)] = cap
        logger.info("[tools] registered %s.%s", app, func)
        return cap

    def get(self, app: str, func: str) -> Capability | None:
        return self._capabilities.get((app, func))

    def list_capabilities(self) -> list[Capability]:
        return sorted(self._capabilities.values(), key=lambda c: (c.app, c.func))

    async def invoke(self, app: str, func: str, args: list[Any]) -> Any:
        """Call the capability with args as positional arguments; awaits async handlers."""
        cap = self.get(app, func)
        if cap is None:
            raise CapabilityNotFoundError(app, func)
        logger.info("[tools] invoke %s.%s args=%r", app, func, args)
        result = cap.handler(*args)
        if inspect.isawaitable(result):
            result = await result
        return result


def current_date() -> str:
    """Current date and time (UTC)."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%d %H:%M:%S UTC")


def calculate(expression: str) -> str:
    """Evaluate a simple math expression (numbers and + - * / ( ) . only)."""
    expr = (expression or "").strip()
    if not expr:
        return "Error: empty expression"
    if not re.match(r"^[\d\s+\-*/().]+$", expr):
        return "Error: only numbers and + - * / ( ) . allowed"
    try:
        result = eval(expr, {"__builtins__": {}}, {})
        return str(result)
    except Exception as e:
        return f"Error: {e}"


def build_default_registry() -> CapabilityRegistry:
    registry = CapabilityRegistry()
    registry.register("system", "current_date", current_date, "Get the current date and time (UTC).")
    registry.register(
        "math",
        "calculate",
        calculate,
        "Evaluate a simple math expression (e.g. 2+3*4).",
        params=("expression",),
    )
    return registry


default_registry = build_default_registry()
