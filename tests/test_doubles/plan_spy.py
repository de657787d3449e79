"""Test double: spy plan that records what a spied call forwarded to it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class PlanSpy:
    """Records plan invocations for assertions and returns a fixed result."""

    result: Any = None
    calls: list[dict[str, Any]] = field(default_factory=list)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        self.calls.append({"args": args, "kwargs": kwargs})
        return self.result
