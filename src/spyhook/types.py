"""Value types shared by spies and the registry."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict


class Visibility(StrEnum):
    """Access level of a member, read from Python's naming conventions."""

    PUBLIC = "public"
    PROTECTED = "protected"  # _name
    PRIVATE = "private"  # __name, name-mangled

    @classmethod
    def of(cls, name: str, owner: type | None = None) -> Visibility:
        """Classify a member name, treating ``_Owner__name`` as private."""
        if name.startswith("__") and not name.endswith("__"):
            return cls.PRIVATE
        if owner is not None:
            for klass in owner.__mro__:
                if name.startswith(f"_{klass.__name__.lstrip('_')}__"):
                    return cls.PRIVATE
        if name.startswith("_") and not name.startswith("__"):
            return cls.PROTECTED
        return cls.PUBLIC


@dataclass(frozen=True, slots=True)
class CallLog:
    """One recorded invocation of a spied member.

    ``kwargs`` is a read-only view. Logs compare by value and are unhashable,
    since arguments may themselves be unhashable.
    """

    receiver: Any
    args: tuple[Any, ...] = ()
    kwargs: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    __hash__ = None  # type: ignore[assignment]

    def matches(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> bool:
        return self.args == args and self.kwargs == kwargs


class HookOptions(BaseModel):
    """Validated options for Spy.hook()."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    force: bool = False
    visibility: Visibility | None = None
