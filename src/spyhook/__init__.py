"""Spies for tests: swap a member on a live object, record calls, put it back.

Module-level functions work on a default registry built from SPYHOOK_*
environment settings:

    import spyhook

    spy = spyhook.on(greeter, "greet").and_return("Hi")
    greeter.greet("Ann")
    assert spy.has_been_called_with("Ann")
    spyhook.teardown()
"""

from typing import Any

from spyhook.arity import ArityBounds
from spyhook.doubles import Double
from spyhook.errors import (
    AlreadyHookedError,
    ArityMismatchError,
    ConfigConflictError,
    InvalidNameTypeError,
    MissingMemberError,
    NoOriginalError,
    NotHookedError,
    SpyError,
    TeardownError,
)
from spyhook.registry import Name, SpyRegistry
from spyhook.settings import SpySettings
from spyhook.spy import Spy
from spyhook.types import CallLog, HookOptions, Visibility

default_registry = SpyRegistry(SpySettings.load())


def on(target: Any, *names: Name) -> Spy | list[Spy]:
    """Spy on existing members of ``target`` in the default registry."""
    return default_registry.on(target, *names)


def stub(target: Any, *names: Name) -> Spy | list[Spy]:
    """Stub members of ``target`` in the default registry, even missing ones."""
    return default_registry.stub(target, *names)


def off(target: Any, *names: Name) -> Spy | list[Spy]:
    return default_registry.off(target, *names)


def find(target: Any, *names: Name) -> Spy | None | list[Spy | None]:
    return default_registry.find(target, *names)


def teardown() -> None:
    """Unhook every spy in the default registry."""
    default_registry.teardown()


def double(name: str | None = None, *names: Name, **returns: Any) -> Double:
    return default_registry.double(name, *names, **returns)


__all__ = [
    "ArityBounds",
    "CallLog",
    "Double",
    "HookOptions",
    "Name",
    "Spy",
    "SpyRegistry",
    "SpySettings",
    "Visibility",
    "AlreadyHookedError",
    "ArityMismatchError",
    "ConfigConflictError",
    "InvalidNameTypeError",
    "MissingMemberError",
    "NoOriginalError",
    "NotHookedError",
    "SpyError",
    "TeardownError",
    "default_registry",
    "on",
    "stub",
    "off",
    "find",
    "teardown",
    "double",
]
