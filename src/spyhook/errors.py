"""Exceptions raised when a spy is misused."""

from __future__ import annotations


class SpyError(Exception):
    """Base class for every spyhook error."""


class AlreadyHookedError(SpyError):
    """Raised when hooking a member that is already hooked."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} method has already been hooked")
        self.name = name


class NotHookedError(SpyError):
    """Raised when unhooking a member that is not hooked."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} method has not been hooked")
        self.name = name


class ConfigConflictError(SpyError, ValueError):
    """Raised when a return value and a return function are both given."""


class NoOriginalError(SpyError):
    """Raised when calling through to an original that was never captured."""


class ArityMismatchError(SpyError, TypeError):
    """Raised when a spied call does not fit the original's signature."""


class InvalidNameTypeError(SpyError, TypeError):
    """Raised when a member name is neither a string nor a mapping."""


class MissingMemberError(SpyError, AttributeError):
    """Raised when spying on a member the target does not have."""


class TeardownError(SpyError):
    """Raised after teardown when one or more spies failed to unhook.

    The registry is always empty by the time this is raised.
    """

    def __init__(self, errors: list[Exception]) -> None:
        super().__init__(f"failed to unhook {len(errors)} spy(s): " + "; ".join(map(str, errors)))
        self.errors = errors
