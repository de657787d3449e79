"""A spy replaces one member on one target and records every call to it."""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable
from types import MappingProxyType
from typing import Any

from spyhook.arity import ArityBounds
from spyhook.doubles import Double
from spyhook.errors import (
    AlreadyHookedError,
    ConfigConflictError,
    MissingMemberError,
    NoOriginalError,
    NotHookedError,
)
from spyhook.settings import SpySettings
from spyhook.types import CallLog, HookOptions, Visibility

logger = logging.getLogger(__name__)

_MISSING: Any = object()

Plan = Callable[..., Any]


class Spy:
    """Hooks ``name`` on ``target`` and records calls made through it.

    The substitute is set on the target itself (its own ``__dict__``), never
    on its class, so other instances keep their behaviour. Whatever the
    target held in its own ``__dict__`` before hooking is put back on unhook;
    if it held nothing, the class-level member shows through again.

    When the target is a class, the substitute is a descriptor: calls made
    through an instance record that instance as receiver and call through to
    the member bound the way Python would have bound it.

    Example:
        spy = Spy(greeter, "greet").hook().and_return("Hi")
        greeter.greet("Ann")  # -> "Hi"
        assert spy.has_been_called_with("Ann")
        spy.unhook()
    """

    __slots__ = (
        "target",
        "name",
        "settings",
        "_calls",
        "_plan",
        "_through",
        "_hooked",
        "_original",
        "_override",
        "_visibility",
        "_arity",
    )

    def __init__(self, target: Any, name: str, *, settings: SpySettings | None = None) -> None:
        self.target = target
        self.name = name
        self.settings = settings or SpySettings()
        self._calls: list[CallLog] = []
        self._plan: Plan | None = None
        self._through = False
        self._clear_hook_state()

    def __repr__(self) -> str:
        state = "hooked" if self._hooked else "unhooked"
        return f"<Spy {type(self.target).__name__}.{self.name} {state} calls={len(self._calls)}>"

    # --- State ---

    @property
    def hooked(self) -> bool:
        return self._hooked

    @property
    def calls(self) -> tuple[CallLog, ...]:
        return tuple(self._calls)

    @property
    def call_count(self) -> int:
        return len(self._calls)

    @property
    def last_call(self) -> CallLog | None:
        return self._calls[-1] if self._calls else None

    @property
    def has_original(self) -> bool:
        """True if hook() captured a member, even one whose value is None."""
        return self._original is not _MISSING

    @property
    def original(self) -> Any:
        """The member captured at hook time, or None."""
        return None if self._original is _MISSING else self._original

    @property
    def arity(self) -> ArityBounds | None:
        return self._arity

    @property
    def visibility(self) -> Visibility | None:
        return self._visibility

    # --- Lifecycle ---

    def hook(self, *, force: bool = False, visibility: Visibility | str | None = None) -> Spy:
        """Install the substitute on the target.

        Args:
            force: Install even if the target has no such member yet.
            visibility: Access level to report for the substitute instead of
                the one read from the original member.

        Raises:
            AlreadyHookedError: If this spy, or another spy on the same
                target, already hooks the member.
            MissingMemberError: If the member is absent and ``force`` is off.
        """
        options = HookOptions(force=force, visibility=visibility)
        if self._hooked:
            raise AlreadyHookedError(self.name)

        force = options.force or isinstance(self.target, Double)
        original = getattr(self.target, self.name, _MISSING)
        other = getattr(original, "__spy__", None)
        if isinstance(other, Spy) and other.hooked and other.target is self.target:
            raise AlreadyHookedError(self.name)
        if original is _MISSING and not force:
            raise MissingMemberError(f"{type(self.target).__name__} has no member {self.name!r}")

        own = getattr(self.target, "__dict__", {})
        override = own.get(self.name, _MISSING)

        substitute: Any
        if isinstance(self.target, type):
            substitute = _ClassSubstitute(self, inspect.getattr_static(self.target, self.name, _MISSING))
        else:
            substitute = self._build_substitute(self.target, original)
        setattr(self.target, self.name, substitute)

        self._hooked = True
        self._original = original
        self._override = override
        if options.visibility is not None:
            self._visibility = options.visibility
        elif original is not _MISSING:
            owner = self.target if isinstance(self.target, type) else type(self.target)
            self._visibility = Visibility.of(self.name, owner)
        self._arity = ArityBounds.from_callable(original) if callable(original) else None
        logger.debug("Hooked %r (original captured: %s)", self, original is not _MISSING)
        return self

    def unhook(self) -> Spy:
        """Remove the substitute and restore what the target held before.

        Call history is kept until reset().
        """
        if not self._hooked:
            raise NotHookedError(self.name)

        if self._override is _MISSING:
            delattr(self.target, self.name)
        else:
            setattr(self.target, self.name, self._override)

        self._clear_hook_state()
        logger.debug("Unhooked %r", self)
        return self

    def reset(self) -> bool:
        """Forget calls, plan and any hook, unhooking first if needed."""
        if self._hooked:
            self.unhook()
        self._calls = []
        self._plan = None
        self._through = False
        self._clear_hook_state()
        return True

    # --- Plans ---

    def and_return(self, value: Any = _MISSING, *, fn: Plan | None = None) -> Spy:
        """Set what calls return: a constant ``value`` or the result of ``fn``.

        ``fn`` receives the same arguments as the spied call.
        """
        if fn is not None:
            if value is not _MISSING:
                raise ConfigConflictError("value and fn conflict. Choose one")
            self._plan = fn
        else:
            result = None if value is _MISSING else value
            self._plan = lambda *args, **kwargs: result
        self._through = False
        return self

    def and_call_through(self) -> Spy:
        """Make calls run the original member."""
        if self._original is _MISSING:
            raise NoOriginalError("can only call through if original method is set")
        if not callable(self._original):
            raise NoOriginalError(f"cannot call through to {self.name!r}: original is not callable")
        self._plan = None
        self._through = True
        return self

    # --- Queries ---

    def has_been_called(self) -> bool:
        return len(self._calls) > 0

    def has_been_called_with(self, *args: Any, **kwargs: Any) -> bool:
        return any(call.matches(args, kwargs) for call in self._calls)

    # --- Dispatch ---

    def record(
        self,
        receiver: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        original: Any = _MISSING,
    ) -> Any:
        """Validate and log one call, then answer it with the current plan.

        ``original`` is the member as bound for this call; class targets pass
        it per access, instance targets use the one captured at hook time.
        """
        if original is _MISSING:
            original, arity = self._original, self._arity
        else:
            arity = ArityBounds.from_callable(original) if callable(original) else None

        if arity is not None and self.settings.check_arity:
            arity.check(args, kwargs)
        self._calls.append(CallLog(receiver, tuple(args), MappingProxyType(dict(kwargs))))

        if self._through:
            if not callable(original):
                raise NoOriginalError(f"cannot call through to {self.name!r}: no callable original")
            return original(*args, **kwargs)
        if self._plan is not None:
            return self._plan(*args, **kwargs)
        return None

    def _build_substitute(self, receiver: Any, original: Any, *, per_access: bool = False) -> Callable[..., Any]:
        spy = self
        bound = original if per_access else _MISSING
        is_async = inspect.iscoroutinefunction(original)

        def substitute(*args: Any, **kwargs: Any) -> Any:
            result = spy.record(receiver, args, kwargs, bound)
            # Recorded on call; only the plan result is awaited.
            return _resolve(result) if is_async else result

        if inspect.isroutine(original):
            functools.update_wrapper(substitute, original)
        if is_async:
            inspect.markcoroutinefunction(substitute)

        substitute.__spy__ = spy  # type: ignore[attr-defined]
        return substitute

    def _clear_hook_state(self) -> None:
        self._hooked = False
        self._original: Any = _MISSING
        self._override: Any = _MISSING
        self._visibility: Visibility | None = None
        self._arity: ArityBounds | None = None


class _ClassSubstitute:
    """Descriptor installed on class targets.

    Each attribute access binds the raw class member the usual way (plain
    function, staticmethod, classmethod) and hands out a substitute that
    records the object the call was made on.
    """

    def __init__(self, spy: Spy, raw: Any) -> None:
        self.__spy__ = spy
        self._raw = raw

    def __get__(self, instance: Any, owner: type | None = None) -> Callable[..., Any]:
        if owner is None:
            owner = type(instance)
        receiver = owner if instance is None else instance
        if self._raw is _MISSING:
            return self.__spy__._build_substitute(receiver, _MISSING)

        bound = self._raw
        if hasattr(type(bound), "__get__"):
            bound = bound.__get__(instance, owner)
        return self.__spy__._build_substitute(receiver, bound, per_access=True)


async def _resolve(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result
