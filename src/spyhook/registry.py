"""Registry of active spies, keyed by target identity and member name."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any, TypeVar

from spyhook.doubles import Double
from spyhook.errors import AlreadyHookedError, InvalidNameTypeError, TeardownError
from spyhook.settings import SpySettings
from spyhook.spy import Spy

logger = logging.getLogger(__name__)

# A member name, or a mapping of member names to constant return values.
Name = str | Mapping[str, Any]


class SpyRegistry:
    """Tracks spies so they can be found and reverted together.

    One registry should live for one test run; call teardown() between tests
    to put every spied member back.

    Example:
        registry = SpyRegistry()
        greet = registry.on(greeter, "greet")
        registry.stub(repo, {"save": True})
        ...
        registry.teardown()
    """

    __slots__ = ("settings", "_spies")

    def __init__(self, settings: SpySettings | None = None) -> None:
        self.settings = settings or SpySettings()
        self._spies: dict[tuple[int, str], Spy] = {}

    def __len__(self) -> int:
        return len(self._spies)

    def __contains__(self, spy: object) -> bool:
        return any(tracked is spy for tracked in self._spies.values())

    def __iter__(self) -> Iterator[Spy]:
        return iter(list(self._spies.values()))

    def all(self) -> list[Spy]:
        """List tracked spies in the order they were tracked."""
        return list(self._spies.values())

    # --- Tracking ---

    def track(self, spy: Spy) -> Spy:
        """Add a hooked spy."""
        key = (id(spy.target), spy.name)
        if key in self._spies:
            raise AlreadyHookedError(spy.name)
        self._spies[key] = spy
        return spy

    def lookup(self, target: Any, *names: Name) -> Spy | None | list[Spy | None]:
        """Find spies on ``target`` by name; None where nothing is tracked."""
        found = [self._spies.get((id(target), name)) for name in _flatten_names(names)]
        return _one_or_many(found)

    def untrack(self, target: Any, name: str) -> list[Spy]:
        """Unhook and forget the spy for ``name`` on ``target``."""
        key = (id(target), name)
        spy = self._spies.get(key)
        if spy is None:
            return []
        if spy.hooked:
            spy.unhook()
        del self._spies[key]
        return [spy]

    def teardown(self) -> None:
        """Unhook every tracked spy and empty the registry.

        Every spy gets an unhook attempt even if an earlier one fails. The
        registry ends empty either way; collected failures are then raised as
        a TeardownError, or logged if the settings say not to raise.
        """
        errors: list[Exception] = []
        for spy in list(self._spies.values()):
            if not spy.hooked:
                continue
            try:
                spy.unhook()
            except Exception as e:
                errors.append(e)
        count = len(self._spies)
        self.reset()
        logger.debug("Tore down %d spies (%d failed)", count, len(errors))

        if errors:
            if self.settings.raise_on_teardown_errors:
                raise TeardownError(errors)
            for error in errors:
                logger.warning("Failed to unhook spy during teardown: %s", error)

    def reset(self) -> None:
        """Forget every spy without unhooking any of them."""
        self._spies = {}

    # --- Facade ---

    def on(self, target: Any, *names: Name) -> Spy | list[Spy]:
        """Spy on existing members of ``target``.

        Each name is a member name, or a mapping of names to the value the
        spied member should return.
        """
        return _one_or_many(self._create_and_hook(target, names, force=False))

    def stub(self, target: Any, *names: Name) -> Spy | list[Spy]:
        """Like on(), but members need not exist on ``target``."""
        return _one_or_many(self._create_and_hook(target, names, force=True))

    def off(self, target: Any, *names: Name) -> Spy | list[Spy]:
        """Unhook and untrack spies on ``target``; returns the removed ones."""
        removed: list[Spy] = []
        for name in _flatten_names(names):
            removed.extend(self.untrack(target, name))
        return _one_or_many(removed)

    def find(self, target: Any, *names: Name) -> Spy | None | list[Spy | None]:
        """Alias of lookup()."""
        return self.lookup(target, *names)

    def double(self, name: str | None = None, *names: Name, **returns: Any) -> Double:
        """Build a Double and stub ``names`` and ``returns`` on it."""
        double = Double(name)
        stubbed: list[Name] = list(names)
        if returns:
            stubbed.append(returns)
        if stubbed:
            self.stub(double, *stubbed)
        return double

    def _create_and_hook(self, target: Any, names: tuple[Name, ...], *, force: bool) -> list[Spy]:
        spies: list[Spy] = []
        for name in names:
            _check_name(name)
            if isinstance(name, str):
                spies.append(self._hook_one(target, name, force=force))
            else:
                for member, value in name.items():
                    _check_name(member)
                    spies.append(self._hook_one(target, member, force=force).and_return(value))
        return spies

    def _hook_one(self, target: Any, name: str, *, force: bool) -> Spy:
        existing = self._spies.get((id(target), name))
        if existing is not None and existing.hooked:
            raise AlreadyHookedError(name)
        if existing is not None:
            del self._spies[(id(target), name)]
        spy = Spy(target, name, settings=self.settings).hook(force=force)
        return self.track(spy)


def _check_name(name: object) -> None:
    if not isinstance(name, (str, Mapping)):
        raise InvalidNameTypeError(
            f"{type(name).__name__} is an invalid class, names must be str or a mapping"
        )


def _flatten_names(names: tuple[Name, ...]) -> list[str]:
    flat: list[str] = []
    for name in names:
        _check_name(name)
        if isinstance(name, str):
            flat.append(name)
        else:
            flat.extend(name.keys())
    return flat


T = TypeVar("T")


def _one_or_many(items: list[T]) -> T | list[T]:
    return items[0] if len(items) == 1 else items
