"""Argument-count bounds derived from a callable's signature."""

from __future__ import annotations

import inspect
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from spyhook.errors import ArityMismatchError

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(frozen=True, slots=True)
class ArityBounds:
    """How many arguments a callable accepts.

    ``minimum``/``maximum`` count positional slots; ``maximum`` is ``math.inf``
    when the callable takes ``*args``.
    """

    minimum: int
    maximum: float
    required_names: tuple[str, ...] = ()
    positional_names: frozenset[str] = frozenset()
    keyword_names: frozenset[str] = frozenset()
    required_keywords: frozenset[str] = frozenset()
    any_keyword: bool = False

    @classmethod
    def from_callable(cls, func: Callable[..., Any]) -> ArityBounds | None:
        """Compute bounds, or None if the signature cannot be introspected."""
        try:
            signature = inspect.signature(func)
        except (TypeError, ValueError):
            return None

        minimum = 0
        maximum: float = 0
        required: list[str] = []
        positional: set[str] = set()
        keywords: set[str] = set()
        required_keywords: set[str] = set()
        any_keyword = False

        for param in signature.parameters.values():
            if param.kind in _POSITIONAL:
                if param.default is inspect.Parameter.empty:
                    minimum += 1
                    required.append(param.name)
                maximum += 1
                if param.kind is inspect.Parameter.POSITIONAL_OR_KEYWORD:
                    positional.add(param.name)
            elif param.kind is inspect.Parameter.VAR_POSITIONAL:
                maximum = math.inf
            elif param.kind is inspect.Parameter.KEYWORD_ONLY:
                keywords.add(param.name)
                if param.default is inspect.Parameter.empty:
                    required_keywords.add(param.name)
            elif param.kind is inspect.Parameter.VAR_KEYWORD:
                any_keyword = True

        return cls(
            minimum=minimum,
            maximum=maximum,
            required_names=tuple(required),
            positional_names=frozenset(positional),
            keyword_names=frozenset(keywords),
            required_keywords=frozenset(required_keywords),
            any_keyword=any_keyword,
        )

    def check(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        """Raise ArityMismatchError if the call does not fit these bounds."""
        by_keyword = [name for name in kwargs if name in self.positional_names]
        count = len(args) + len(by_keyword)
        if count < self.minimum:
            raise ArityMismatchError(f"wrong number of arguments ({count} for {self.minimum})")
        if count > self.maximum:
            raise ArityMismatchError(f"wrong number of arguments ({count} for {self._max_label()})")

        for index, name in enumerate(self.required_names):
            if index >= len(args) and name not in by_keyword:
                raise ArityMismatchError(f"missing argument: {name}")

        if not self.any_keyword:
            unknown = sorted(
                name for name in kwargs if name not in self.positional_names and name not in self.keyword_names
            )
            if unknown:
                raise ArityMismatchError(f"unknown keyword(s): {', '.join(unknown)}")

        missing = sorted(self.required_keywords - kwargs.keys())
        if missing:
            raise ArityMismatchError(f"missing keyword(s): {', '.join(missing)}")

    def _max_label(self) -> str:
        return "*" if self.maximum == math.inf else str(int(self.maximum))
