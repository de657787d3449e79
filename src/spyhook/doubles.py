"""Placeholder objects with no behaviour of their own."""

from __future__ import annotations


class Double:
    """A bare stand-in object.

    Spies installed on a Double are always forced, since a Double has no
    members to capture. Use ``spyhook.double()`` to build one with members
    stubbed in a single step.
    """

    def __init__(self, name: str | None = None) -> None:
        self._name = name

    def __repr__(self) -> str:
        label = f" {self._name!r}" if self._name else ""
        return f"<Double{label}>"
