"""End-to-end spy scenarios through the public API."""

from __future__ import annotations

import pytest

import spyhook
from spyhook import ArityMismatchError, NoOriginalError


class Target:
    def greet(self, name):
        return "Hello, " + name

    def pick(self, first, second=None):
        return second or first


def test_greet_is_stubbed_then_restored():
    target = Target()

    spy = spyhook.on(target, "greet").and_return("Hi")

    assert target.greet("Ann") == "Hi"
    assert len(spy.calls) == 1
    assert spy.calls[0].args == ("Ann",)

    spy.unhook()

    assert target.greet("Ann") == "Hello, Ann"


def test_history_matches_calls_in_order():
    target = Target()
    spy = spyhook.on(target, "greet")
    names = ["Ann", "Bob", "Cy", "Ann"]

    for name in names:
        target.greet(name)

    assert [call.args[0] for call in spy.calls] == names
    assert all(spy.has_been_called_with(name) for name in names)


def test_one_required_one_optional_parameter():
    target = Target()
    spyhook.on(target, "pick")

    with pytest.raises(ArityMismatchError):
        target.pick()
    target.pick(1)
    target.pick(1, 2)
    with pytest.raises(ArityMismatchError):
        target.pick(1, 2, 3)


def test_constant_plan_then_call_through():
    target = Target()
    spy = spyhook.on(target, "pick").and_return("fixed")

    assert target.pick(1) == "fixed"
    assert target.pick(1, 2) == "fixed"

    spy.and_call_through()

    assert target.pick(1, 2) == 2


def test_stub_on_placeholder_has_no_original():
    placeholder = spyhook.double("placeholder")

    spy = spyhook.stub(placeholder, "foo")

    assert spy.hooked is True
    with pytest.raises(NoOriginalError):
        spy.and_call_through()


def test_teardown_restores_three_spies_across_two_targets():
    first, second = Target(), Target()
    spyhook.on(first, "greet", "pick")
    spyhook.on(second, {"greet": "Yo"})

    assert len(spyhook.default_registry) == 3

    spyhook.teardown()

    assert len(spyhook.default_registry) == 0
    assert first.greet("Ann") == "Hello, Ann"
    assert first.pick(1, 2) == 2
    assert second.greet("Ann") == "Hello, Ann"
