"""Behavior tests for spies on coroutine functions."""

from __future__ import annotations

import inspect

import pytest

from spyhook import ArityMismatchError, Spy


@pytest.mark.asyncio
async def test_async_member_stays_awaitable(greeter):
    spy = Spy(greeter, "fetch_greeting").hook().and_return("Hi")

    assert inspect.iscoroutinefunction(greeter.fetch_greeting)
    assert await greeter.fetch_greeting("Ann") == "Hi"
    assert spy.has_been_called_with("Ann")


@pytest.mark.asyncio
async def test_async_call_through_awaits_the_original(greeter):
    Spy(greeter, "fetch_greeting").hook().and_call_through()

    assert await greeter.fetch_greeting("Ann") == "Hello, Ann"


@pytest.mark.asyncio
async def test_async_function_plan_is_awaited(greeter):
    async def plan(name):
        return f"Hey, {name}"

    Spy(greeter, "fetch_greeting").hook().and_return(fn=plan)

    assert await greeter.fetch_greeting("Ann") == "Hey, Ann"


def test_async_call_is_recorded_before_await(greeter):
    spy = Spy(greeter, "fetch_greeting").hook()

    pending = greeter.fetch_greeting("Ann")

    assert spy.call_count == 1
    pending.close()


def test_async_arity_errors_raise_at_call_site(greeter):
    Spy(greeter, "fetch_greeting").hook()

    with pytest.raises(ArityMismatchError):
        greeter.fetch_greeting()


@pytest.mark.asyncio
async def test_async_member_restored_after_unhook(greeter):
    Spy(greeter, "fetch_greeting").hook().and_return("Hi").unhook()

    assert await greeter.fetch_greeting("Ann") == "Hello, Ann"
