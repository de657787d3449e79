"""Shared test fixtures."""

from __future__ import annotations

import pytest

import spyhook
from spyhook import SpyRegistry, SpySettings
from tests.test_doubles.greeter import Greeter


@pytest.fixture
def greeter() -> Greeter:
    return Greeter()


@pytest.fixture
def registry() -> SpyRegistry:
    """Registry isolated from the module-level one."""
    registry = SpyRegistry(SpySettings())
    yield registry
    registry.teardown()


@pytest.fixture(autouse=True)
def _teardown_default_registry():
    yield
    spyhook.teardown()
