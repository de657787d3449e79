"""Behavior tests for SPYHOOK_* settings."""

from __future__ import annotations

import pytest

from spyhook import SpySettings


def test_defaults():
    settings = SpySettings.load({})

    assert settings.check_arity is True
    assert settings.raise_on_teardown_errors is True


@pytest.mark.parametrize(("raw", "expected"), [("0", False), ("false", False), ("Off", False), ("yes", True)])
def test_env_overrides_check_arity(raw, expected):
    settings = SpySettings.load({"SPYHOOK_CHECK_ARITY": raw})

    assert settings.check_arity is expected


def test_env_overrides_teardown_policy():
    settings = SpySettings.load({"SPYHOOK_RAISE_ON_TEARDOWN_ERRORS": "no"})

    assert settings.raise_on_teardown_errors is False


def test_unrecognised_values_keep_defaults():
    settings = SpySettings.load({"SPYHOOK_CHECK_ARITY": "maybe"})

    assert settings.check_arity is True


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("SPYHOOK_CHECK_ARITY", "false")

    assert SpySettings.load().check_arity is False
