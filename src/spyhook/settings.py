"""Runtime settings for spies and registries."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(slots=True)
class SpySettings:
    """Behaviour switches shared by every spy in a registry."""

    check_arity: bool = True
    raise_on_teardown_errors: bool = True

    @classmethod
    def load(cls, environ: Mapping[str, str] | None = None) -> SpySettings:
        """Load settings from defaults and SPYHOOK_* environment variables."""
        env = os.environ if environ is None else environ
        env_mappings = {
            "SPYHOOK_CHECK_ARITY": "check_arity",
            "SPYHOOK_RAISE_ON_TEARDOWN_ERRORS": "raise_on_teardown_errors",
        }

        settings = cls()
        for env_var, key in env_mappings.items():
            if (value := _parse_bool(env.get(env_var))) is not None:
                setattr(settings, key, value)
        return settings


def _parse_bool(raw: str | None) -> bool | None:
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return None
