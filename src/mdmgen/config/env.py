"""Environment variable loaders for configuration."""

from __future__ import annotations

import os

from .errors import InvalidConfigurationError


def optional_env_var(name: str) -> str | None:
    """Return a stripped environment variable, or ``None`` when unset or blank."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_non_negative_int(name: str, default: int) -> int:
    raw = optional_env_var(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise InvalidConfigurationError(name, raw, "a non-negative integer") from exc
    if value < 0:
        raise InvalidConfigurationError(name, raw, "a non-negative integer")
    return value
