"""Typed readers for optional environment settings."""

from __future__ import annotations

import os

from .errors import ConfigurationError


def optional_int_env_var(name: str, *, default: int, minimum: int = 0) -> int:
    """Return the integer in ``name``, or ``default`` when it is unset or blank."""

    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value
