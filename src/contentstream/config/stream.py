"""Defaults for content stream passes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_int_env_var

MB: Final[int] = 1024 * 1024
DEFAULT_MAX_SIZE: Final[int] = 5 * MB
MAX_SIZE_ENV_VAR: Final[str] = "CONTENTSTREAM_MAX_SIZE"


@dataclass(frozen=True, slots=True)
class StreamConfig:
    max_size: int = DEFAULT_MAX_SIZE


def get_stream_config() -> StreamConfig:
    return StreamConfig(
        max_size=optional_int_env_var(MAX_SIZE_ENV_VAR, default=DEFAULT_MAX_SIZE, minimum=1)
    )
