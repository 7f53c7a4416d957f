"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_int_env_var
from .errors import ConfigurationError
from .logging import configure_logging
from .storage import StorageConfig, get_database_uri, get_storage_config
from .stream import DEFAULT_MAX_SIZE, StreamConfig, get_stream_config

__all__ = [
    "DEFAULT_MAX_SIZE",
    "ConfigurationError",
    "StorageConfig",
    "StreamConfig",
    "configure_logging",
    "get_database_uri",
    "get_storage_config",
    "get_stream_config",
    "optional_int_env_var",
]
