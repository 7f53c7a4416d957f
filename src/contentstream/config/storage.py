"""Where the content database lives."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "contentstream"
DEFAULT_DB_FILENAME: Final[str] = "contentstream.db"
DATA_DIR_ENV_VAR: Final[str] = "CONTENTSTREAM_DATA_DIR"
DATABASE_URI_ENV_VAR: Final[str] = "DATABASE_URI"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Local SQLite storage used when ``DATABASE_URI`` is not set."""

    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    @property
    def database_path(self) -> Path:
        return self.data_dir.expanduser().resolve() / self.database_filename

    def database_uri(self, *, create_dir: bool = True) -> str:
        path = self.database_path
        if create_dir:
            path.parent.mkdir(parents=True, exist_ok=True)
        return f"sqlite+pysqlite:///{path}"


def _platform_data_home() -> Path:
    if os.name == "nt":
        local = os.getenv("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    xdg = os.getenv("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


def get_storage_config() -> StorageConfig:
    explicit = os.getenv(DATA_DIR_ENV_VAR)
    data_dir = Path(explicit) if explicit else _platform_data_home() / APP_DIR_NAME
    return StorageConfig(data_dir=data_dir.expanduser().resolve())


def get_database_uri(*, storage: StorageConfig | None = None) -> str:
    """Return ``DATABASE_URI`` if set, else the SQLite file in the data directory."""

    override = os.getenv(DATABASE_URI_ENV_VAR)
    if override:
        return override
    return (storage or get_storage_config()).database_uri()
