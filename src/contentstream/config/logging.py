"""Logging setup for the contentstream command line."""

from __future__ import annotations

import logging
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
# Alembic announces its migration context on every startup
QUIET_LOGGERS: Final[tuple[str, ...]] = ("alembic.runtime.migration",)


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger through ``logging.basicConfig``.

    ``force=True`` replaces handlers installed earlier. Loggers in ``QUIET_LOGGERS``
    stay at WARNING unless ``level`` is DEBUG or lower.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    quiet_level = logging.NOTSET if level <= logging.DEBUG else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
