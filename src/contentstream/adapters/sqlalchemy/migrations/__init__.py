"""Schema migrations for the content table."""

from __future__ import annotations

from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from alembic import command
from alembic.config import Config

from contentstream.config.storage import get_database_uri

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

MIGRATIONS_PATH: Final[Path] = Path(__file__).resolve().parent

log = getLogger(__name__)


def alembic_config(*, database_uri: str | None = None) -> Config:
    """Return an Alembic config for the migration scripts shipped in this package.

    Scripts are located relative to this module, so upgrades work from an installed
    wheel as well as from a checkout.
    """

    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_PATH))
    config.set_main_option("path_separator", "os")
    if database_uri is not None:
        config.set_main_option("sqlalchemy.url", database_uri)
    return config


def upgrade_head(*, engine: Engine | None = None, database_uri: str | None = None) -> None:
    """Bring the content schema to the latest revision.

    Given an ``engine``, the upgrade runs on one of its connections in a single
    transaction, so in-memory SQLite databases see the resulting schema.
    """

    if engine is None:
        uri = database_uri or get_database_uri()
        log.debug("Upgrading content schema at %s", uri)
        command.upgrade(alembic_config(database_uri=uri), "head")
        return

    config = alembic_config()
    with engine.begin() as connection:
        config.attributes["connection"] = connection
        log.debug("Upgrading content schema on %s", engine.url)
        command.upgrade(config, "head")
