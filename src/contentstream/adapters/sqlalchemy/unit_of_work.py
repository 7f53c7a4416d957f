"""Engine lifecycle and the SQLAlchemy unit of work for stored content."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from contentstream.adapters.sqlalchemy.mappings import start_mappers
from contentstream.adapters.sqlalchemy.migrations import upgrade_head
from contentstream.adapters.sqlalchemy.repositories import SqlAlchemyContentRepository
from contentstream.config.storage import get_database_uri
from contentstream.domain.ports.unit_of_work import ContentRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the content database is used before ``startup()`` or reconfigured twice."""


@dataclass(slots=True)
class _Database:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    def bind(self, engine: Engine | None) -> None:
        self.engine = engine
        self.sessions = (
            sessionmaker(bind=engine, expire_on_commit=False) if engine is not None else None
        )

    def open_session(self) -> Session:
        if self.sessions is None:
            raise StartupError(
                "Content database not started; call "
                "contentstream.adapters.sqlalchemy.startup() first."
            )
        return self.sessions()


_DATABASE = _Database()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Create or adopt the engine, map ``StoredContent`` and migrate the schema."""

    if _DATABASE.engine is not None and not force:
        raise StartupError("Content database already started; pass force=True to replace it.")

    resolved_engine = engine or create_engine(database_uri or get_database_uri(), future=True)
    start_mappers()
    upgrade_head(engine=resolved_engine)
    if _DATABASE.engine is not None and _DATABASE.engine is not resolved_engine:
        _DATABASE.engine.dispose()
    _DATABASE.bind(resolved_engine)
    log.debug("Content database ready at %s", resolved_engine.url)


def configured_engine() -> Engine | None:
    return _DATABASE.engine


def is_started() -> bool:
    return _DATABASE.engine is not None


def shutdown() -> None:
    """Dispose the engine; ``startup()`` may be called again afterwards."""

    if _DATABASE.engine is not None:
        _DATABASE.engine.dispose()
    _DATABASE.bind(None)


class SqlAlchemyContentUnitOfWork:
    """One session around a ``SqlAlchemyContentRepository``.

    Leaving the block with an exception rolls back; callers commit explicitly.
    """

    def __init__(self) -> None:
        if not is_started():
            raise StartupError("Content database not started; cannot open a unit of work.")
        self._session: Session | None = None
        self._repositories: ContentRepositories | None = None

    def __enter__(self) -> SqlAlchemyContentUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work already entered")
        self._session = _DATABASE.open_session()
        self._repositories = ContentRepositories(
            contents=SqlAlchemyContentRepository(self._session)
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work used outside its with-block")
        return self._session

    @property
    def repositories(self) -> ContentRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work used outside its with-block")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from contentstream.domain.ports.unit_of_work import ContentUnitOfWork

    _uow_check: ContentUnitOfWork = SqlAlchemyContentUnitOfWork()
