from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from contentstream.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyContentUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from contentstream.domain.content_store import UnitOfWorkContentStore
from contentstream.domain.errors import AddressMismatchError
from tests.helpers.streams import address, payload

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine

HELLO = {"content": "hello"}


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_unit_of_work_requires_startup() -> None:
    assert not is_started()
    with pytest.raises(StartupError):
        SqlAlchemyContentUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b


def test_committed_content_is_visible_to_the_next_unit_of_work(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with SqlAlchemyContentUnitOfWork() as uow:
        uow.repositories.contents.put(address(HELLO), payload(HELLO))
        uow.commit()

    with SqlAlchemyContentUnitOfWork() as uow:
        assert uow.repositories.contents.get(address(HELLO)) == payload(HELLO)


def test_failed_unit_of_work_rolls_back(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(AddressMismatchError), SqlAlchemyContentUnitOfWork() as uow:
        uow.repositories.contents.put(address(HELLO), payload(HELLO))
        uow.repositories.contents.put(address(HELLO) + "x", payload(HELLO))

    with SqlAlchemyContentUnitOfWork() as uow:
        assert not uow.repositories.contents.exists(address(HELLO))


def test_session_is_released_after_exit(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyContentUnitOfWork()

    with uow:
        pass

    with pytest.raises(StartupError):
        _ = uow.session


def test_unit_of_work_content_store_commits_each_operation(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    store = UnitOfWorkContentStore(SqlAlchemyContentUnitOfWork)

    store.put(address(HELLO), payload(HELLO))

    assert store.exists(address(HELLO))
    assert [stored.address for stored in store.list_contents()] == [address(HELLO)]
    assert store.delete(address(HELLO)) is True
    assert not store.exists(address(HELLO))
