from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from refdemo.adapters.sqlalchemy import start_mappers
from refdemo.adapters.sqlalchemy.migrations import upgrade_head
from refdemo.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyDemoDataUnitOfWork,
    shutdown,
    startup,
)
from refdemo.domain.ports import DemoDataDirectories  # noqa: TC001
from tests.helpers.directories import (
    RecordingPrivilegeScope,
    build_directories,
    install_prerequisites,
)

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyDemoDataUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyDemoDataUnitOfWork:
        return SqlAlchemyDemoDataUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def directories() -> DemoDataDirectories:
    return build_directories()


@pytest.fixture
def seeded_directories(directories: DemoDataDirectories) -> DemoDataDirectories:
    install_prerequisites(directories)
    return directories


@pytest.fixture
def privileges() -> RecordingPrivilegeScope:
    return RecordingPrivilegeScope()
