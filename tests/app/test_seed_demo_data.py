from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from refdemo.app import seed_demo_data
from refdemo.config import SeedConfig
from refdemo.domain.errors import MissingMetadataError
from refdemo.domain.model import EntityKind
from refdemo.domain.reconciliation import Outcome

if TYPE_CHECKING:
    from collections.abc import Callable

    from refdemo.adapters.sqlalchemy.unit_of_work import SqlAlchemyDemoDataUnitOfWork


def test_seed_commits_the_demo_data(
    sqlite_unit_of_work: Callable[[], SqlAlchemyDemoDataUnitOfWork],
) -> None:
    report = seed_demo_data(
        unit_of_work_factory=sqlite_unit_of_work,
        config=SeedConfig(),
        with_base_metadata=True,
    )

    assert report.changed
    with sqlite_unit_of_work() as uow:
        users = uow.repositories.users
        assert users.get_by_uuid("43a03311-f9a1-4f17-95f2-4d60f8efdec5") is not None
        assert uow.repositories.settings.get_value("scheduler.username") == "admin"


def test_dry_run_rolls_back(
    sqlite_unit_of_work: Callable[[], SqlAlchemyDemoDataUnitOfWork],
) -> None:
    report = seed_demo_data(
        unit_of_work_factory=sqlite_unit_of_work,
        config=SeedConfig(),
        with_base_metadata=True,
        dry_run=True,
    )

    assert report.count(kind=EntityKind.USER, outcome=Outcome.CREATED) == 3
    with sqlite_unit_of_work() as uow:
        assert uow.repositories.persons.get_by_id(1) is None
        assert uow.repositories.settings.get_value("scheduler.username") is None


def test_configured_credentials_reach_the_store(
    sqlite_unit_of_work: Callable[[], SqlAlchemyDemoDataUnitOfWork],
) -> None:
    seed_demo_data(
        unit_of_work_factory=sqlite_unit_of_work,
        config=SeedConfig(scheduler_username="daemon", scheduler_password="s3cret"),
        with_base_metadata=True,
    )

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.settings.get_value("scheduler.username") == "daemon"
        assert uow.repositories.settings.get_value("scheduler.password") == "s3cret"


def test_missing_prerequisites_abort_without_writes(
    sqlite_unit_of_work: Callable[[], SqlAlchemyDemoDataUnitOfWork],
) -> None:
    with pytest.raises(MissingMetadataError):
        seed_demo_data(unit_of_work_factory=sqlite_unit_of_work, config=SeedConfig())

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.providers.get_all(include_retired=True) == []
