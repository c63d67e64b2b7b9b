"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from refdemo.adapters.privileges import ProxyPrivilegeScope
from refdemo.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyDemoDataUnitOfWork,
    is_started,
    startup,
)
from refdemo.config import get_seed_config
from refdemo.domain.bootstrap import install_base_metadata
from refdemo.domain.ports.unit_of_work import DemoDataUnitOfWork
from refdemo.domain.reconciliation import Reconciler, ReconcileReport, forced_global_properties

if TYPE_CHECKING:
    from refdemo.config import SeedConfig
    from refdemo.domain.ports import PrivilegeScope

UnitOfWorkFactory = Callable[[], DemoDataUnitOfWork]


log = getLogger(__name__)


def seed_demo_data(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: SeedConfig | None = None,
    privileges: PrivilegeScope | None = None,
    dry_run: bool = False,
    with_base_metadata: bool = False,
    database_uri: str | None = None,
) -> ReconcileReport:
    """Reconcile the reference demo metadata inside a single unit of work.

    With ``dry_run`` every change is rolled back and the report describes what a
    real run would have done.
    """

    if unit_of_work_factory is None:
        if not is_started():
            startup(database_uri=database_uri)
        unit_of_work_factory = SqlAlchemyDemoDataUnitOfWork
    effective_config = config or get_seed_config()
    effective_privileges = privileges or ProxyPrivilegeScope()
    log.info(
        "Starting demo data seed: admin_person_id=%s, dry_run=%s, with_base_metadata=%s",
        effective_config.admin_person_id,
        dry_run,
        with_base_metadata,
    )

    with unit_of_work_factory() as uow:
        directories = uow.repositories
        report = ReconcileReport()
        if with_base_metadata:
            install_base_metadata(
                directories,
                admin_person_id=effective_config.admin_person_id,
                report=report,
            )
        reconciler = Reconciler(
            directories=directories,
            privileges=effective_privileges,
            admin_person_id=effective_config.admin_person_id,
            forced_properties=forced_global_properties(
                scheduler_username=effective_config.scheduler_username,
                scheduler_password=effective_config.scheduler_password,
            ),
        )
        report.actions.extend(reconciler().actions)
        if dry_run:
            uow.rollback()
        else:
            uow.commit()

    log.info(
        "Finished demo data seed (%s): %s",
        "rolled back" if dry_run else "committed",
        report.describe(),
    )
    return report
