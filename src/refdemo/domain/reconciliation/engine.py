"""Single entry point running every demo metadata flow once.

The host calls a ``Reconciler`` at startup with its directories injected. Any
exception aborts the run; writes of flows that already finished are left to
the caller's unit of work.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .concepts import configure_concepts
from .desired_state import (
    ADMIN_PERSON_ID,
    DEFAULT_GLOBAL_PROPERTIES,
    DEMO_STAFF,
    ELEVATED_ROLE_NAME,
    SOURCE_CONCEPT_MAPPINGS,
    forced_global_properties,
)
from .global_properties import set_required_global_properties
from .providers import link_admin_to_provider
from .report import ReconcileReport
from .staff import setup_staff

if TYPE_CHECKING:
    from collections.abc import Mapping

    from refdemo.domain.ports import DemoDataDirectories, PrivilegeScope

    from .desired_state import SourceMappingTable, StaffMember

log = logging.getLogger(__name__)


@dataclass(slots=True)
class Reconciler:
    """Reconcile the stored metadata with the demo desired state."""

    directories: DemoDataDirectories
    privileges: PrivilegeScope
    admin_person_id: int = ADMIN_PERSON_ID
    staff: tuple[StaffMember, ...] = DEMO_STAFF
    elevated_role_name: str = ELEVATED_ROLE_NAME
    mapping_tables: tuple[SourceMappingTable, ...] = SOURCE_CONCEPT_MAPPINGS
    default_properties: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_GLOBAL_PROPERTIES)
    )
    forced_properties: Mapping[str, str] = field(default_factory=forced_global_properties)

    def __call__(self) -> ReconcileReport:
        report = ReconcileReport()
        log.info("Reconciling reference demo metadata")
        link_admin_to_provider(
            self.directories.persons,
            self.directories.providers,
            self.privileges,
            admin_person_id=self.admin_person_id,
            report=report,
        )
        configure_concepts(
            self.directories.concepts,
            self.privileges,
            mapping_tables=self.mapping_tables,
            report=report,
        )
        set_required_global_properties(
            self.directories.settings,
            defaults=self.default_properties,
            forced=self.forced_properties,
            report=report,
        )
        setup_staff(
            self.directories,
            staff=self.staff,
            elevated_role_name=self.elevated_role_name,
            report=report,
        )
        log.info("Reference demo metadata reconciled: %s", report.describe())
        return report

