"""Prerequisite metadata normally delivered by the bulk metadata import.

A blank database has none of the roles, provider roles, concept sources or
concepts the demo data builds on. ``install_base_metadata`` installs a minimal
stand-in so the reconciler can run against a local store. It is idempotent and
never touches records that already exist.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from refdemo.domain.model import (
    Concept,
    ConceptMapType,
    ConceptSource,
    EntityKind,
    Gender,
    Person,
    PersonName,
    ProviderRole,
    Role,
)
from refdemo.domain.reconciliation.desired_state import (
    ADMIN_PERSON_ID,
    CLERK_PROVIDER_ROLE_UUID,
    CLERK_ROLE_UUID,
    DIAGNOSIS_CONCEPT_UUID,
    DOCTOR_PROVIDER_ROLE_UUID,
    DOCTOR_ROLE_UUID,
    ELEVATED_ROLE_NAME,
    EMR_SOURCE_NAME,
    NURSE_PROVIDER_ROLE_UUID,
    NURSE_ROLE_UUID,
    PIH_SOURCE_NAME,
    RETURN_VISIT_DATE_NAME,
    SAME_AS_MAP_TYPE_UUID,
    VISIT_DIAGNOSES_CONCEPT_UUID,
)
from refdemo.domain.reconciliation.report import Outcome, ReconcileReport

if TYPE_CHECKING:
    from refdemo.domain.ports import DemoDataDirectories

log = logging.getLogger(__name__)

ADMIN_PERSON_UUID: Final[str] = "147b347b-d001-4eec-8b31-5300138e827d"
ELEVATED_ROLE_UUID: Final[str] = "96ee1269-7fe8-424f-9033-a6776015541c"
RETURN_VISIT_DATE_UUID: Final[str] = "63246b87-4ab6-4c8b-ad27-6add14d9d5a2"

BASE_ROLES: Final[dict[str, str]] = {
    CLERK_ROLE_UUID: "Registration Clerk",
    NURSE_ROLE_UUID: "Nurse",
    DOCTOR_ROLE_UUID: "Doctor",
    ELEVATED_ROLE_UUID: ELEVATED_ROLE_NAME,
}

BASE_PROVIDER_ROLES: Final[dict[str, str]] = {
    CLERK_PROVIDER_ROLE_UUID: "Clerk",
    NURSE_PROVIDER_ROLE_UUID: "Nurse",
    DOCTOR_PROVIDER_ROLE_UUID: "Doctor",
}

BASE_CONCEPT_SOURCES: Final[tuple[str, ...]] = (EMR_SOURCE_NAME, PIH_SOURCE_NAME)

BASE_CONCEPTS: Final[dict[str, str]] = {
    VISIT_DIAGNOSES_CONCEPT_UUID: "Visit Diagnoses",
    DIAGNOSIS_CONCEPT_UUID: "Diagnosis",
    "161602AAAAAAAAAAAAAAAAAAAAAAAAAAAAAA": "Diagnosis or problem, non-coded",
    "159946AAAAAAAAAAAAAAAAAAAAAAAAAAAAAA": "Diagnosis order",
    "159394AAAAAAAAAAAAAAAAAAAAAAAAAAAAAA": "Diagnosis certainty",
    "159395AAAAAAAAAAAAAAAAAAAAAAAAAAAAAA": "Clinical impression comment",
    RETURN_VISIT_DATE_UUID: RETURN_VISIT_DATE_NAME,
}


def install_base_metadata(
    directories: DemoDataDirectories,
    *,
    admin_person_id: int = ADMIN_PERSON_ID,
    report: ReconcileReport | None = None,
) -> ReconcileReport:
    report = report if report is not None else ReconcileReport()
    _install_admin_person(directories, admin_person_id, report)
    _install_roles(directories, report)
    _install_provider_roles(directories, report)
    _install_concept_metadata(directories, report)
    log.info("Base metadata installed: %s", report.describe())
    return report


def _install_admin_person(
    directories: DemoDataDirectories,
    admin_person_id: int,
    report: ReconcileReport,
) -> None:
    if directories.persons.get_by_id(admin_person_id) is not None:
        report.record(EntityKind.PERSON, str(admin_person_id), Outcome.UNCHANGED)
        return
    admin = Person(id=admin_person_id, uuid=ADMIN_PERSON_UUID, gender=str(Gender.MALE))
    admin.add_name(PersonName(given_name="Super", family_name="User"))
    directories.persons.save(admin)
    report.record(EntityKind.PERSON, str(admin_person_id), Outcome.CREATED, "admin person")


def _install_roles(directories: DemoDataDirectories, report: ReconcileReport) -> None:
    users = directories.users
    for uuid, name in BASE_ROLES.items():
        if users.get_role_by_uuid(uuid) is not None:
            report.record(EntityKind.ROLE, uuid, Outcome.UNCHANGED)
            continue
        # Role names are unique, so a same-named role under another uuid blocks this one.
        clash = users.get_role_by_name(name)
        if clash is not None:
            log.warning(
                "Role %r already exists as %s; cannot install it as %s", name, clash.uuid, uuid
            )
            report.record(EntityKind.ROLE, uuid, Outcome.SKIPPED, f"name taken by {clash.uuid}")
            continue
        users.save_role(Role(uuid=uuid, name=name))
        report.record(EntityKind.ROLE, uuid, Outcome.CREATED, name)


def _install_provider_roles(directories: DemoDataDirectories, report: ReconcileReport) -> None:
    provider_roles = directories.provider_roles
    for uuid, name in BASE_PROVIDER_ROLES.items():
        if provider_roles.get_by_uuid(uuid) is not None:
            report.record(EntityKind.ROLE_ASSIGNMENT, uuid, Outcome.UNCHANGED)
            continue
        provider_roles.save(ProviderRole(uuid=uuid, name=name))
        report.record(EntityKind.ROLE_ASSIGNMENT, uuid, Outcome.CREATED, name)


def _install_concept_metadata(directories: DemoDataDirectories, report: ReconcileReport) -> None:
    concepts = directories.concepts
    if concepts.get_map_type_by_uuid(SAME_AS_MAP_TYPE_UUID) is None:
        concepts.save_map_type(ConceptMapType(uuid=SAME_AS_MAP_TYPE_UUID, name="SAME-AS"))
        report.record(EntityKind.CONCEPT_MAPPING, SAME_AS_MAP_TYPE_UUID, Outcome.CREATED, "SAME-AS")

    for source_name in BASE_CONCEPT_SOURCES:
        if concepts.get_source_by_name(source_name) is None:
            concepts.save_source(ConceptSource(name=source_name))
            report.record(EntityKind.CONCEPT_MAPPING, source_name, Outcome.CREATED, "source")

    for uuid, name in BASE_CONCEPTS.items():
        if concepts.get_by_uuid(uuid) is not None:
            report.record(EntityKind.CONCEPT, uuid, Outcome.UNCHANGED)
            continue
        # The return visit concept only needs to exist under its name.
        if name == RETURN_VISIT_DATE_NAME and concepts.get_by_name(name) is not None:
            report.record(EntityKind.CONCEPT, uuid, Outcome.UNCHANGED)
            continue
        concepts.save(Concept(uuid=uuid, name=name, is_set=uuid == VISIT_DIAGNOSES_CONCEPT_UUID))
        report.record(EntityKind.CONCEPT, uuid, Outcome.CREATED, name)
