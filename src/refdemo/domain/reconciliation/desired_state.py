"""Declarative desired state of the reference demo metadata.

Everything here is constant configuration: identity keys never change between
runs, so the same demo record always resolves to the same stored record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from refdemo.domain.model import EntityKind, Gender

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class DesiredPerson:
    uuid: str
    gender: Gender
    given_name: str
    family_name: str


@dataclass(frozen=True, slots=True)
class DesiredUser:
    uuid: str
    username: str
    password: str = field(repr=False)
    role_uuids: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class StaffMember:
    """One demo staff member: a person, its login and its provider role."""

    label: str
    person: DesiredPerson
    user: DesiredUser
    provider_role_uuid: str


@dataclass(frozen=True, slots=True)
class SourceMappingTable:
    """Codes one external concept source should carry for local concepts.

    ``by_uuid`` maps concept uuid to code. ``by_name`` maps concept name to code
    for concepts whose uuid differs between installations.
    """

    source_name: str
    by_uuid: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    by_name: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


# Admin provider link ---------------------------------------------------------

ADMIN_PERSON_ID: Final[int] = 1
ADMIN_PROVIDER_IDENTIFIER: Final[str] = "admin"

# Staff -----------------------------------------------------------------------

CLERK_ROLE_UUID: Final[str] = "3cea8d52-0211-4e92-a2c5-ba1d772ae3b1"
NURSE_ROLE_UUID: Final[str] = "89b14681-77ac-439e-99e6-bddb837f70c4"
DOCTOR_ROLE_UUID: Final[str] = "f5ae56fa-bc6a-480d-8907-e4898ccac089"

CLERK_PROVIDER_ROLE_UUID: Final[str] = "545f0206-8cf7-41e8-809f-1c987351307e"
NURSE_PROVIDER_ROLE_UUID: Final[str] = "64a2b940-92be-4ecc-99f9-28b5a0930677"
DOCTOR_PROVIDER_ROLE_UUID: Final[str] = "a3ba8efd-cd97-41d2-a66d-a6e142d4f04c"

# Granted to every staff role until the demo roles carry their own privileges.
ELEVATED_ROLE_NAME: Final[str] = "System Developer"

DEMO_STAFF: Final[tuple[StaffMember, ...]] = (
    StaffMember(
        label="clerk",
        person=DesiredPerson(
            uuid="fd38b7ad-e189-46cf-a40a-f32d62653a8c",
            gender=Gender.MALE,
            given_name="John",
            family_name="Smith",
        ),
        user=DesiredUser(
            uuid="43a03311-f9a1-4f17-95f2-4d60f8efdec5",
            username="clerk",
            password="Clerk123",  # noqa: S106
            role_uuids=(CLERK_ROLE_UUID,),
        ),
        provider_role_uuid=CLERK_PROVIDER_ROLE_UUID,
    ),
    StaffMember(
        label="nurse",
        person=DesiredPerson(
            uuid="0a1ff0c8-a969-4428-b23f-eb1891c586ae",
            gender=Gender.FEMALE,
            given_name="Jane",
            family_name="Smith",
        ),
        user=DesiredUser(
            uuid="93a95669-764b-4bf0-8c1e-6fd2690cfe72",
            username="nurse",
            password="Nurse123",  # noqa: S106
            role_uuids=(NURSE_ROLE_UUID,),
        ),
        provider_role_uuid=NURSE_PROVIDER_ROLE_UUID,
    ),
    StaffMember(
        label="doctor",
        person=DesiredPerson(
            uuid="d4d4125b-19ff-45ff-bb98-5cb8e38d0d07",
            gender=Gender.MALE,
            given_name="Jake",
            family_name="Smith",
        ),
        user=DesiredUser(
            uuid="36e46610-3935-4490-9df4-e249d1326b0f",
            username="doctor",
            password="Doctor123",  # noqa: S106
            role_uuids=(DOCTOR_ROLE_UUID,),
        ),
        provider_role_uuid=DOCTOR_PROVIDER_ROLE_UUID,
    ),
)

# Concepts --------------------------------------------------------------------

SAME_AS_MAP_TYPE_UUID: Final[str] = "35543629-7d8c-11e1-909d-c80aa9edcf4e"

VISIT_DIAGNOSES_CONCEPT_UUID: Final[str] = "159947AAAAAAAAAAAAAAAAAAAAAAAAAAAAAA"
DIAGNOSIS_CONCEPT_UUID: Final[str] = "226ed7ad-b776-4b99-966d-fd818d3302c2"

EMR_SOURCE_NAME: Final[str] = "org.openmrs.module.emr"
PIH_SOURCE_NAME: Final[str] = "PIH"

RETURN_VISIT_DATE_NAME: Final[str] = "RETURN VISIT DATE"

SOURCE_CONCEPT_MAPPINGS: Final[tuple[SourceMappingTable, ...]] = (
    SourceMappingTable(
        source_name=EMR_SOURCE_NAME,
        by_uuid=MappingProxyType(
            {
                VISIT_DIAGNOSES_CONCEPT_UUID: "Diagnosis Concept Set",
                "161602AAAAAAAAAAAAAAAAAAAAAAAAAAAAAA": "Non-Coded Diagnosis",
                "159946AAAAAAAAAAAAAAAAAAAAAAAAAAAAAA": "Diagnosis Order",
                "159394AAAAAAAAAAAAAAAAAAAAAAAAAAAAAA": "Diagnosis Certainty",
                "159395AAAAAAAAAAAAAAAAAAAAAAAAAAAAAA": "Consult Free Text Comments",
            }
        ),
    ),
    SourceMappingTable(
        source_name=PIH_SOURCE_NAME,
        by_name=MappingProxyType({RETURN_VISIT_DATE_NAME: RETURN_VISIT_DATE_NAME}),
    ),
)

# Global properties -----------------------------------------------------------

DEFAULT_GLOBAL_PROPERTIES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "registrationcore.identifierSourceId": "1",
    }
)

SCHEDULER_USERNAME_PROPERTY: Final[str] = "scheduler.username"
SCHEDULER_PASSWORD_PROPERTY: Final[str] = "scheduler.password"  # noqa: S105


def forced_global_properties(
    *,
    scheduler_username: str = "admin",
    scheduler_password: str = "Admin123",  # noqa: S107
) -> dict[str, str]:
    """Properties that are rewritten on every run regardless of their value."""

    return {
        SCHEDULER_USERNAME_PROPERTY: scheduler_username,
        SCHEDULER_PASSWORD_PROPERTY: scheduler_password,
    }


def desired_state_rows(
    *,
    staff: tuple[StaffMember, ...] = DEMO_STAFF,
    mapping_tables: tuple[SourceMappingTable, ...] = SOURCE_CONCEPT_MAPPINGS,
    default_properties: Mapping[str, str] = DEFAULT_GLOBAL_PROPERTIES,
) -> list[tuple[EntityKind, str, str]]:
    """Flatten the desired state into ``(kind, identity key, value)`` rows."""

    rows: list[tuple[EntityKind, str, str]] = [
        (EntityKind.PROVIDER, f"person:{ADMIN_PERSON_ID}", ADMIN_PROVIDER_IDENTIFIER),
    ]
    for member in staff:
        person = member.person
        rows.append(
            (
                EntityKind.PERSON,
                person.uuid,
                f"{person.given_name} {person.family_name} ({person.gender})",
            )
        )
        rows.append((EntityKind.USER, member.user.uuid, member.user.username))
        rows.append((EntityKind.ROLE_ASSIGNMENT, member.provider_role_uuid, member.label))
    rows.append(
        (EntityKind.CONCEPT, VISIT_DIAGNOSES_CONCEPT_UUID, f"set member {DIAGNOSIS_CONCEPT_UUID}")
    )
    for table in mapping_tables:
        for uuid, code in table.by_uuid.items():
            rows.append((EntityKind.CONCEPT_MAPPING, uuid, f"{table.source_name}:{code}"))
        for name, code in table.by_name.items():
            rows.append((EntityKind.CONCEPT_MAPPING, f"name:{name}", f"{table.source_name}:{code}"))
    for name, value in default_properties.items():
        rows.append((EntityKind.GLOBAL_PROPERTY, name, value))
    for name in (SCHEDULER_USERNAME_PROPERTY, SCHEDULER_PASSWORD_PROPERTY):
        rows.append((EntityKind.GLOBAL_PROPERTY, name, "<forced>"))
    return rows
