"""Provision the demo staff: persons, their logins and provider roles.

Two role policies apply here:
``replace_roles`` sets a user's roles to exactly the desired set, while
``add_inherited_role`` only ever adds to a role's inherited roles.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from refdemo.domain.errors import MissingMetadataError
from refdemo.domain.model import EntityKind, Person, PersonName, User

from .desired_state import DEMO_STAFF, ELEVATED_ROLE_NAME
from .report import Outcome, ReconcileReport

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from refdemo.domain.model import Role
    from refdemo.domain.ports import DemoDataDirectories, PersonDirectory, UserDirectory

    from .desired_state import DesiredPerson, DesiredUser, StaffMember

log = logging.getLogger(__name__)


def replace_roles(user: User, roles: Iterable[Role]) -> bool:
    """Make ``roles`` the user's complete role set; return whether it changed."""
    return user.replace_roles(roles)


def add_inherited_role(role: Role, inherited: Role) -> bool:
    """Let ``role`` inherit ``inherited``; existing inherited roles are kept."""
    return role.add_inherited_role(inherited)


def setup_person(
    persons: PersonDirectory,
    desired: DesiredPerson,
    *,
    report: ReconcileReport | None = None,
) -> Person:
    report = report if report is not None else ReconcileReport()
    person = persons.get_by_uuid(desired.uuid)
    created = person is None
    if person is None:
        person = Person(uuid=desired.uuid)

    changed = person.gender != desired.gender
    person.gender = str(desired.gender)

    name = person.person_name
    if name is None:
        name = PersonName()
        person.add_name(name)
        changed = True
    if (name.given_name, name.family_name) != (desired.given_name, desired.family_name):
        changed = True
    name.given_name = desired.given_name
    name.family_name = desired.family_name

    if created or changed:
        persons.save(person)
    report.record(EntityKind.PERSON, desired.uuid, _outcome(created=created, changed=changed))
    return person


def setup_user(
    users: UserDirectory,
    desired: DesiredUser,
    person: Person,
    roles: Sequence[Role],
    *,
    report: ReconcileReport | None = None,
) -> User:
    report = report if report is not None else ReconcileReport()
    user = users.get_by_uuid(desired.uuid)
    created = user is None
    if user is None:
        user = User(uuid=desired.uuid)

    changed = user.username != desired.username or user.person is not person
    user.username = desired.username
    user.person = person
    if replace_roles(user, roles):
        changed = True

    user = users.save(user, desired.password)
    report.record(EntityKind.USER, desired.uuid, _outcome(created=created, changed=changed))
    return user


def setup_staff(
    directories: DemoDataDirectories,
    *,
    staff: Sequence[StaffMember] = DEMO_STAFF,
    elevated_role_name: str = ELEVATED_ROLE_NAME,
    report: ReconcileReport | None = None,
) -> list[User]:
    """Provision every staff member and return their users in ``staff`` order."""

    report = report if report is not None else ReconcileReport()
    persons = {
        member.label: setup_person(directories.persons, member.person, report=report)
        for member in staff
    }

    roles_by_member = {
        member.label: [_require_role(directories.users, uuid) for uuid in member.user.role_uuids]
        for member in staff
    }
    users = [
        setup_user(
            directories.users,
            member.user,
            persons[member.label],
            roles_by_member[member.label],
            report=report,
        )
        for member in staff
    ]

    for member in staff:
        _assign_provider_role(directories, member, persons[member.label], report=report)

    _grant_elevated_role(
        directories.users,
        [role for member in staff for role in roles_by_member[member.label]],
        elevated_role_name,
        report=report,
    )
    log.info("Provisioned %d demo staff members", len(users))
    return users


def _assign_provider_role(
    directories: DemoDataDirectories,
    member: StaffMember,
    person: Person,
    *,
    report: ReconcileReport,
) -> None:
    provider_role = directories.provider_roles.get_by_uuid(member.provider_role_uuid)
    if provider_role is None:
        log.warning(
            "Provider role %s not found; %s gets no provider role",
            member.provider_role_uuid,
            member.label,
        )
        report.record(
            EntityKind.ROLE_ASSIGNMENT,
            member.provider_role_uuid,
            Outcome.SKIPPED,
            "provider role missing",
        )
        return
    assigned = directories.provider_roles.assign_to_person(person, provider_role, member.label)
    report.record(
        EntityKind.ROLE_ASSIGNMENT,
        member.provider_role_uuid,
        Outcome.CREATED if assigned else Outcome.UNCHANGED,
        member.label,
    )


def _grant_elevated_role(
    users: UserDirectory,
    roles: Iterable[Role],
    elevated_role_name: str,
    *,
    report: ReconcileReport,
) -> None:
    elevated_role = users.get_role_by_name(elevated_role_name)
    if elevated_role is None:
        log.error("Role %r not found", elevated_role_name)
        raise MissingMetadataError("role", elevated_role_name)

    # Staff may share a role; each distinct role is written at most once.
    distinct: dict[str, Role] = {}
    changed: set[str] = set()
    for role in roles:
        distinct.setdefault(role.uuid, role)
        if add_inherited_role(role, elevated_role):
            changed.add(role.uuid)

    for uuid, role in distinct.items():
        if uuid in changed:
            users.save_role(role)
            report.record(EntityKind.ROLE, uuid, Outcome.UPDATED, f"inherits {elevated_role_name}")
        else:
            report.record(EntityKind.ROLE, uuid, Outcome.UNCHANGED)


def _require_role(users: UserDirectory, uuid: str) -> Role:
    role = users.get_role_by_uuid(uuid)
    if role is None:
        log.error("Role %s not found", uuid)
        raise MissingMetadataError("role", uuid)
    return role


def _outcome(*, created: bool, changed: bool) -> Outcome:
    if created:
        return Outcome.CREATED
    return Outcome.UPDATED if changed else Outcome.UNCHANGED
