from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from refdemo.domain.bootstrap import BASE_CONCEPTS, BASE_ROLES, install_base_metadata
from refdemo.domain.model import Concept, EntityKind, Role
from refdemo.domain.reconciliation import Outcome, Reconciler
from refdemo.domain.reconciliation.desired_state import (
    EMR_SOURCE_NAME,
    NURSE_ROLE_UUID,
    PIH_SOURCE_NAME,
    RETURN_VISIT_DATE_NAME,
    SAME_AS_MAP_TYPE_UUID,
)
from tests.helpers.directories import (
    FakeConceptDirectory,
    FakeUserDirectory,
    RecordingPrivilegeScope,
)

if TYPE_CHECKING:
    from refdemo.domain.ports import DemoDataDirectories


def test_base_metadata_installs_prerequisites(directories: DemoDataDirectories) -> None:
    install_base_metadata(directories)

    admin = directories.persons.get_by_id(1)
    assert admin is not None
    assert admin.person_name is not None
    for uuid in BASE_ROLES:
        assert directories.users.get_role_by_uuid(uuid) is not None
    assert directories.concepts.get_map_type_by_uuid(SAME_AS_MAP_TYPE_UUID) is not None
    assert directories.concepts.get_source_by_name(EMR_SOURCE_NAME) is not None
    assert directories.concepts.get_source_by_name(PIH_SOURCE_NAME) is not None
    for uuid in BASE_CONCEPTS:
        assert directories.concepts.get_by_uuid(uuid) is not None


def test_base_metadata_is_idempotent(directories: DemoDataDirectories) -> None:
    install_base_metadata(directories)

    report = install_base_metadata(directories)

    assert not report.changed


def test_existing_return_visit_concept_is_adopted(directories: DemoDataDirectories) -> None:
    concepts = directories.concepts
    assert isinstance(concepts, FakeConceptDirectory)
    existing = concepts.add(Concept(name=RETURN_VISIT_DATE_NAME))

    install_base_metadata(directories)

    matches = [c for c in concepts.concepts.values() if c.name == RETURN_VISIT_DATE_NAME]
    assert matches == [existing]


def test_reconciler_runs_on_bootstrapped_store(directories: DemoDataDirectories) -> None:
    install_base_metadata(directories)

    report = Reconciler(directories, RecordingPrivilegeScope())()

    assert report.changed


def test_role_name_taken_under_other_uuid_is_reported(
    directories: DemoDataDirectories, caplog: pytest.LogCaptureFixture
) -> None:
    users = directories.users
    assert isinstance(users, FakeUserDirectory)
    users.add_role(Role(uuid="local-nurse-role", name=BASE_ROLES[NURSE_ROLE_UUID]))

    with caplog.at_level(logging.WARNING, logger="refdemo.domain.bootstrap"):
        report = install_base_metadata(directories)

    assert users.get_role_by_uuid(NURSE_ROLE_UUID) is None
    skipped = report.filter(kind=EntityKind.ROLE, outcome=Outcome.SKIPPED)
    assert [action.key for action in skipped] == [NURSE_ROLE_UUID]
    assert skipped[0].detail == "name taken by local-nurse-role"
    assert "local-nurse-role" in caplog.text
    assert sum(1 for role in users.roles.values() if role.name == "Nurse") == 1
