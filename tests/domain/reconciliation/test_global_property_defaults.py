from __future__ import annotations

from refdemo.domain.model import EntityKind, GlobalProperty
from refdemo.domain.reconciliation import (
    DEFAULT_GLOBAL_PROPERTIES,
    Outcome,
    ReconcileReport,
    fill_if_empty,
    force_set,
    forced_global_properties,
    set_required_global_properties,
)
from tests.helpers.directories import FakeConfigStore

IDENTIFIER_SOURCE = "registrationcore.identifierSourceId"


def test_absent_property_is_created() -> None:
    settings = FakeConfigStore()

    filled = fill_if_empty(settings, DEFAULT_GLOBAL_PROPERTIES)

    assert filled == [IDENTIFIER_SOURCE]
    assert settings.get_value(IDENTIFIER_SOURCE) == "1"


def test_blank_property_is_filled_in_place() -> None:
    settings = FakeConfigStore()
    record = settings.save(GlobalProperty(name=IDENTIFIER_SOURCE, value="  "))
    report = ReconcileReport()

    fill_if_empty(settings, DEFAULT_GLOBAL_PROPERTIES, report=report)

    assert settings.records[IDENTIFIER_SOURCE] is record
    assert record.value == "1"
    assert report.count(outcome=Outcome.UPDATED) == 1


def test_administrator_value_is_kept() -> None:
    settings = FakeConfigStore()
    settings.save(GlobalProperty(name=IDENTIFIER_SOURCE, value="7"))
    saved = len(settings.saved)

    filled = fill_if_empty(settings, DEFAULT_GLOBAL_PROPERTIES)

    assert filled == []
    assert settings.get_value(IDENTIFIER_SOURCE) == "7"
    assert len(settings.saved) == saved


def test_forced_values_are_written_every_run() -> None:
    settings = FakeConfigStore()
    settings.save(GlobalProperty(name="scheduler.username", value="someone"))
    report = ReconcileReport()

    force_set(settings, forced_global_properties(), report=report)
    force_set(settings, forced_global_properties(), report=report)

    assert settings.get_value("scheduler.username") == "admin"
    assert settings.get_value("scheduler.password") == "Admin123"
    assert [action.outcome for action in report.actions] == [
        Outcome.UPDATED,
        Outcome.CREATED,
        Outcome.UNCHANGED,
        Outcome.UNCHANGED,
    ]
    assert len(settings.saved) == 5


def test_required_properties_on_empty_store() -> None:
    settings = FakeConfigStore()
    report = ReconcileReport()

    set_required_global_properties(
        settings,
        forced=forced_global_properties(scheduler_username="daemon", scheduler_password="pw"),
        report=report,
    )

    assert settings.get_value(IDENTIFIER_SOURCE) == "1"
    assert settings.get_value("scheduler.username") == "daemon"
    assert settings.get_value("scheduler.password") == "pw"
    assert report.count(kind=EntityKind.GLOBAL_PROPERTY, outcome=Outcome.CREATED) == 3
