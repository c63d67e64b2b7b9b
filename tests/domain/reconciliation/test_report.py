from __future__ import annotations

from refdemo.domain.model import EntityKind
from refdemo.domain.reconciliation import Outcome, ReconcileReport


def test_report_counts_and_filters() -> None:
    report = ReconcileReport()
    report.record(EntityKind.PERSON, "a", Outcome.CREATED)
    report.record(EntityKind.PERSON, "b", Outcome.UNCHANGED)
    report.record(EntityKind.USER, "c", Outcome.SKIPPED, "role missing")

    assert report.changed
    assert report.count(kind=EntityKind.PERSON) == 2
    assert [action.key for action in report.filter(outcome=Outcome.SKIPPED)] == ["c"]
    assert report.summary() == {
        Outcome.CREATED: 1,
        Outcome.UPDATED: 0,
        Outcome.UNCHANGED: 1,
        Outcome.SKIPPED: 1,
    }
    assert report.describe() == "created=1, updated=0, unchanged=1, skipped=1"


def test_unchanged_and_skipped_are_not_changes() -> None:
    report = ReconcileReport()
    report.record(EntityKind.CONCEPT, "x", Outcome.UNCHANGED)
    report.record(EntityKind.CONCEPT, "y", Outcome.SKIPPED)

    assert not report.changed
