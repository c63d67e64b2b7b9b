"""Global properties the demo needs.

Defaults only fill properties that are absent or blank, so values set by an
administrator survive. Forced properties are written on every run.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from refdemo.domain.model import EntityKind, GlobalProperty

from .desired_state import DEFAULT_GLOBAL_PROPERTIES, forced_global_properties
from .report import Outcome, ReconcileReport

if TYPE_CHECKING:
    from collections.abc import Mapping

    from refdemo.domain.ports import ConfigStore

log = logging.getLogger(__name__)


def fill_if_empty(
    settings: ConfigStore,
    defaults: Mapping[str, str],
    *,
    report: ReconcileReport | None = None,
) -> list[str]:
    """Set each property to its default if it has no value; return the names set."""

    report = report if report is not None else ReconcileReport()
    filled: list[str] = []
    for name, default in defaults.items():
        current = settings.get_value(name)
        if current is not None and current.strip():
            report.record(EntityKind.GLOBAL_PROPERTY, name, Outcome.UNCHANGED)
            continue
        record = settings.get_record(name)
        created = record is None
        if record is None:
            record = GlobalProperty(name=name)
        record.value = default
        settings.save(record)
        filled.append(name)
        log.info("Global property %s defaulted to %r", name, default)
        report.record(
            EntityKind.GLOBAL_PROPERTY,
            name,
            Outcome.CREATED if created else Outcome.UPDATED,
        )
    return filled


def force_set(
    settings: ConfigStore,
    values: Mapping[str, str],
    *,
    report: ReconcileReport | None = None,
) -> None:
    report = report if report is not None else ReconcileReport()
    for name, value in values.items():
        record = settings.get_record(name)
        if record is None:
            record = GlobalProperty(name=name, value=value)
            outcome = Outcome.CREATED
        else:
            outcome = Outcome.UNCHANGED if record.value == value else Outcome.UPDATED
            record.value = value
        settings.save(record)
        report.record(EntityKind.GLOBAL_PROPERTY, name, outcome)


def set_required_global_properties(
    settings: ConfigStore,
    *,
    defaults: Mapping[str, str] = DEFAULT_GLOBAL_PROPERTIES,
    forced: Mapping[str, str] | None = None,
    report: ReconcileReport | None = None,
) -> None:
    report = report if report is not None else ReconcileReport()
    fill_if_empty(settings, defaults, report=report)
    force_set(settings, forced if forced is not None else forced_global_properties(), report=report)
