"""Record of what a reconciliation run did."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from refdemo.domain.model import EntityKind


class Outcome(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class ReconcileAction:
    kind: EntityKind
    key: str
    outcome: Outcome
    detail: str | None = None


@dataclass(slots=True)
class ReconcileReport:
    actions: list[ReconcileAction] = field(default_factory=list["ReconcileAction"])

    def record(
        self,
        kind: EntityKind,
        key: str,
        outcome: Outcome,
        detail: str | None = None,
    ) -> ReconcileAction:
        action = ReconcileAction(kind=kind, key=key, outcome=outcome, detail=detail)
        self.actions.append(action)
        return action

    @property
    def changed(self) -> bool:
        return any(
            action.outcome in {Outcome.CREATED, Outcome.UPDATED} for action in self.actions
        )

    def filter(
        self,
        *,
        kind: EntityKind | None = None,
        outcome: Outcome | None = None,
    ) -> list[ReconcileAction]:
        return [
            action
            for action in self.actions
            if (kind is None or action.kind == kind)
            and (outcome is None or action.outcome == outcome)
        ]

    def count(self, *, kind: EntityKind | None = None, outcome: Outcome | None = None) -> int:
        return len(self.filter(kind=kind, outcome=outcome))

    def summary(self) -> dict[Outcome, int]:
        counts = Counter(action.outcome for action in self.actions)
        return {outcome: counts.get(outcome, 0) for outcome in Outcome}

    def describe(self) -> str:
        return ", ".join(f"{outcome}={count}" for outcome, count in self.summary().items())
