"""Errors raised while reconciling demo metadata."""

from __future__ import annotations


class ReconciliationError(RuntimeError):
    """Base class for failures that abort a reconciliation run."""


class MissingMetadataError(ReconciliationError):
    """Raised when metadata the demo data builds on is not installed."""

    def __init__(self, kind: str, key: str | int) -> None:
        super().__init__(f"Required {kind} {key!r} does not exist")
        self.kind = kind
        self.key = key


class MissingConceptError(MissingMetadataError):
    """Raised when a concept referenced by the demo tables does not exist."""

    def __init__(self, uuid: str) -> None:
        super().__init__("concept", uuid)
        self.uuid = uuid
