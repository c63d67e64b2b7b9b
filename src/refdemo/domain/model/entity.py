"""
Base building blocks:
identity semantics shared by all platform records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import uuid4


def new_uuid() -> str:
    return str(uuid4())


@dataclass(eq=False, kw_only=True)
class Entity:
    """A platform record.

    ``uuid`` is the stable identity key used for lookups across installations and
    is assigned up front. ``id`` is the storage key and stays ``None`` until the
    record has been persisted.
    """

    id: int | None = None
    uuid: str = field(default_factory=new_uuid)
