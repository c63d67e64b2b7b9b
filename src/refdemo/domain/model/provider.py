"""Care providers and the provider roles they act in."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .entity import Entity

if TYPE_CHECKING:
    from .person import Person


@dataclass(eq=False, kw_only=True)
class ProviderRole(Entity):
    name: str
    retired: bool = False


@dataclass(eq=False, kw_only=True)
class Provider(Entity):
    """A provider account.

    A provider without ``person`` is unassigned. Provider role assignments are
    providers that carry a ``provider_role``.
    """

    identifier: str | None = None
    name: str | None = None
    person: Person | None = field(default=None, repr=False)
    provider_role: ProviderRole | None = field(default=None, repr=False)
    retired: bool = False

    @property
    def is_assigned(self) -> bool:
        return self.person is not None
