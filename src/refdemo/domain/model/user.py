"""Login accounts and the roles that grant them privileges."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .entity import Entity

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .person import Person


@dataclass(eq=False, kw_only=True)
class Role(Entity):
    name: str
    description: str | None = None

    _inherited_roles: set[Role] = field(default_factory=set["Role"], repr=False)

    @property
    def inherited_roles(self) -> frozenset[Role]:
        return frozenset(self._inherited_roles)

    def add_inherited_role(self, role: Role) -> bool:
        """Add ``role`` to the inherited roles; return whether it was missing."""
        if role is self:
            raise ValueError("a role cannot inherit from itself")
        if role in self._inherited_roles:
            return False
        self._inherited_roles.add(role)
        return True


@dataclass(eq=False, kw_only=True)
class User(Entity):
    username: str | None = None
    person: Person | None = field(default=None, repr=False)
    password_hash: str | None = field(default=None, repr=False)
    retired: bool = False

    _roles: set[Role] = field(default_factory=set["Role"], repr=False)

    @property
    def roles(self) -> frozenset[Role]:
        return frozenset(self._roles)

    def replace_roles(self, roles: Iterable[Role]) -> bool:
        """Replace the role set wholesale; return whether it changed."""
        desired = set(roles)
        if desired == self._roles:
            return False
        self._roles.clear()
        self._roles.update(desired)
        return True
