"""People known to the platform."""

from __future__ import annotations

from dataclasses import dataclass, field

from .entity import Entity


@dataclass(eq=False, kw_only=True)
class PersonName(Entity):
    given_name: str | None = None
    family_name: str | None = None
    preferred: bool = False
    voided: bool = False

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.given_name, self.family_name) if part)


@dataclass(eq=False, kw_only=True)
class Person(Entity):
    gender: str | None = None
    voided: bool = False

    _names: list[PersonName] = field(default_factory=list["PersonName"], repr=False)

    @property
    def names(self) -> tuple[PersonName, ...]:
        return tuple(name for name in self._names if not name.voided)

    @property
    def person_name(self) -> PersonName | None:
        """Return the preferred name, falling back to the first active one."""
        names = self.names
        for name in names:
            if name.preferred:
                return name
        return names[0] if names else None

    def add_name(self, name: PersonName) -> None:
        if name in self._names:
            return
        if self.person_name is None:
            name.preferred = True
        self._names.append(name)
