"""Ports onto the platform services that own the demo metadata.

Each directory looks records up by their stable identity key and persists
changes made to domain objects. Implementations decide when writes reach the
store; callers only rely on a saved record being visible to later lookups in
the same unit of work.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from refdemo.domain.model import (
        Concept,
        ConceptMapType,
        ConceptReferenceTerm,
        ConceptSource,
        GlobalProperty,
        Person,
        Provider,
        ProviderRole,
        Role,
        User,
    )


@runtime_checkable
class PersonDirectory(Protocol):
    def get_by_uuid(self, uuid: str) -> Person | None: ...

    def get_by_id(self, person_id: int) -> Person | None: ...

    def get_by_name(self, name: str) -> Person | None: ...

    def save(self, person: Person) -> Person: ...


@runtime_checkable
class UserDirectory(Protocol):
    def get_by_uuid(self, uuid: str) -> User | None: ...

    def get_role_by_uuid(self, uuid: str) -> Role | None: ...

    def get_role_by_name(self, name: str) -> Role | None: ...

    def save(self, user: User, password: str) -> User:
        """Create or update ``user`` and set ``password`` as its credential."""
        ...

    def save_role(self, role: Role) -> Role: ...


@runtime_checkable
class ProviderDirectory(Protocol):
    def get_providers_for_person(self, person: Person) -> Sequence[Provider]: ...

    def get_all(self, *, include_retired: bool) -> Sequence[Provider]: ...

    def save(self, provider: Provider) -> Provider: ...


@runtime_checkable
class ProviderRoleDirectory(Protocol):
    def get_by_uuid(self, uuid: str) -> ProviderRole | None: ...

    def assign_to_person(self, person: Person, role: ProviderRole, label: str) -> bool:
        """Give ``person`` a provider acting in ``role``.

        Must be idempotent: a person already holding ``role`` keeps its existing
        provider. Returns whether a new assignment was made.
        """
        ...

    def save(self, role: ProviderRole) -> ProviderRole: ...


@runtime_checkable
class ConceptDirectory(Protocol):
    def get_by_uuid(self, uuid: str) -> Concept | None: ...

    def get_by_name(self, name: str) -> Concept | None: ...

    def get_by_mapping(self, code: str, source_name: str) -> Concept | None:
        """Return a concept mapped to ``code`` in the named source, if any."""
        ...

    def get_map_type_by_uuid(self, uuid: str) -> ConceptMapType | None: ...

    def get_source_by_name(self, name: str) -> ConceptSource | None: ...

    def get_reference_term(self, code: str, source: ConceptSource) -> ConceptReferenceTerm | None:
        ...

    def save_reference_term(self, term: ConceptReferenceTerm) -> ConceptReferenceTerm: ...

    def save_map_type(self, map_type: ConceptMapType) -> ConceptMapType: ...

    def save_source(self, source: ConceptSource) -> ConceptSource: ...

    def save(self, concept: Concept) -> Concept: ...


@runtime_checkable
class ConfigStore(Protocol):
    def get_value(self, name: str) -> str | None: ...

    def get_record(self, name: str) -> GlobalProperty | None:
        """Return the stored record; ``None`` only when the property is absent."""
        ...

    def save(self, record: GlobalProperty) -> GlobalProperty: ...
