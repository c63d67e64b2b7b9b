"""In-memory implementations of the directory ports for reconciliation tests."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from refdemo.domain.model import (
    Concept,
    ConceptMapType,
    ConceptReferenceTerm,
    ConceptSource,
    Entity,
    GlobalProperty,
    Person,
    PersonName,
    Privilege,
    Provider,
    ProviderRole,
    Role,
    User,
)
from refdemo.domain.ports import DemoDataDirectories
from refdemo.domain.reconciliation.desired_state import (
    ADMIN_PERSON_ID,
    CLERK_PROVIDER_ROLE_UUID,
    CLERK_ROLE_UUID,
    DIAGNOSIS_CONCEPT_UUID,
    DOCTOR_PROVIDER_ROLE_UUID,
    DOCTOR_ROLE_UUID,
    ELEVATED_ROLE_NAME,
    EMR_SOURCE_NAME,
    NURSE_PROVIDER_ROLE_UUID,
    NURSE_ROLE_UUID,
    PIH_SOURCE_NAME,
    RETURN_VISIT_DATE_NAME,
    SAME_AS_MAP_TYPE_UUID,
    SOURCE_CONCEPT_MAPPINGS,
    VISIT_DIAGNOSES_CONCEPT_UUID,
)

if TYPE_CHECKING:
    from collections.abc import Sequence


class _Ids:
    def __init__(self) -> None:
        self._next = 100

    def assign(self, entity: Entity) -> None:
        if entity.id is None:
            self._next += 1
            entity.id = self._next


class FakePersonDirectory:
    def __init__(self, ids: _Ids | None = None) -> None:
        self.persons: dict[str, Person] = {}
        self.saved: list[Person] = []
        self._ids = ids or _Ids()

    def add(self, person: Person) -> Person:
        self._ids.assign(person)
        self.persons[person.uuid] = person
        return person

    def get_by_uuid(self, uuid: str) -> Person | None:
        return self.persons.get(uuid)

    def get_by_id(self, person_id: int) -> Person | None:
        return next((p for p in self.persons.values() if p.id == person_id), None)

    def get_by_name(self, name: str) -> Person | None:
        for person in self.persons.values():
            if any(entry.full_name == name for entry in person.names):
                return person
        return None

    def save(self, person: Person) -> Person:
        self.saved.append(person)
        return self.add(person)


class FakeUserDirectory:
    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.roles: dict[str, Role] = {}
        self.passwords: dict[str, str] = {}
        self.saved: list[User] = []
        self.saved_roles: list[Role] = []

    def add_role(self, role: Role) -> Role:
        self.roles[role.uuid] = role
        return role

    def get_by_uuid(self, uuid: str) -> User | None:
        return self.users.get(uuid)

    def get_role_by_uuid(self, uuid: str) -> Role | None:
        return self.roles.get(uuid)

    def get_role_by_name(self, name: str) -> Role | None:
        return next((role for role in self.roles.values() if role.name == name), None)

    def save(self, user: User, password: str) -> User:
        self.saved.append(user)
        self.users[user.uuid] = user
        self.passwords[user.uuid] = password
        user.password_hash = f"hashed:{password}"
        return user

    def save_role(self, role: Role) -> Role:
        self.saved_roles.append(role)
        return self.add_role(role)


class FakeProviderDirectory:
    def __init__(self, ids: _Ids | None = None) -> None:
        self.providers: list[Provider] = []
        self.saved: list[Provider] = []
        self._ids = ids or _Ids()

    def add(self, provider: Provider) -> Provider:
        self._ids.assign(provider)
        if provider not in self.providers:
            self.providers.append(provider)
        return provider

    def get_providers_for_person(self, person: Person) -> Sequence[Provider]:
        return [provider for provider in self.providers if provider.person is person]

    def get_all(self, *, include_retired: bool) -> Sequence[Provider]:
        return [p for p in self.providers if include_retired or not p.retired]

    def save(self, provider: Provider) -> Provider:
        self.saved.append(provider)
        return self.add(provider)


class FakeProviderRoleDirectory:
    def __init__(self, providers: FakeProviderDirectory) -> None:
        self.roles: dict[str, ProviderRole] = {}
        self.assignments: list[tuple[Person, ProviderRole, str]] = []
        self.saved: list[ProviderRole] = []
        self._providers = providers

    def add(self, role: ProviderRole) -> ProviderRole:
        self.roles[role.uuid] = role
        return role

    def get_by_uuid(self, uuid: str) -> ProviderRole | None:
        return self.roles.get(uuid)

    def assign_to_person(self, person: Person, role: ProviderRole, label: str) -> bool:
        for provider in self._providers.providers:
            if provider.person is person and provider.provider_role is role:
                return False
        self.assignments.append((person, role, label))
        self._providers.add(Provider(identifier=label, person=person, provider_role=role))
        return True

    def save(self, role: ProviderRole) -> ProviderRole:
        self.saved.append(role)
        return self.add(role)


class FakeConceptDirectory:
    def __init__(self, ids: _Ids | None = None) -> None:
        self.concepts: dict[str, Concept] = {}
        self.sources: dict[str, ConceptSource] = {}
        self.map_types: dict[str, ConceptMapType] = {}
        self.terms: list[ConceptReferenceTerm] = []
        self.saved: list[Concept] = []
        self._ids = ids or _Ids()

    def add(self, concept: Concept) -> Concept:
        self._ids.assign(concept)
        self.concepts[concept.uuid] = concept
        return concept

    def get_by_uuid(self, uuid: str) -> Concept | None:
        return self.concepts.get(uuid)

    def get_by_name(self, name: str) -> Concept | None:
        wanted = name.lower()
        return next((c for c in self.concepts.values() if c.name.lower() == wanted), None)

    def get_by_mapping(self, code: str, source_name: str) -> Concept | None:
        for concept in self.concepts.values():
            if concept.retired:
                continue
            for mapping in concept.mappings:
                if mapping.term.code == code and mapping.term.source.name == source_name:
                    return concept
        return None

    def get_map_type_by_uuid(self, uuid: str) -> ConceptMapType | None:
        return self.map_types.get(uuid)

    def get_source_by_name(self, name: str) -> ConceptSource | None:
        return self.sources.get(name)

    def get_reference_term(self, code: str, source: ConceptSource) -> ConceptReferenceTerm | None:
        return next(
            (term for term in self.terms if term.code == code and term.source is source),
            None,
        )

    def save_reference_term(self, term: ConceptReferenceTerm) -> ConceptReferenceTerm:
        self._ids.assign(term)
        self.terms.append(term)
        return term

    def save_map_type(self, map_type: ConceptMapType) -> ConceptMapType:
        self.map_types[map_type.uuid] = map_type
        return map_type

    def save_source(self, source: ConceptSource) -> ConceptSource:
        self.sources[source.name] = source
        return source

    def save(self, concept: Concept) -> Concept:
        self.saved.append(concept)
        return self.add(concept)


class FakeConfigStore:
    def __init__(self) -> None:
        self.records: dict[str, GlobalProperty] = {}
        self.saved: list[GlobalProperty] = []

    def get_value(self, name: str) -> str | None:
        record = self.records.get(name)
        return None if record is None else record.value

    def get_record(self, name: str) -> GlobalProperty | None:
        return self.records.get(name)

    def save(self, record: GlobalProperty) -> GlobalProperty:
        self.saved.append(record)
        self.records[record.name] = record
        return record


class RecordingPrivilegeScope:
    """Privilege scope that remembers the order of grants and releases."""

    def __init__(self, *, refuse: Privilege | None = None) -> None:
        self.held: Counter[Privilege] = Counter()
        self.events: list[tuple[str, Privilege]] = []
        self._refuse = refuse

    def acquire(self, *privileges: Privilege) -> None:
        for privilege in privileges:
            if privilege is self._refuse:
                raise PermissionError(privilege)
            self.held[privilege] += 1
            self.events.append(("acquire", privilege))

    def release(self, *privileges: Privilege) -> None:
        for privilege in privileges:
            self.held[privilege] -= 1
            self.events.append(("release", privilege))

    @property
    def balanced(self) -> bool:
        return all(count == 0 for count in self.held.values())


def build_directories() -> DemoDataDirectories:
    """Return empty in-memory directories sharing one id sequence."""

    ids = _Ids()
    providers = FakeProviderDirectory(ids)
    return DemoDataDirectories(
        persons=FakePersonDirectory(ids),
        users=FakeUserDirectory(),
        providers=providers,
        provider_roles=FakeProviderRoleDirectory(providers),
        concepts=FakeConceptDirectory(ids),
        settings=FakeConfigStore(),
    )


def make_admin(directories: DemoDataDirectories, *, person_id: int = ADMIN_PERSON_ID) -> Person:
    admin = Person(id=person_id, gender="M")
    admin.add_name(PersonName(given_name="Super", family_name="User"))
    persons = directories.persons
    assert isinstance(persons, FakePersonDirectory)
    return persons.add(admin)


def install_prerequisites(directories: DemoDataDirectories) -> None:
    """Populate the fakes with the metadata the bulk import would deliver."""

    make_admin(directories)

    users = directories.users
    assert isinstance(users, FakeUserDirectory)
    for uuid, name in (
        (CLERK_ROLE_UUID, "Registration Clerk"),
        (NURSE_ROLE_UUID, "Nurse"),
        (DOCTOR_ROLE_UUID, "Doctor"),
    ):
        users.add_role(Role(uuid=uuid, name=name))
    users.add_role(Role(name=ELEVATED_ROLE_NAME))

    provider_roles = directories.provider_roles
    assert isinstance(provider_roles, FakeProviderRoleDirectory)
    for uuid, name in (
        (CLERK_PROVIDER_ROLE_UUID, "Clerk"),
        (NURSE_PROVIDER_ROLE_UUID, "Nurse"),
        (DOCTOR_PROVIDER_ROLE_UUID, "Doctor"),
    ):
        provider_roles.add(ProviderRole(uuid=uuid, name=name))

    concepts = directories.concepts
    assert isinstance(concepts, FakeConceptDirectory)
    concepts.save_map_type(ConceptMapType(uuid=SAME_AS_MAP_TYPE_UUID, name="SAME-AS"))
    for source_name in (EMR_SOURCE_NAME, PIH_SOURCE_NAME):
        concepts.save_source(ConceptSource(name=source_name))
    concept_uuids = {VISIT_DIAGNOSES_CONCEPT_UUID, DIAGNOSIS_CONCEPT_UUID}
    concept_uuids.update(SOURCE_CONCEPT_MAPPINGS[0].by_uuid)
    for uuid in sorted(concept_uuids):
        concepts.add(Concept(uuid=uuid, name=f"Concept {uuid[:6]}"))
    concepts.add(Concept(name=RETURN_VISIT_DATE_NAME))
