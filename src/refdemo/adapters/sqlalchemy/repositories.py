"""Directory implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import func, select
from werkzeug.security import check_password_hash, generate_password_hash

from refdemo.adapters.sqlalchemy.mappings import (
    concept_map_table,
    concept_map_type_table,
    concept_reference_term_table,
    concept_source_table,
    concept_table,
    global_property_table,
    person_name_table,
    person_table,
    provider_role_table,
    provider_table,
    role_table,
    user_table,
)
from refdemo.domain.model import (
    Concept,
    ConceptMapType,
    ConceptReferenceTerm,
    ConceptSource,
    Entity,
    GlobalProperty,
    Person,
    Provider,
    ProviderRole,
    Role,
    User,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.orm import Session


class _SessionDirectory:
    def __init__(self, session: Session) -> None:
        self.session = session

    def _ensure_identity(self, *entities: Entity) -> None:
        """Flush pending records so their storage ids can be used in queries."""
        if any(entity.id is None for entity in entities):
            self.session.flush()


class SqlAlchemyPersonDirectory(_SessionDirectory):
    def get_by_uuid(self, uuid: str) -> Person | None:
        stmt = select(Person).where(person_table.c.uuid == uuid)
        return self.session.execute(stmt).scalar_one_or_none()

    def get_by_id(self, person_id: int) -> Person | None:
        stmt = select(Person).where(person_table.c.id == person_id)
        return self.session.execute(stmt).scalar_one_or_none()

    def get_by_name(self, name: str) -> Person | None:
        wanted = " ".join(name.split()).lower()
        if not wanted:
            return None
        family = wanted.rsplit(" ", 1)[-1]
        stmt = (
            select(Person)
            .join(person_name_table, person_name_table.c.person_id == person_table.c.id)
            .where(func.lower(person_name_table.c.family_name) == family)
            .where(person_table.c.voided.is_(False))
            .order_by(person_table.c.id)
        )
        for person in self.session.execute(stmt).unique().scalars():
            if any(entry.full_name.lower() == wanted for entry in person.names):
                return person
        return None

    def save(self, person: Person) -> Person:
        self.session.add(person)
        return person


class SqlAlchemyUserDirectory(_SessionDirectory):
    def get_by_uuid(self, uuid: str) -> User | None:
        stmt = select(User).where(user_table.c.uuid == uuid)
        return self.session.execute(stmt).scalar_one_or_none()

    def get_role_by_uuid(self, uuid: str) -> Role | None:
        stmt = select(Role).where(role_table.c.uuid == uuid)
        return self.session.execute(stmt).scalar_one_or_none()

    def get_role_by_name(self, name: str) -> Role | None:
        stmt = select(Role).where(role_table.c.name == name)
        return self.session.execute(stmt).scalar_one_or_none()

    def save(self, user: User, password: str) -> User:
        # Keep the stored hash when the password is unchanged; rehashing salts anew.
        if user.password_hash is None or not check_password_hash(user.password_hash, password):
            user.password_hash = generate_password_hash(password)
        self.session.add(user)
        return user

    def save_role(self, role: Role) -> Role:
        self.session.add(role)
        return role


class SqlAlchemyProviderDirectory(_SessionDirectory):
    def get_providers_for_person(self, person: Person) -> Sequence[Provider]:
        self._ensure_identity(person)
        stmt = (
            select(Provider)
            .where(provider_table.c.person_id == person.id)
            .order_by(provider_table.c.id)
        )
        return list(self.session.execute(stmt).scalars())

    def get_all(self, *, include_retired: bool) -> Sequence[Provider]:
        stmt = select(Provider).order_by(provider_table.c.id)
        if not include_retired:
            stmt = stmt.where(provider_table.c.retired.is_(False))
        return list(self.session.execute(stmt).scalars())

    def save(self, provider: Provider) -> Provider:
        self.session.add(provider)
        return provider


class SqlAlchemyProviderRoleDirectory(_SessionDirectory):
    def get_by_uuid(self, uuid: str) -> ProviderRole | None:
        stmt = select(ProviderRole).where(provider_role_table.c.uuid == uuid)
        return self.session.execute(stmt).scalar_one_or_none()

    def assign_to_person(self, person: Person, role: ProviderRole, label: str) -> bool:
        self._ensure_identity(person, role)
        stmt = (
            select(provider_table.c.id)
            .where(provider_table.c.person_id == person.id)
            .where(provider_table.c.provider_role_id == role.id)
            .where(provider_table.c.retired.is_(False))
            .limit(1)
        )
        if self.session.execute(stmt).scalar_one_or_none() is not None:
            return False
        self.session.add(Provider(identifier=label, person=person, provider_role=role))
        return True

    def save(self, role: ProviderRole) -> ProviderRole:
        self.session.add(role)
        return role


class SqlAlchemyConceptDirectory(_SessionDirectory):
    def get_by_uuid(self, uuid: str) -> Concept | None:
        stmt = select(Concept).where(concept_table.c.uuid == uuid)
        return self.session.execute(stmt).scalar_one_or_none()

    def get_by_name(self, name: str) -> Concept | None:
        stmt = (
            select(Concept)
            .where(func.lower(concept_table.c.name) == name.lower())
            .where(concept_table.c.retired.is_(False))
            .order_by(concept_table.c.id)
            .limit(1)
        )
        return self.session.execute(stmt).scalars().first()

    def get_by_mapping(self, code: str, source_name: str) -> Concept | None:
        stmt = (
            select(Concept)
            .join(concept_map_table, concept_map_table.c.concept_id == concept_table.c.id)
            .join(
                concept_reference_term_table,
                concept_reference_term_table.c.id == concept_map_table.c.term_id,
            )
            .join(
                concept_source_table,
                concept_source_table.c.id == concept_reference_term_table.c.source_id,
            )
            .where(concept_reference_term_table.c.code == code)
            .where(concept_source_table.c.name == source_name)
            .where(concept_table.c.retired.is_(False))
            .order_by(concept_table.c.id)
            .limit(1)
        )
        return self.session.execute(stmt).scalars().first()

    def get_map_type_by_uuid(self, uuid: str) -> ConceptMapType | None:
        stmt = select(ConceptMapType).where(concept_map_type_table.c.uuid == uuid)
        return self.session.execute(stmt).scalar_one_or_none()

    def get_source_by_name(self, name: str) -> ConceptSource | None:
        stmt = select(ConceptSource).where(concept_source_table.c.name == name)
        return self.session.execute(stmt).scalar_one_or_none()

    def get_reference_term(self, code: str, source: ConceptSource) -> ConceptReferenceTerm | None:
        self._ensure_identity(source)
        stmt = (
            select(ConceptReferenceTerm)
            .where(concept_reference_term_table.c.source_id == source.id)
            .where(concept_reference_term_table.c.code == code)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def save_reference_term(self, term: ConceptReferenceTerm) -> ConceptReferenceTerm:
        self.session.add(term)
        return term

    def save_map_type(self, map_type: ConceptMapType) -> ConceptMapType:
        self.session.add(map_type)
        return map_type

    def save_source(self, source: ConceptSource) -> ConceptSource:
        self.session.add(source)
        return source

    def save(self, concept: Concept) -> Concept:
        self.session.add(concept)
        return concept


class SqlAlchemyConfigStore(_SessionDirectory):
    def get_value(self, name: str) -> str | None:
        stmt = select(global_property_table.c.value).where(global_property_table.c.name == name)
        return cast("str | None", self.session.execute(stmt).scalar_one_or_none())

    def get_record(self, name: str) -> GlobalProperty | None:
        stmt = select(GlobalProperty).where(global_property_table.c.name == name)
        return self.session.execute(stmt).scalar_one_or_none()

    def save(self, record: GlobalProperty) -> GlobalProperty:
        self.session.add(record)
        return record


if TYPE_CHECKING:
    from refdemo.domain.ports import (
        ConceptDirectory,
        ConfigStore,
        PersonDirectory,
        ProviderDirectory,
        ProviderRoleDirectory,
        UserDirectory,
    )

    _session_stub = cast("Session", object())
    _person_check: PersonDirectory = SqlAlchemyPersonDirectory(_session_stub)
    _user_check: UserDirectory = SqlAlchemyUserDirectory(_session_stub)
    _provider_check: ProviderDirectory = SqlAlchemyProviderDirectory(_session_stub)
    _provider_role_check: ProviderRoleDirectory = SqlAlchemyProviderRoleDirectory(_session_stub)
    _concept_check: ConceptDirectory = SqlAlchemyConceptDirectory(_session_stub)
    _settings_check: ConfigStore = SqlAlchemyConfigStore(_session_stub)
