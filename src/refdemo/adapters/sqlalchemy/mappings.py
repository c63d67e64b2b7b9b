"""SQLAlchemy mapping metadata for the refdemo domain model."""

from __future__ import annotations

import logging
from functools import cache
from typing import Final

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from refdemo.domain.model import (
    Concept,
    ConceptMap,
    ConceptMapType,
    ConceptReferenceTerm,
    ConceptSource,
    GlobalProperty,
    Person,
    PersonName,
    Provider,
    ProviderRole,
    Role,
    User,
)

log = logging.getLogger(__name__)

UUID_LENGTH: Final[int] = 38

mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def _identity_columns() -> tuple[Column[int], Column[str]]:
    return (
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("uuid", String(UUID_LENGTH), nullable=False, unique=True),
    )


# People and accounts ---------------------------------------------------------

person_table = Table(
    "person",
    mapper_registry.metadata,
    *_identity_columns(),
    Column("gender", String(50), nullable=True),
    Column("voided", Boolean, nullable=False, default=False),
)

person_name_table = Table(
    "person_name",
    mapper_registry.metadata,
    *_identity_columns(),
    Column(
        "person_id",
        Integer,
        ForeignKey("person.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("given_name", String(50), nullable=True),
    Column("family_name", String(50), nullable=True),
    Column("preferred", Boolean, nullable=False, default=False),
    Column("voided", Boolean, nullable=False, default=False),
    Index("ix_person_name_person", "person_id"),
)

role_table = Table(
    "role",
    mapper_registry.metadata,
    *_identity_columns(),
    Column("name", String(50), nullable=False, unique=True),
    Column("description", String(255), nullable=True),
)

role_role_table = Table(
    "role_role",
    mapper_registry.metadata,
    Column("child_role_id", Integer, ForeignKey("role.id", ondelete="CASCADE"), primary_key=True),
    Column("parent_role_id", Integer, ForeignKey("role.id", ondelete="CASCADE"), primary_key=True),
)

user_table = Table(
    "users",
    mapper_registry.metadata,
    *_identity_columns(),
    Column("username", String(50), nullable=True, unique=True),
    Column("person_id", Integer, ForeignKey("person.id"), nullable=True),
    Column("password_hash", String(255), nullable=True),
    Column("retired", Boolean, nullable=False, default=False),
)

user_role_table = Table(
    "user_role",
    mapper_registry.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("role.id", ondelete="CASCADE"), primary_key=True),
)

# Providers -------------------------------------------------------------------

provider_role_table = Table(
    "provider_role",
    mapper_registry.metadata,
    *_identity_columns(),
    Column("name", String(255), nullable=False),
    Column("retired", Boolean, nullable=False, default=False),
)

provider_table = Table(
    "provider",
    mapper_registry.metadata,
    *_identity_columns(),
    Column("identifier", String(255), nullable=True),
    Column("name", String(255), nullable=True),
    Column("person_id", Integer, ForeignKey("person.id"), nullable=True),
    Column("provider_role_id", Integer, ForeignKey("provider_role.id"), nullable=True),
    Column("retired", Boolean, nullable=False, default=False),
    Index("ix_provider_person", "person_id"),
)

# Concept dictionary ----------------------------------------------------------

concept_source_table = Table(
    "concept_source",
    mapper_registry.metadata,
    *_identity_columns(),
    Column("name", String(50), nullable=False, unique=True),
    Column("description", String(1024), nullable=True),
    Column("hl7_code", String(50), nullable=True),
    Column("retired", Boolean, nullable=False, default=False),
)

concept_map_type_table = Table(
    "concept_map_type",
    mapper_registry.metadata,
    *_identity_columns(),
    Column("name", String(255), nullable=False, unique=True),
    Column("is_hidden", Boolean, nullable=False, default=False),
    Column("retired", Boolean, nullable=False, default=False),
)

concept_reference_term_table = Table(
    "concept_reference_term",
    mapper_registry.metadata,
    *_identity_columns(),
    Column("source_id", Integer, ForeignKey("concept_source.id"), nullable=False),
    Column("code", String(255), nullable=False),
    Column("name", String(255), nullable=True),
    Column("retired", Boolean, nullable=False, default=False),
    UniqueConstraint("source_id", "code", name="uq_concept_reference_term_source_code"),
)

concept_table = Table(
    "concept",
    mapper_registry.metadata,
    *_identity_columns(),
    Column("name", String(255), nullable=False),
    Column("is_set", Boolean, nullable=False, default=False),
    Column("retired", Boolean, nullable=False, default=False),
)

concept_set_table = Table(
    "concept_set",
    mapper_registry.metadata,
    Column(
        "concept_set_id",
        Integer,
        ForeignKey("concept.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("concept_id", Integer, ForeignKey("concept.id", ondelete="CASCADE"), primary_key=True),
)

concept_map_table = Table(
    "concept_map",
    mapper_registry.metadata,
    *_identity_columns(),
    Column("concept_id", Integer, ForeignKey("concept.id", ondelete="CASCADE"), nullable=False),
    Column("term_id", Integer, ForeignKey("concept_reference_term.id"), nullable=False),
    Column("map_type_id", Integer, ForeignKey("concept_map_type.id"), nullable=True),
    Index("ix_concept_map_concept", "concept_id"),
)

# Settings --------------------------------------------------------------------

global_property_table = Table(
    "global_property",
    mapper_registry.metadata,
    *_identity_columns(),
    Column("name", String(255), nullable=False, unique=True),
    Column("value", Text, nullable=True),
    Column("description", Text, nullable=True),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(PersonName, person_name_table)

    mapper_registry.map_imperatively(
        Person,
        person_table,
        properties={
            "_names": relationship(
                PersonName,
                cascade="all, delete-orphan",
                order_by=person_name_table.c.id,
            ),
        },
    )

    mapper_registry.map_imperatively(
        Role,
        role_table,
        properties={
            "_inherited_roles": relationship(
                Role,
                secondary=role_role_table,
                primaryjoin=role_table.c.id == role_role_table.c.child_role_id,
                secondaryjoin=role_table.c.id == role_role_table.c.parent_role_id,
                collection_class=set,
            ),
        },
    )

    mapper_registry.map_imperatively(
        User,
        user_table,
        properties={
            "person": relationship(Person),
            "_roles": relationship(
                Role,
                secondary=user_role_table,
                collection_class=set,
            ),
        },
    )

    mapper_registry.map_imperatively(ProviderRole, provider_role_table)

    mapper_registry.map_imperatively(
        Provider,
        provider_table,
        properties={
            "person": relationship(Person),
            "provider_role": relationship(ProviderRole),
        },
    )

    mapper_registry.map_imperatively(ConceptSource, concept_source_table)
    mapper_registry.map_imperatively(ConceptMapType, concept_map_type_table)

    mapper_registry.map_imperatively(
        ConceptReferenceTerm,
        concept_reference_term_table,
        properties={
            "source": relationship(ConceptSource),
        },
    )

    mapper_registry.map_imperatively(
        ConceptMap,
        concept_map_table,
        properties={
            "term": relationship(ConceptReferenceTerm),
            "map_type": relationship(ConceptMapType),
        },
    )

    mapper_registry.map_imperatively(
        Concept,
        concept_table,
        properties={
            "_set_members": relationship(
                Concept,
                secondary=concept_set_table,
                primaryjoin=concept_table.c.id == concept_set_table.c.concept_set_id,
                secondaryjoin=concept_table.c.id == concept_set_table.c.concept_id,
            ),
            "_mappings": relationship(
                ConceptMap,
                cascade="all, delete-orphan",
                order_by=concept_map_table.c.id,
            ),
        },
    )

    mapper_registry.map_imperatively(GlobalProperty, global_property_table)

    configure_mappers()
    return mapper_registry
