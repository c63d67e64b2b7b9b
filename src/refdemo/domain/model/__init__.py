"""Public domain model surface."""

from __future__ import annotations

from refdemo.domain.model.concept import (
    Concept,
    ConceptMap,
    ConceptMapType,
    ConceptReferenceTerm,
    ConceptSource,
)
from refdemo.domain.model.entity import Entity, new_uuid
from refdemo.domain.model.enums import EntityKind, Gender, Privilege
from refdemo.domain.model.person import Person, PersonName
from refdemo.domain.model.provider import Provider, ProviderRole
from refdemo.domain.model.settings import GlobalProperty
from refdemo.domain.model.user import Role, User

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "new_uuid",
    # people
    "Person",
    "PersonName",
    # accounts
    "Role",
    "User",
    # providers
    "Provider",
    "ProviderRole",
    # concepts
    "Concept",
    "ConceptMap",
    "ConceptMapType",
    "ConceptReferenceTerm",
    "ConceptSource",
    # settings
    "GlobalProperty",
    # enums
    "EntityKind",
    "Gender",
    "Privilege",
]
