"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityKind(StrEnum):
    """Kinds of demo metadata the reconciler provisions."""

    PROVIDER = "provider"
    PERSON = "person"
    USER = "user"
    ROLE = "role"
    ROLE_ASSIGNMENT = "role_assignment"
    CONCEPT = "concept"
    CONCEPT_MAPPING = "concept_mapping"
    CONCEPT_REFERENCE_TERM = "concept_reference_term"
    GLOBAL_PROPERTY = "global_property"


class Gender(StrEnum):
    MALE = "M"
    FEMALE = "F"


class Privilege(StrEnum):
    """Host privileges that have to be held while touching protected metadata."""

    VIEW_PROVIDERS = "View Providers"
    VIEW_PERSONS = "View People"
    MANAGE_PROVIDERS = "Manage Providers"
    MANAGE_CONCEPTS = "Manage Concepts"
