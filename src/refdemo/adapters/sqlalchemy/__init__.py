"""SQLAlchemy adapter package for refdemo."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyConceptDirectory,
    SqlAlchemyConfigStore,
    SqlAlchemyPersonDirectory,
    SqlAlchemyProviderDirectory,
    SqlAlchemyProviderRoleDirectory,
    SqlAlchemyUserDirectory,
)

__all__ = [
    "SqlAlchemyConceptDirectory",
    "SqlAlchemyConfigStore",
    "SqlAlchemyPersonDirectory",
    "SqlAlchemyProviderDirectory",
    "SqlAlchemyProviderRoleDirectory",
    "SqlAlchemyUserDirectory",
    "mapper_registry",
    "start_mappers",
]
