"""Domain port definitions for adapters."""

from __future__ import annotations

from .directories import (
    ConceptDirectory,
    ConfigStore,
    PersonDirectory,
    ProviderDirectory,
    ProviderRoleDirectory,
    UserDirectory,
)
from .privileges import PrivilegeScope, elevated
from .unit_of_work import (
    DemoDataDirectories,
    DemoDataUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "ConceptDirectory",
    "ConfigStore",
    "DemoDataDirectories",
    "DemoDataUnitOfWork",
    "PersonDirectory",
    "PrivilegeScope",
    "ProviderDirectory",
    "ProviderRoleDirectory",
    "RepositoryCollection",
    "UnitOfWork",
    "UserDirectory",
    "elevated",
]
