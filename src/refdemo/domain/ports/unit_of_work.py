"""Unit-of-work abstractions for coordinating directories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from refdemo.domain.ports.directories import (
        ConceptDirectory,
        ConfigStore,
        PersonDirectory,
        ProviderDirectory,
        ProviderRoleDirectory,
        UserDirectory,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of directories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a directory collection."""

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class DemoDataDirectories(RepositoryCollection):
    """Directories the reconciler reads and writes."""

    persons: PersonDirectory
    users: UserDirectory
    providers: ProviderDirectory
    provider_roles: ProviderRoleDirectory
    concepts: ConceptDirectory
    settings: ConfigStore


type DemoDataUnitOfWork = UnitOfWork[DemoDataDirectories]
