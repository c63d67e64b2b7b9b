"""Scoped elevation of host privileges."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator

    from refdemo.domain.model import Privilege


@runtime_checkable
class PrivilegeScope(Protocol):
    """Grants privileges to the running process until they are released."""

    def acquire(self, *privileges: Privilege) -> None: ...

    def release(self, *privileges: Privilege) -> None: ...


@contextmanager
def elevated(scope: PrivilegeScope, *privileges: Privilege) -> Iterator[None]:
    """Hold ``privileges`` for the duration of the block.

    Privileges are acquired one at a time so that a failed acquisition still
    releases the ones already granted.
    """

    acquired: list[Privilege] = []
    try:
        for privilege in privileges:
            scope.acquire(privilege)
            acquired.append(privilege)
        yield
    finally:
        if acquired:
            scope.release(*reversed(acquired))
