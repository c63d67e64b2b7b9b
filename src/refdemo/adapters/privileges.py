"""In-process privilege scope for standalone runs."""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from refdemo.domain.model import Privilege

log = logging.getLogger(__name__)


class ProxyPrivilegeScope:
    """Track privileges granted to the current process.

    Grants are counted so nested elevations of the same privilege only drop it
    once the outermost holder releases it.
    """

    def __init__(self) -> None:
        self._held: Counter[Privilege] = Counter()

    def acquire(self, *privileges: Privilege) -> None:
        for privilege in privileges:
            self._held[privilege] += 1
            log.debug("Acquired privilege %s (depth %s)", privilege, self._held[privilege])

    def release(self, *privileges: Privilege) -> None:
        for privilege in privileges:
            if self._held[privilege] <= 0:
                raise RuntimeError(f"Privilege {privilege!s} released without being held")
            self._held[privilege] -= 1
            if self._held[privilege] == 0:
                del self._held[privilege]
            log.debug("Released privilege %s", privilege)

    @property
    def held(self) -> frozenset[Privilege]:
        return frozenset(self._held)

    def is_held(self, privilege: Privilege) -> bool:
        return self._held[privilege] > 0


if TYPE_CHECKING:
    from refdemo.domain.ports import PrivilegeScope

    _scope_check: PrivilegeScope = ProxyPrivilegeScope()
