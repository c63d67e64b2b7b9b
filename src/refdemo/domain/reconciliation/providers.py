"""Make sure the administrative person can act as a provider."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from refdemo.domain.errors import MissingMetadataError
from refdemo.domain.model import EntityKind, Privilege, Provider
from refdemo.domain.ports.privileges import elevated

from .desired_state import ADMIN_PERSON_ID, ADMIN_PROVIDER_IDENTIFIER
from .report import Outcome, ReconcileReport

if TYPE_CHECKING:
    from collections.abc import Iterable

    from refdemo.domain.ports import PersonDirectory, PrivilegeScope, ProviderDirectory

log = logging.getLogger(__name__)

PROVIDER_LINK_PRIVILEGES: Final[tuple[Privilege, ...]] = (
    Privilege.VIEW_PROVIDERS,
    Privilege.VIEW_PERSONS,
    Privilege.MANAGE_PROVIDERS,
)


def link_admin_to_provider(
    persons: PersonDirectory,
    providers: ProviderDirectory,
    privileges: PrivilegeScope,
    *,
    admin_person_id: int = ADMIN_PERSON_ID,
    report: ReconcileReport | None = None,
) -> Provider | None:
    """Link the admin person to a provider unless it already has one.

    Reuses the first unassigned, non-retired provider and only creates a new
    ``admin`` provider when there is none. Returns the provider that was linked,
    or ``None`` when nothing had to change.
    """

    report = report if report is not None else ReconcileReport()
    with elevated(privileges, *PROVIDER_LINK_PRIVILEGES):
        admin = persons.get_by_id(admin_person_id)
        if admin is None:
            log.error("Admin person %s not found; cannot link a provider", admin_person_id)
            raise MissingMetadataError("person", admin_person_id)

        existing = providers.get_providers_for_person(admin)
        if existing:
            log.debug("Admin person already linked to provider %s", existing[0].uuid)
            report.record(EntityKind.PROVIDER, existing[0].uuid, Outcome.UNCHANGED)
            return None

        provider = _first_unassigned(providers.get_all(include_retired=False))
        if provider is None:
            provider = Provider(identifier=ADMIN_PROVIDER_IDENTIFIER)
            outcome = Outcome.CREATED
        else:
            outcome = Outcome.UPDATED
        provider.person = admin
        providers.save(provider)

    log.info("Linked admin person %s to provider %s (%s)", admin_person_id, provider.uuid, outcome)
    report.record(EntityKind.PROVIDER, provider.uuid, outcome, "linked to admin person")
    return provider


def _first_unassigned(providers: Iterable[Provider]) -> Provider | None:
    for provider in providers:
        if not provider.retired and not provider.is_assigned:
            return provider
    return None
