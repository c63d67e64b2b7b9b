"""Idempotent reconciliation of the reference demo metadata.

Each flow looks every desired record up by its identity key, creates it with
that key when it is missing, and otherwise patches only the attributes it owns.
Nothing is ever deleted. Flows:

1) link the admin person to a provider
2) concept set membership and source mappings
3) global properties (fill-if-empty defaults, forced scheduler credentials)
4) demo staff persons, users, roles and provider roles
"""

from __future__ import annotations

from .concepts import (
    configure_concepts,
    ensure_set_member,
    ensure_source_mappings,
    resolve_mapping_table,
)
from .desired_state import (
    DEFAULT_GLOBAL_PROPERTIES,
    DEMO_STAFF,
    SOURCE_CONCEPT_MAPPINGS,
    DesiredPerson,
    DesiredUser,
    SourceMappingTable,
    StaffMember,
    desired_state_rows,
    forced_global_properties,
)
from .engine import Reconciler
from .global_properties import fill_if_empty, force_set, set_required_global_properties
from .providers import link_admin_to_provider
from .report import Outcome, ReconcileAction, ReconcileReport
from .staff import add_inherited_role, replace_roles, setup_person, setup_staff, setup_user

__all__ = [
    "DEFAULT_GLOBAL_PROPERTIES",
    "DEMO_STAFF",
    "SOURCE_CONCEPT_MAPPINGS",
    "DesiredPerson",
    "DesiredUser",
    "Outcome",
    "ReconcileAction",
    "ReconcileReport",
    "Reconciler",
    "SourceMappingTable",
    "StaffMember",
    "add_inherited_role",
    "configure_concepts",
    "desired_state_rows",
    "ensure_set_member",
    "ensure_source_mappings",
    "fill_if_empty",
    "force_set",
    "forced_global_properties",
    "link_admin_to_provider",
    "replace_roles",
    "resolve_mapping_table",
    "set_required_global_properties",
    "setup_person",
    "setup_staff",
    "setup_user",
]
