"""Concept set membership and cross-source code mappings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from refdemo.domain.errors import MissingConceptError, MissingMetadataError
from refdemo.domain.model import ConceptMap, ConceptReferenceTerm, EntityKind, Privilege
from refdemo.domain.ports.privileges import elevated

from .desired_state import (
    DIAGNOSIS_CONCEPT_UUID,
    SAME_AS_MAP_TYPE_UUID,
    SOURCE_CONCEPT_MAPPINGS,
    VISIT_DIAGNOSES_CONCEPT_UUID,
)
from .report import Outcome, ReconcileReport

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from refdemo.domain.model import ConceptMapType, ConceptSource
    from refdemo.domain.ports import ConceptDirectory, PrivilegeScope

    from .desired_state import SourceMappingTable

log = logging.getLogger(__name__)

CONCEPT_PRIVILEGES: Final[tuple[Privilege, ...]] = (Privilege.MANAGE_CONCEPTS,)


def ensure_set_member(
    concepts: ConceptDirectory,
    parent_uuid: str,
    child_uuid: str,
    *,
    report: ReconcileReport | None = None,
) -> bool:
    """Make the child concept a member of the parent set; return whether it was added.

    A missing parent counts as satisfied: it comes with the bulk import.
    """

    report = report if report is not None else ReconcileReport()
    parent = concepts.get_by_uuid(parent_uuid)
    if parent is None:
        log.warning("Concept set %s not found; skipping set membership", parent_uuid)
        report.record(EntityKind.CONCEPT, parent_uuid, Outcome.SKIPPED, "set concept missing")
        return False

    child = concepts.get_by_uuid(child_uuid)
    if child is None:
        log.error("Concept %s not found; cannot add it to set %s", child_uuid, parent_uuid)
        raise MissingConceptError(child_uuid)

    if not parent.add_set_member(child):
        report.record(EntityKind.CONCEPT, parent_uuid, Outcome.UNCHANGED)
        return False

    concepts.save(parent)
    log.info("Added concept %s to set %s", child_uuid, parent_uuid)
    report.record(EntityKind.CONCEPT, parent_uuid, Outcome.UPDATED, f"set member {child_uuid}")
    return True


def resolve_mapping_table(concepts: ConceptDirectory, table: SourceMappingTable) -> dict[str, str]:
    """Return the table as ``concept uuid -> code``.

    Entries keyed by concept name are resolved to that concept's uuid in this
    installation and dropped when no such concept exists.
    """

    resolved = dict(table.by_uuid)
    for name, code in table.by_name.items():
        concept = concepts.get_by_name(name)
        if concept is None:
            log.debug("Concept named %r not found; no %s mapping for it", name, table.source_name)
            continue
        resolved[concept.uuid] = code
    return resolved


def ensure_source_mappings(
    concepts: ConceptDirectory,
    source_name: str,
    mappings: Mapping[str, str],
    *,
    map_type_uuid: str = SAME_AS_MAP_TYPE_UUID,
    report: ReconcileReport | None = None,
) -> int:
    """Give each concept in ``mappings`` a SAME-AS mapping to its code in the source.

    A code already mapped to any concept in the source is left alone. Returns
    the number of mappings added; a missing source adds none.
    """

    report = report if report is not None else ReconcileReport()
    source = concepts.get_source_by_name(source_name)
    if source is None:
        log.warning("Concept source %r not found; skipping its mappings", source_name)
        report.record(EntityKind.CONCEPT_MAPPING, source_name, Outcome.SKIPPED, "source missing")
        return 0

    map_type: ConceptMapType | None = None
    added = 0
    for concept_uuid, code in mappings.items():
        if concepts.get_by_mapping(code, source.name) is not None:
            report.record(EntityKind.CONCEPT_MAPPING, f"{source.name}:{code}", Outcome.UNCHANGED)
            continue

        concept = concepts.get_by_uuid(concept_uuid)
        if concept is None:
            log.error(
                "Concept %s not found; cannot map it to %s:%s", concept_uuid, source.name, code
            )
            raise MissingConceptError(concept_uuid)
        if map_type is None:
            map_type = _require_map_type(concepts, map_type_uuid)

        term = _reference_term(concepts, source, code, report=report)
        if not concept.add_mapping(ConceptMap(term=term, map_type=map_type)):
            # Lookups by mapping ignore retired concepts; this one already carries the code.
            report.record(EntityKind.CONCEPT_MAPPING, f"{source.name}:{code}", Outcome.UNCHANGED)
            continue
        concepts.save(concept)
        added += 1
        log.info("Mapped concept %s to %s:%s", concept_uuid, source.name, code)
        report.record(
            EntityKind.CONCEPT_MAPPING,
            f"{source.name}:{code}",
            Outcome.CREATED,
            concept_uuid,
        )
    return added


def configure_concepts(
    concepts: ConceptDirectory,
    privileges: PrivilegeScope,
    *,
    mapping_tables: Sequence[SourceMappingTable] = SOURCE_CONCEPT_MAPPINGS,
    report: ReconcileReport | None = None,
) -> None:
    report = report if report is not None else ReconcileReport()
    with elevated(privileges, *CONCEPT_PRIVILEGES):
        ensure_set_member(
            concepts,
            VISIT_DIAGNOSES_CONCEPT_UUID,
            DIAGNOSIS_CONCEPT_UUID,
            report=report,
        )
        for table in mapping_tables:
            ensure_source_mappings(
                concepts,
                table.source_name,
                resolve_mapping_table(concepts, table),
                report=report,
            )


def _reference_term(
    concepts: ConceptDirectory,
    source: ConceptSource,
    code: str,
    *,
    report: ReconcileReport,
) -> ConceptReferenceTerm:
    term = concepts.get_reference_term(code, source)
    if term is not None:
        return term
    term = concepts.save_reference_term(ConceptReferenceTerm(source=source, code=code))
    report.record(EntityKind.CONCEPT_REFERENCE_TERM, f"{source.name}:{code}", Outcome.CREATED)
    return term


def _require_map_type(concepts: ConceptDirectory, uuid: str) -> ConceptMapType:
    map_type = concepts.get_map_type_by_uuid(uuid)
    if map_type is None:
        log.error("Concept map type %s not found", uuid)
        raise MissingMetadataError("concept map type", uuid)
    return map_type
