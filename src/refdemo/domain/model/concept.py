"""Concept dictionary records.

Concepts can be grouped into sets and mapped to codes of external concept
sources via reference terms.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .entity import Entity


@dataclass(eq=False, kw_only=True)
class ConceptSource(Entity):
    name: str
    description: str | None = None
    hl7_code: str | None = None
    retired: bool = False


@dataclass(eq=False, kw_only=True)
class ConceptMapType(Entity):
    name: str
    is_hidden: bool = False
    retired: bool = False


@dataclass(eq=False, kw_only=True)
class ConceptReferenceTerm(Entity):
    source: ConceptSource = field(repr=False)
    code: str
    name: str | None = None
    retired: bool = False


@dataclass(eq=False, kw_only=True)
class ConceptMap(Entity):
    term: ConceptReferenceTerm
    map_type: ConceptMapType | None = None


@dataclass(eq=False, kw_only=True)
class Concept(Entity):
    name: str
    is_set: bool = False
    retired: bool = False

    _set_members: list[Concept] = field(default_factory=list["Concept"], repr=False)
    _mappings: list[ConceptMap] = field(default_factory=list["ConceptMap"], repr=False)

    @property
    def set_members(self) -> tuple[Concept, ...]:
        return tuple(self._set_members)

    @property
    def mappings(self) -> tuple[ConceptMap, ...]:
        return tuple(self._mappings)

    def has_set_member(self, concept: Concept) -> bool:
        return any(member is concept or member.uuid == concept.uuid for member in self._set_members)

    def add_set_member(self, concept: Concept) -> bool:
        """Add ``concept`` as a set member; return whether it was missing."""
        if concept is self:
            raise ValueError("a concept cannot be a member of its own set")
        if self.has_set_member(concept):
            return False
        self._set_members.append(concept)
        self.is_set = True
        return True

    def mapping_for(self, source: ConceptSource, code: str) -> ConceptMap | None:
        for mapping in self._mappings:
            term = mapping.term
            if term.code == code and term.source.name == source.name:
                return mapping
        return None

    def add_mapping(self, mapping: ConceptMap) -> bool:
        """Attach ``mapping`` unless the concept already maps to the same term."""
        if self.mapping_for(mapping.term.source, mapping.term.code) is not None:
            return False
        self._mappings.append(mapping)
        return True
