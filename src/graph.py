"""NetworkX family graph and the repository built on it."""

from __future__ import annotations

import logging

import networkx as nx

from models import FamilyRecord, PersonRecord

logger = logging.getLogger(__name__)

HUSBAND = "husband"
WIFE = "wife"


def build_family_graph(persons: list[PersonRecord], families: list[FamilyRecord]) -> nx.DiGraph:
    """
    Build a union-node graph of individuals and families.

    - Person nodes carry their ``PersonRecord`` under ``record``
    - Family nodes carry their ``FamilyRecord`` under ``record``
    - Spouses point to their family node (``spouse_to_family``, tagged with ``role``)
    - Family nodes point to their children (``family_to_child``)

    Person and family xrefs share one namespace, as they do in GEDCOM. The
    first record for an xref wins; later duplicates are logged and skipped.
    """
    G = nx.DiGraph()

    for person in persons:
        if person.xref in G:
            logger.warning("Duplicate individual %s ignored", person.xref)
            continue
        G.add_node(person.xref, node_type="person", record=person)

    for family in families:
        if G.nodes.get(family.xref, {}).get("node_type") == "family":
            logger.warning("Duplicate family %s ignored", family.xref)
            continue
        if family.xref in G:
            raise ValueError(f"Family xref {family.xref!r} clashes with an individual")
        G.add_node(family.xref, node_type="family", record=family)

        for role, spouse in ((HUSBAND, family.husband), (WIFE, family.wife)):
            if G.nodes.get(spouse, {}).get("node_type") == "person":
                G.add_edge(spouse, family.xref, edge_type="spouse_to_family", role=role)
            elif spouse is not None:
                logger.warning("Family %s references unknown %s %s", family.xref, role, spouse)

        for child in family.children:
            if G.nodes.get(child, {}).get("node_type") == "person":
                G.add_edge(family.xref, child, edge_type="family_to_child")

    # Children may list a FAMC the family itself does not mention
    for person in persons:
        for fam_xref in person.child_families:
            if G.nodes.get(fam_xref, {}).get("node_type") == "family":
                G.add_edge(fam_xref, person.xref, edge_type="family_to_child")

    return G


class GraphRepository:
    """Person/family lookups backed by a family graph."""

    def __init__(self, G: nx.DiGraph):
        self.G = G

    @classmethod
    def from_records(
        cls, persons: list[PersonRecord], families: list[FamilyRecord]
    ) -> GraphRepository:
        return cls(build_family_graph(persons, families))

    def _record(self, xref: str | None, node_type: str):
        if xref is None or xref not in self.G:
            return None
        data = self.G.nodes[xref]
        if data.get("node_type") != node_type:
            return None
        return data["record"]

    def get_person(self, xref: str) -> PersonRecord | None:
        return self._record(xref, "person")

    def get_family(self, xref: str) -> FamilyRecord | None:
        return self._record(xref, "family")

    def primary_child_family(self, person: PersonRecord) -> FamilyRecord | None:
        """The first family, in the person's own FAMC order, that exists in the graph."""
        for fam_xref in person.child_families:
            family = self.get_family(fam_xref)
            if family is not None:
                return family

        if person.xref not in self.G:
            return None

        # Fall back to families that list the person as a child
        for parent in self.G.predecessors(person.xref):
            if self.G.edges[parent, person.xref].get("edge_type") == "family_to_child":
                return self.G.nodes[parent]["record"]
        return None

    def _spouse(self, family: FamilyRecord, role: str) -> PersonRecord | None:
        if family.xref not in self.G:
            return None
        for spouse in self.G.predecessors(family.xref):
            edge = self.G.edges[spouse, family.xref]
            if edge.get("edge_type") == "spouse_to_family" and edge.get("role") == role:
                return self.G.nodes[spouse]["record"]
        return None

    def husband(self, family: FamilyRecord) -> PersonRecord | None:
        return self._spouse(family, HUSBAND)

    def wife(self, family: FamilyRecord) -> PersonRecord | None:
        return self._spouse(family, WIFE)

    def can_show(self, person: PersonRecord) -> bool:
        return not person.hidden
