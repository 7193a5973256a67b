"""Recursive assembly of the bounded-depth ancestor tree."""

from dataclasses import replace
import logging

from models import AncestorNode, PersonRecord, Repository
from projector import ChartContext, project

logger = logging.getLogger(__name__)


def build_ancestor_tree(
    root: PersonRecord, repository: Repository, context: ChartContext
) -> AncestorNode:
    """
    Build the ancestor tree of ``root`` down to ``context.max_generations``.

    Recursion is bounded by generation only. An ancestor reachable along
    several lines (pedigree collapse) appears once per line.
    """
    if context.max_generations < 1:
        raise ValueError(f"max_generations must be positive, got {context.max_generations}")
    return _build_node(root, 1, repository, context)


def _build_node(
    person: PersonRecord | None,
    generation: int,
    repository: Repository,
    context: ChartContext,
) -> AncestorNode | None:
    if person is None or generation > context.max_generations:
        return None

    if generation > 1 and context.ancestor_filter and not context.ancestor_filter(person):
        logger.debug("Pruned %s at generation %d", person.xref, generation)
        return None

    node = project(person, generation, context)

    family = repository.primary_child_family(person)
    if family is None:
        return node

    children = []
    for parent in (repository.husband(family), repository.wife(family)):
        subtree = _build_node(parent, generation + 1, repository, context)
        if subtree is not None:
            children.append(subtree)

    # No parent within bounds leaves the field absent rather than empty
    if not children:
        return node
    return replace(node, children=tuple(children))
