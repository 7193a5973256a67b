import pytest

from graph import GraphRepository
from i18n import Translator
from models import FamilyRecord, PersonRecord
from projector import ChartContext
from theme import ThemeColors
from tree_builder import build_ancestor_tree


def make_context(max_generations, ancestor_filter=None):
    return ChartContext(
        max_generations=max_generations,
        colors=ThemeColors(),
        translator=Translator(),
        ancestor_filter=ancestor_filter,
    )


def full_pedigree(depth):
    """A complete binary pedigree: person 'P1' with parents 'P2'/'P3', and so on."""
    persons, families = [], []
    for n in range(1, 2 ** depth):
        has_parents = 2 * n < 2 ** depth
        persons.append(
            PersonRecord(
                xref=f"P{n}",
                sex="M" if n % 2 == 0 else "F",
                child_families=[f"F{n}"] if has_parents else [],
            )
        )
        if has_parents:
            families.append(FamilyRecord(xref=f"F{n}", husband=f"P{2 * n}", wife=f"P{2 * n + 1}"))
    return GraphRepository.from_records(persons, families)


def walk(node):
    yield node
    for child in node.children or ():
        yield from walk(child)


@pytest.mark.parametrize("generations", [2, 3, 5, 10])
def test_depth_is_bounded(generations):
    repository = full_pedigree(12)
    tree = build_ancestor_tree(repository.get_person("P1"), repository, make_context(generations))

    nodes = list(walk(tree))
    assert tree.generation == 1
    assert max(n.generation for n in nodes) == generations
    assert len(nodes) == 2**generations - 1


def test_children_are_father_then_mother():
    repository = full_pedigree(4)
    tree = build_ancestor_tree(repository.get_person("P1"), repository, make_context(4))

    for node in walk(tree):
        if node.children is None:
            continue
        assert len(node.children) <= 2
        assert [c.sex for c in node.children] == ["M", "F"]
        for child in node.children:
            assert child.generation == node.generation + 1


def test_missing_mother_leaves_single_child():
    repository = GraphRepository.from_records(
        [
            PersonRecord(xref="X", child_families=["F1"]),
            PersonRecord(xref="F", sex="M"),
        ],
        [FamilyRecord(xref="F1", husband="F")],
    )
    tree = build_ancestor_tree(repository.get_person("X"), repository, make_context(2))

    assert len(tree.children) == 1
    assert tree.children[0].xref == "F"
    assert tree.children[0].generation == 2
    assert len(tree.to_dict()["children"]) == 1


def test_no_children_field_without_family_or_beyond_depth():
    repository = full_pedigree(4)
    tree = build_ancestor_tree(repository.get_person("P1"), repository, make_context(2))

    # Generation 2 people have families, but their parents are beyond the bound
    for parent in tree.children:
        assert parent.children is None
        assert "children" not in parent.to_dict()

    lonely = PersonRecord(xref="L")
    node = build_ancestor_tree(lonely, GraphRepository.from_records([lonely], []), make_context(5))
    assert node.children is None


def test_family_without_parents():
    repository = GraphRepository.from_records(
        [PersonRecord(xref="X", child_families=["F1"])], [FamilyRecord(xref="F1")]
    )
    tree = build_ancestor_tree(repository.get_person("X"), repository, make_context(3))
    assert tree.children is None


def test_pedigree_collapse_repeats_ancestor():
    # Cousins married: both parents of X share the grandparents G1/G2
    repository = GraphRepository.from_records(
        [
            PersonRecord(xref="X", child_families=["FX"]),
            PersonRecord(xref="A", sex="M", child_families=["FA"]),
            PersonRecord(xref="B", sex="F", child_families=["FB"]),
            PersonRecord(xref="C", sex="M", child_families=["FG"]),
            PersonRecord(xref="D", sex="F", child_families=["FG"]),
            PersonRecord(xref="G1", sex="M"),
            PersonRecord(xref="G2", sex="F"),
        ],
        [
            FamilyRecord(xref="FX", husband="A", wife="B"),
            FamilyRecord(xref="FA", husband="C"),
            FamilyRecord(xref="FB", wife="D"),
            FamilyRecord(xref="FG", husband="G1", wife="G2"),
        ],
    )
    tree = build_ancestor_tree(repository.get_person("X"), repository, make_context(4))

    xrefs = [n.xref for n in walk(tree)]
    assert xrefs.count("G1") == 2
    assert xrefs.count("G2") == 2


def test_self_ancestor_cycle_terminates():
    repository = GraphRepository.from_records(
        [PersonRecord(xref="X", sex="M", child_families=["F1"])],
        [FamilyRecord(xref="F1", husband="X")],
    )
    tree = build_ancestor_tree(repository.get_person("X"), repository, make_context(10))
    assert len(list(walk(tree))) == 10


def test_ancestor_filter_prunes_branch_but_not_root():
    repository = full_pedigree(4)
    tree = build_ancestor_tree(
        repository.get_person("P1"),
        repository,
        make_context(4, ancestor_filter=lambda p: p.xref not in ("P1", "P2")),
    )
    xrefs = {n.xref for n in walk(tree)}
    assert "P1" in xrefs
    assert not xrefs & {"P2", "P4", "P5", "P8", "P9", "P10", "P11"}
    assert [c.xref for c in tree.children] == ["P3"]
