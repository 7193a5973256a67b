"""Projection of person records into fan chart nodes."""

from dataclasses import dataclass
from typing import Callable, Protocol

from i18n import is_rtl
from models import AncestorNode, PersonRecord
from names import alternate_names, decompose_name, plain_name


class ColorResolver(Protocol):
    def parameter(self, key: str) -> str: ...


class TextTranslator(Protocol):
    def translate(self, message: str, *args) -> str: ...


@dataclass(frozen=True)
class ChartContext:
    """
    Everything a chart build needs besides the person graph itself.

    Args:
        max_generations: Deepest generation to include (root is generation 1)
        colors: Theme lookup used for segment colors
        translator: Locale strings for lifespan labels
        ancestor_filter: Optional predicate; ancestors for which it returns False
            are left out of the tree along with their own ancestry. The root is
            never filtered.
    """

    max_generations: int
    colors: ColorResolver
    translator: TextTranslator
    ancestor_filter: Callable[[PersonRecord], bool] | None = None


def lifespan(person: PersonRecord, translator: TextTranslator) -> str:
    """Build the timespan label shown under a name."""
    if person.birth_known and person.death_known:
        return f"{person.birth_year}-{person.death_year}"
    if person.birth_known:
        return translator.translate("Born: %s", person.birth_year)
    if person.death_known:
        return translator.translate("Died: %s", person.death_year)
    if person.is_dead:
        return translator.translate("Deceased")
    return ""


def sex_color(person: PersonRecord | None, colors: ColorResolver) -> str:
    """Return the ``#rrggbb`` background color for a person's sex."""
    sex = "u" if person is None or not person.sex else person.sex.lower()
    if sex not in ("m", "f"):
        sex = "u"
    return "#" + colors.parameter(f"chart-background-{sex}")


def project(person: PersonRecord, generation: int, context: ChartContext) -> AncestorNode:
    """Turn one record into a chart node (without children)."""
    parts = decompose_name(person.full_name)
    sex = person.sex if person.sex in ("M", "F") else "U"

    return AncestorNode(
        xref=person.xref,
        generation=generation,
        name=plain_name(person.full_name),
        first_names=tuple(parts.first_names),
        last_names=tuple(parts.last_names),
        preferred_name=parts.preferred_name,
        alternative_names=tuple(alternate_names(person.alternate_name)),
        is_alt_rtl=is_rtl(plain_name(person.alternate_name)),
        sex=sex,
        timespan=lifespan(person, context.translator),
        color=sex_color(person, context.colors),
    )
