"""Data classes for fan chart records and nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


class ChartError(Exception):
    """Base class for failures surfaced by the chart handlers."""


class NotFound(ChartError):
    """The requested individual does not exist."""

    def __init__(self, xref: str):
        super().__init__(f"Individual {xref!r} not found")
        self.xref = xref


class AccessDenied(ChartError):
    """The requested individual exists but may not be shown."""

    def __init__(self, xref: str):
        super().__init__(f"Access to individual {xref!r} denied")
        self.xref = xref


@dataclass
class PersonRecord:
    xref: str
    sex: str = "U"  # M, F or U
    full_name: str = ""  # marked-up primary name
    alternate_name: str | None = None  # marked-up alternate name
    birth_year: int | None = None
    death_year: int | None = None
    is_dead: bool = False
    child_families: list[str] = field(default_factory=list)  # FAMC xrefs, in file order
    hidden: bool = False

    @property
    def birth_known(self) -> bool:
        return self.birth_year is not None

    @property
    def death_known(self) -> bool:
        return self.death_year is not None


@dataclass
class FamilyRecord:
    xref: str
    husband: str | None = None
    wife: str | None = None
    children: list[str] = field(default_factory=list)


class Repository(Protocol):
    """Resolves identifiers to person and family records."""

    def get_person(self, xref: str) -> PersonRecord | None: ...

    def primary_child_family(self, person: PersonRecord) -> FamilyRecord | None: ...

    def husband(self, family: FamilyRecord) -> PersonRecord | None: ...

    def wife(self, family: FamilyRecord) -> PersonRecord | None: ...

    def can_show(self, person: PersonRecord) -> bool: ...


@dataclass(frozen=True)
class ChartOptions:
    generations: int
    fan_degree: int = 210
    font_scale: int = 100
    hide_empty_segments: bool = False
    show_color_gradients: bool = False


@dataclass(frozen=True)
class AncestorNode:
    xref: str
    generation: int
    name: str
    first_names: tuple[str, ...]
    last_names: tuple[str, ...]
    preferred_name: str
    alternative_names: tuple[str, ...]
    is_alt_rtl: bool
    sex: str
    timespan: str
    color: str
    id: int = 0
    children: tuple[AncestorNode, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape consumed by the chart client."""
        data: dict[str, Any] = {
            "id": self.id,
            "xref": self.xref,
            "generation": self.generation,
            "name": self.name,
            "firstNames": list(self.first_names),
            "lastNames": list(self.last_names),
            "preferredName": self.preferred_name,
            "alternativeNames": list(self.alternative_names),
            "isAltRtl": self.is_alt_rtl,
            "sex": self.sex,
            "timespan": self.timespan,
            "color": self.color,
            "colors": [[], []],
        }
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        return data
