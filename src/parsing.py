"""GEDCOM loading into person and family records."""

import html
from pathlib import Path
import re

from ged4py import GedcomReader

from models import FamilyRecord, PersonRecord

# Date qualifiers and range keywords that precede or separate years
QUALIFIER_RE = re.compile(
    r"\b(ABT|ABOUT|AROUND|BEF|BEFORE|AFT|AFTER|EST|CAL|CIRCA|CA|INT|FROM|TO|BET|AND)\b\.?:?",
    re.IGNORECASE,
)
# Calendar escapes such as @#DJULIAN@
CALENDAR_RE = re.compile(r"@#D[A-Z ]+@")
YEAR_RE = re.compile(r"(?<!\d)(\d{3,4})(?!\d)")
NAME_STRING_RE = re.compile(r"^(?P<given>[^/]*)(?:/(?P<surname>[^/]*)/?)?(?P<suffix>.*)$")

HIDDEN_RESTRICTIONS = {"privacy", "confidential"}
DEATH_TAGS = ("DEAT", "BURI", "CREM")


def normalize_xref(xref_id: str) -> str:
    """Strip the GEDCOM pointer delimiters, '@I12@' -> 'I12'."""
    xref = xref_id.strip().strip("@")
    if not xref:
        raise ValueError(f"Empty GEDCOM xref: {xref_id!r}")
    return xref


def parse_year(date_str: str | None) -> int | None:
    """
    Extract the (earliest) year of a GEDCOM or free-text date.
    Returns None if no year can be found.

    Handles formats like:
    - "25 NOV 1954"
    - "ABT 1905"
    - "BET 1900 AND 1910" (the earlier year)
    - "(01-27-1920)"
    - "(SEPT. 17,1910)"
    - "@#DJULIAN@ 1700"
    """
    if not date_str:
        return None

    s = CALENDAR_RE.sub(" ", str(date_str))
    s = QUALIFIER_RE.sub(" ", s)
    s = s.strip().strip("()").rstrip("?")

    match = YEAR_RE.search(s)
    if match is None:
        return None
    year = int(match.group(1))
    return year or None


def split_name_value(value) -> tuple[str, str, str]:
    """Split a NAME value into given name, surname and suffix."""
    if value is None:
        return ("", "", "")

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(value, tuple):
        given, surname, suffix = (tuple(value) + ("", "", ""))[:3]
        return (given or "", surname or "", suffix or "")

    # Fallback: string format "Given /Surname/ Suffix"
    match = NAME_STRING_RE.match(str(value).strip())
    if match is None:
        return (str(value).strip(), "", "")
    return (
        match.group("given").strip(),
        (match.group("surname") or "").strip(),
        match.group("suffix").strip(),
    )


def build_name_markup(
    given: str, surnames: list[str], nickname: str | None = None, suffix: str = ""
) -> str:
    """
    Render name parts as a marked-up name fragment.

    A given name ending in '*' is the preferred (called) name.
    """
    tokens = []
    for token in given.split():
        if token.endswith("*") and len(token) > 1:
            tokens.append(f'<span class="starredname">{html.escape(token[:-1])}</span>')
        else:
            tokens.append(html.escape(token))

    if nickname:
        tokens.append(f'<q class="wt-nickname">{html.escape(nickname)}</q>')

    for surname in surnames:
        tokens.append(f'<span class="SURN">{html.escape(surname)}</span>')

    if suffix:
        tokens.append(html.escape(suffix))

    if not tokens:
        return ""
    return '<span class="NAME" dir="auto" translate="no">' + " ".join(tokens) + "</span>"


def _sub_value(rec, tag: str) -> str | None:
    sub = rec.sub_tag(tag)
    if sub is None or sub.value is None:
        return None
    return str(sub.value).strip() or None


def _name_markup(name_rec) -> str:
    given, surname, suffix = split_name_value(name_rec.value)

    # SURN may list several surnames, e.g. birth and married name
    surn = _sub_value(name_rec, "SURN")
    if surn:
        surnames = [s.strip() for s in surn.split(",") if s.strip()]
    else:
        surnames = [surname] if surname else []

    return build_name_markup(given, surnames, _sub_value(name_rec, "NICK"), suffix)


def extract_names(indi) -> tuple[str, str | None]:
    """Return the marked-up primary name and alternate name of an individual record."""
    name_recs = list(indi.sub_tags("NAME"))
    if not name_recs:
        return ("", None)

    primary = name_recs[0]
    full_name = _name_markup(primary)

    # Prefer a romanized/phonetic variant, else a second NAME record
    alternate = None
    for variant_tag in ("ROMN", "FONE"):
        variant = primary.sub_tag(variant_tag)
        if variant is not None and variant.value:
            given, surname, suffix = split_name_value(variant.value)
            alternate = build_name_markup(given, [surname] if surname else [], suffix=suffix)
            break
    if alternate is None and len(name_recs) > 1:
        alternate = _name_markup(name_recs[1])

    return (full_name, alternate or None)


def extract_event_year(indi, tag: str) -> int | None:
    """Extract the year of an event tag (BIRT, DEAT, etc.)."""
    event = indi.sub_tag(tag)
    if event is None:
        return None

    date_rec = event.sub_tag("DATE")
    # Convert date value to string (ged4py may return DateValue objects)
    if date_rec is None or not date_rec.value:
        return None
    return parse_year(str(date_rec.value))


def extract_sex(indi) -> str:
    """Extract sex from an individual record."""
    sex = _sub_value(indi, "SEX")
    sex = sex.upper() if sex else "U"
    return sex if sex in ("M", "F") else "U"


def _pointer_xrefs(rec, tag: str) -> list[str]:
    xrefs = []
    for sub in rec.sub_tags(tag):
        if sub is not None and sub.xref_id:
            xrefs.append(normalize_xref(sub.xref_id))
    return xrefs


def person_from_record(indi) -> PersonRecord:
    full_name, alternate_name = extract_names(indi)
    restriction = (_sub_value(indi, "RESN") or "").lower()

    return PersonRecord(
        xref=normalize_xref(indi.xref_id),
        sex=extract_sex(indi),
        full_name=full_name,
        alternate_name=alternate_name,
        birth_year=extract_event_year(indi, "BIRT"),
        death_year=extract_event_year(indi, "DEAT"),
        is_dead=any(indi.sub_tag(tag) is not None for tag in DEATH_TAGS),
        child_families=_pointer_xrefs(indi, "FAMC"),
        hidden=restriction in HIDDEN_RESTRICTIONS,
    )


def family_from_record(fam) -> FamilyRecord:
    husbands = _pointer_xrefs(fam, "HUSB")
    wives = _pointer_xrefs(fam, "WIFE")

    return FamilyRecord(
        xref=normalize_xref(fam.xref_id),
        husband=husbands[0] if husbands else None,
        wife=wives[0] if wives else None,
        children=_pointer_xrefs(fam, "CHIL"),
    )


def load_records(filepath: Path) -> tuple[list[PersonRecord], list[FamilyRecord]]:
    """
    Read individuals and families from a GEDCOM file.
    Ignores non-standard tags and records without an xref.
    """
    persons: list[PersonRecord] = []
    families: list[FamilyRecord] = []

    with GedcomReader(str(filepath)) as reader:
        for rec in reader.records0("INDI"):
            if rec.xref_id is None:
                continue
            persons.append(person_from_record(rec))

        for rec in reader.records0("FAM"):
            if rec.xref_id is None:
                continue
            families.append(family_from_record(rec))

    return persons, families
