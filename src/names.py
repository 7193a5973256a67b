"""Decomposition of marked-up individual names into their parts.

Names arrive as small HTML fragments, the way genealogy front-ends format
them::

    <span class="NAME">John <span class="starredname">Paul</span>
    <q class="wt-nickname">Jack</q> <span class="SURN">Smith</span></span>

Four markers matter:

- the name region (``span.NAME`` or ``<name>``)
- surname segments (``span.SURN`` or ``<surname>``), possibly several
- the nickname (``q.wt-nickname`` or ``<nickname>``)
- the preferred given name (``span.starredname`` or ``<preferred>``)

Everything else is treated as plain text. The tokenizer never raises:
unbalanced or broken markup simply yields whatever text can be recovered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import html
import re

NAME = "name"
SURNAME = "surname"
NICKNAME = "nickname"
PREFERRED = "preferred"

# Placeholders for unknown given/surnames
UNKNOWN_PLACEHOLDERS = ("@N.N.", "@P.N.")

TAG_RE = re.compile(
    r"""<(/?)([A-Za-z][\w:-]*)((?:[^>"']|"[^"]*"|'[^']*')*?)(/?)>"""
)
COMMENT_RE = re.compile(r"<!--.*?(?:-->|$)", re.DOTALL)
CLASS_RE = re.compile(r"""(?:^|\s)class\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))""", re.IGNORECASE)

VOID_TAGS = {"br", "hr", "img", "wbr", "input", "meta", "link"}

# Plain tags understood in addition to the classed HTML spans
ROLE_TAGS = {
    "name": NAME,
    "surname": SURNAME,
    "nickname": NICKNAME,
    "preferred": PREFERRED,
}


@dataclass
class Element:
    tag: str
    role: str | None = None
    children: list[Element | str] = field(default_factory=list)


@dataclass
class NameParts:
    first_names: list[str] = field(default_factory=list)
    last_names: list[str] = field(default_factory=list)
    preferred_name: str = ""


def _role_for(tag: str, attrs: str) -> str | None:
    """Map a tag and its attribute text onto one of the name markers."""
    tag = tag.lower()
    if tag in ROLE_TAGS:
        return ROLE_TAGS[tag]

    match = CLASS_RE.search(attrs)
    if match is None:
        return None
    css_class = next(g for g in match.groups() if g is not None)

    # Class checks are substring matches, the same as contains(@class, ...)
    if tag == "span":
        if "SURN" in css_class:
            return SURNAME
        if "starredname" in css_class:
            return PREFERRED
        if "NAME" in css_class:
            return NAME
    elif tag == "q" and "wt-nickname" in css_class:
        return NICKNAME
    return None


def parse_markup(text: str | None) -> Element:
    """Tokenize a name fragment into a tree of elements and text runs."""
    root = Element(tag="#root")
    if not text:
        return root

    text = COMMENT_RE.sub("", text)
    stack = [root]
    pos = 0

    for match in TAG_RE.finditer(text):
        if match.start() > pos:
            stack[-1].children.append(html.unescape(text[pos : match.start()]))
        pos = match.end()

        closing, tag, attrs, self_closing = match.groups()
        tag = tag.lower()

        if closing:
            # Close the nearest matching open element; stray end tags are dropped
            for depth in range(len(stack) - 1, 0, -1):
                if stack[depth].tag == tag:
                    del stack[depth:]
                    break
            continue

        element = Element(tag=tag, role=_role_for(tag, attrs))
        stack[-1].children.append(element)
        if not self_closing and tag not in VOID_TAGS:
            stack.append(element)

    if pos < len(text):
        stack[-1].children.append(html.unescape(text[pos:]))

    return root


def iter_elements(node: Element, role: str):
    """Yield every element with the given role, in document order."""
    # Explicit stack: malformed markup can nest arbitrarily deep
    stack = [iter(node.children)]
    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
        elif isinstance(child, Element):
            if child.role == role:
                yield child
            stack.append(iter(child.children))


def text_of(
    node: Element, skip: frozenset[str] = frozenset(), quote: frozenset[str] = frozenset()
) -> str:
    """
    Concatenate the text below ``node``.

    Subtrees whose role is in ``skip`` are left out; those in ``quote`` are
    wrapped in double quotes.
    """
    parts = []
    stack = [(iter(node.children), None)]
    while stack:
        children, element = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            if element is not None and element.role in quote:
                parts.append('"')
        elif isinstance(child, str):
            parts.append(child)
        elif child.role not in skip:
            if child.role in quote:
                parts.append('"')
            stack.append((iter(child.children), child))
    return "".join(parts)


def _name_region(root: Element) -> Element:
    # Without an explicit name region the whole fragment is the name
    return next(iter_elements(root, NAME), root)


def decompose_name(markup: str | None) -> NameParts:
    """Split a marked-up primary name into given names, surnames and preferred name."""
    root = parse_markup(markup)

    last_names = [text_of(node).strip() for node in iter_elements(root, SURNAME)]

    region_text = text_of(_name_region(root), skip=frozenset({SURNAME, NICKNAME}))
    first_names = region_text.split()

    preferred = next(iter_elements(root, PREFERRED), None)
    preferred_name = text_of(preferred).strip() if preferred is not None else ""

    return NameParts(
        first_names=first_names,
        last_names=last_names,
        preferred_name=preferred_name,
    )


def alternate_names(markup: str | None) -> list[str]:
    """Return the whitespace-separated tokens of an alternate name."""
    if not markup:
        return []
    return text_of(_name_region(parse_markup(markup))).split()


def plain_name(markup: str | None) -> str:
    """Return the display text of a marked-up name, without unknown-name placeholders."""
    text = text_of(parse_markup(markup), quote=frozenset({NICKNAME}))
    for placeholder in UNKNOWN_PLACEHOLDERS:
        text = text.replace(placeholder, "")
    return " ".join(text.split())
