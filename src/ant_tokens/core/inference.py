"""
CSS property and selector inference for component tokens.

Component tokens such as ``Components.Table.headerBg`` do not say which
CSS property they drive. The tables below guess one from substrings of the
token key, branching on the token's semantic type, and pick a selector for
the component (or one of its sub-elements). Keys that match nothing simply
produce no rule.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .classifier import ComponentTokenEntry
from .naming import to_kebab

KeyPredicate = Callable[[str], bool]


def _contains(*needles: str) -> KeyPredicate:
    return lambda key: any(needle in key for needle in needles)


def _contains_all(*needles: str) -> KeyPredicate:
    return lambda key: all(needle in key for needle in needles)


def _always(key: str) -> bool:
    return True


PropertyTable = tuple[tuple[KeyPredicate, str], ...]

_COLOR_PROPERTIES: PropertyTable = (
    (_contains("bg", "background"), "background-color"),
    (_contains("border"), "border-color"),
    (_contains("text", "color", "icon"), "color"),
)

_TEXT_PROPERTIES: PropertyTable = ((_contains("fontfamily"), "font-family"),)

# Order matters: "paddinginline" must win over "padding", "lineheight" over
# "height", and "size" is the catch-all.
_DIMENSION_PROPERTIES: PropertyTable = (
    (_contains("paddinginline"), "padding-inline"),
    (_contains("paddingblock"), "padding-block"),
    (_contains("padding"), "padding"),
    (_contains("margin"), "margin"),
    (_contains("outline"), "outline-width"),
    (_contains_all("border", "radius"), "border-radius"),
    (_contains("radius"), "border-radius"),
    (_contains("linewidth", "borderwidth"), "border-width"),
    (_contains("fontweight"), "font-weight"),
    (_contains("fontsize"), "font-size"),
    (_contains("lineheight"), "line-height"),
    (_contains("height"), "height"),
    (_contains("width"), "width"),
    (_contains("gap"), "gap"),
    (_contains("size"), "font-size"),
)

_OPACITY_PROPERTIES: PropertyTable = ((_always, "opacity"),)

PROPERTY_TABLES: dict[str, PropertyTable] = {
    "color": _COLOR_PROPERTIES,
    "text": _TEXT_PROPERTIES,
    "dimension": _DIMENSION_PROPERTIES,
    "number": _DIMENSION_PROPERTIES,
    "opacity": _OPACITY_PROPERTIES,
}

SUB_ELEMENT_MARKERS: tuple[str, ...] = (
    "header",
    "footer",
    "content",
    "body",
    "item",
    "track",
    "tab",
    "panel",
)


def infer_property(token_key: str, token_type: str | None) -> str | None:
    """Guess the CSS property a component token drives.

    >>> infer_property("colorBg", "color")
    'background-color'
    >>> infer_property("paddingInline", "dimension")
    'padding-inline'
    """
    table = PROPERTY_TABLES.get(str(token_type or "").lower(), ())
    key = token_key.lower()
    for predicate, css_property in table:
        if predicate(key):
            return css_property
    return None


def component_class(component_name: str) -> str:
    return f".ant-{to_kebab(component_name)}"


def infer_selector(component_name: str, token_key: str) -> str:
    """Pick the component class, or a sub-element class when the key names one.

    >>> infer_selector("Table", "headerBg")
    '.ant-table-header'
    """
    base = component_class(component_name)
    key = token_key.lower()
    for marker in SUB_ELEMENT_MARKERS:
        if marker in key:
            return f"{base}-{marker}"
    return base


def build_component_rules(
    entries: Iterable[ComponentTokenEntry],
) -> dict[str, dict[str, str]]:
    """Group component tokens into ``selector -> {property: var(...)}``.

    Entries without an inferable property are skipped. When two entries map
    to the same selector and property, the later one wins.
    """
    rules: dict[str, dict[str, str]] = {}
    for entry in entries:
        css_property = infer_property(entry.token_key, entry.token_type)
        if css_property is None:
            continue
        selector = infer_selector(entry.component_name, entry.token_key)
        rules.setdefault(selector, {})[css_property] = f"var({entry.variable_name})"
    return rules
