"""
Theme variables for the Ant Design stylesheet preprocessor.

Maps resolved design tokens onto the preprocessor variables the Ant Design
sources expect (``@blue-6``, ``@font-size-base`` ...) and derives the dark
variant:

1. Start from the light variables.
2. If the document has a ``"<n>. Colors/Dark"`` set, re-resolve every
   semantic/neutral colour mapping from that set.
3. Overlay ``DARK_NEUTRAL_OVERRIDES``; these always win.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .collector import TokenTree, collect_tokens
from .css import css_value
from .errors import EmptyDocumentError
from .resolver import lookup_resolved, resolve_value

logger = logging.getLogger(__name__)

BASE_FONT_SIZE_PATH = "Typography.Font Size.fontSize"
DEFAULT_BASE_FONT_SIZE = 14.0

COLOR_SET_PATTERN = re.compile(r"^\d+\.\s*Colors/(.+)$")
DARK_SET_NAME = "dark"
DEFAULT_SET_NAME = "light"

DARK_REMAPPED_PREFIXES = ("Colors.Semantic.", "Colors.Neutral.")


# =============================================================================
# Value transforms
# =============================================================================


def strip_px(value: Any, tree: TokenTree | None = None) -> str:
    return re.sub(r"px$", "", css_value(value))


def font_family(value: Any, tree: TokenTree | None = None) -> str:
    """Quote a single family name and add a generic fallback."""
    return _with_generic_family(value, "sans-serif")


def font_family_code(value: Any, tree: TokenTree | None = None) -> str:
    return _with_generic_family(value, "monospace")


def line_height_ratio(value: Any, tree: TokenTree | None = None) -> str:
    """Convert a pixel line height to a unitless ratio of the base font size."""
    px = _parse_float(value)
    font_size = DEFAULT_BASE_FONT_SIZE
    if tree is not None:
        base = lookup_resolved(BASE_FONT_SIZE_PATH, tree.index)
        # Missing, 0 and "" all fall back to the default base size
        if base:
            font_size = _parse_float(base)

    if px is None or font_size is None or font_size == 0:
        return css_value(value)
    return f"{px / font_size:.4f}"


def _with_generic_family(value: Any, generic: str) -> str:
    name = css_value(value).strip()
    if "," in name:
        return name
    return f"'{name}', {generic}"


def _parse_float(value: Any) -> float | None:
    # Leading-number parse: "22px" -> 22.0
    match = re.match(r"\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)", css_value(value))
    if not match:
        return None
    return float(match.group(1))


Transform = Callable[[Any, TokenTree | None], str]


# =============================================================================
# Token -> preprocessor variable table
# =============================================================================


@dataclass(frozen=True)
class ThemeMapping:
    """One token path (without set name) feeding one preprocessor variable."""

    token_path: str
    variable: str
    transform: Transform | None = None

    def apply(self, value: Any, tree: TokenTree | None = None) -> str:
        if self.transform is None:
            return css_value(value)
        return self.transform(value, tree)


THEME_VARIABLE_MAP: tuple[ThemeMapping, ...] = (
    # Semantic colours override the base palette variables
    ThemeMapping("Colors.Semantic.Primary.colorPrimary", "blue-6"),
    ThemeMapping("Colors.Semantic.Success.colorSuccess", "green-6"),
    ThemeMapping("Colors.Semantic.Error.colorError", "red-5"),
    ThemeMapping("Colors.Semantic.Warning.colorWarning", "gold-6"),
    # Neutral colours
    ThemeMapping("Colors.Neutral.Text.colorText", "text-color"),
    ThemeMapping("Colors.Neutral.Text.colorTextSecondary", "text-color-secondary"),
    ThemeMapping("Colors.Neutral.Bg.colorBgContainer", "component-background"),
    ThemeMapping("Colors.Neutral.Bg.colorBgLayout", "layout-body-background"),
    ThemeMapping("Colors.Neutral.Border.colorBorder", "border-color-base"),
    ThemeMapping("Colors.Neutral.Text.colorText", "heading-color"),
    # Typography
    ThemeMapping("Typography.Font Family.fontFamily", "font-family", font_family),
    ThemeMapping("Typography.Font Family.fontFamilyCode", "code-family", font_family_code),
    ThemeMapping("Typography.Font Size.fontSize", "font-size-base"),
    ThemeMapping("Typography.Font Size.fontSizeLG", "font-size-lg"),
    ThemeMapping("Typography.Font Size.fontSizeSM", "font-size-sm"),
    ThemeMapping("Typography.Font Size.fontSizeHeading1", "heading-1-size"),
    ThemeMapping("Typography.Font Size.fontSizeHeading2", "heading-2-size"),
    ThemeMapping("Typography.Font Size.fontSizeHeading3", "heading-3-size"),
    ThemeMapping(
        "Typography.Font Weight.fontWeightStrong", "typography-title-font-weight", strip_px
    ),
    ThemeMapping("Typography.Line Height.lineHeight", "line-height-base", line_height_ratio),
    # Border radius
    ThemeMapping("Border Radius.borderRadius", "border-radius-base"),
    ThemeMapping("Border Radius.borderRadiusSM", "border-radius-sm"),
    # Padding
    ThemeMapping("Space.Padding.paddingLG", "padding-lg"),
    ThemeMapping("Space.Padding.padding", "padding-md"),
    ThemeMapping("Space.Padding.paddingSM", "padding-sm"),
    ThemeMapping("Space.Padding.paddingXS", "padding-xs"),
    ThemeMapping("Space.Padding.paddingXXS", "padding-xss"),
    # Margin
    ThemeMapping("Space.Margin.marginLG", "margin-lg"),
    ThemeMapping("Space.Margin.marginMD", "margin-md"),
    ThemeMapping("Space.Margin.marginSM", "margin-sm"),
    ThemeMapping("Space.Margin.marginXS", "margin-xs"),
    ThemeMapping("Space.Margin.marginXXS", "margin-xss"),
    # Control heights
    ThemeMapping("Size.Height.controlHeight", "height-base"),
    ThemeMapping("Size.Height.controlHeightLG", "height-lg"),
    ThemeMapping("Size.Height.controlHeightSM", "height-sm"),
    # Line width
    ThemeMapping("Size.Line Width.lineWidth", "border-width-base"),
)

# Standard Ant Design dark neutrals, applied over every dark variant
DARK_NEUTRAL_OVERRIDES: dict[str, str] = {
    "body-background": "#141414",
    "component-background": "#1f1f1f",
    "popover-background": "#1f1f1f",
    "text-color": "rgba(255, 255, 255, 0.85)",
    "text-color-secondary": "rgba(255, 255, 255, 0.65)",
    "text-color-inverse": "rgba(0, 0, 0, 0.85)",
    "heading-color": "rgba(255, 255, 255, 0.85)",
    "border-color-base": "#434343",
    "border-color-split": "#303030",
    "background-color-light": "rgba(255, 255, 255, 0.04)",
    "background-color-base": "rgba(255, 255, 255, 0.04)",
    "item-hover-bg": "rgba(255, 255, 255, 0.04)",
    "item-active-bg": "rgba(255, 255, 255, 0.08)",
    "disabled-color": "rgba(255, 255, 255, 0.30)",
    "disabled-bg": "rgba(255, 255, 255, 0.08)",
    "layout-body-background": "#141414",
    "layout-header-background": "#1f1f1f",
    "layout-sider-background": "#1f1f1f",
    "table-header-bg": "#1d1d1d",
    "table-body-sort-bg": "rgba(255, 255, 255, 0.04)",
    "table-row-hover-bg": "rgba(255, 255, 255, 0.04)",
    "table-expanded-row-bg": "#1d1d1d",
    "input-bg": "transparent",
    "select-background": "transparent",
    "shadow-color": "rgba(0, 0, 0, 0.45)",
    "skeleton-color": "rgba(255, 255, 255, 0.08)",
}


# =============================================================================
# Light variables
# =============================================================================


@dataclass(frozen=True)
class MappedVariable:
    token_path: str
    variable: str
    value: str


@dataclass
class ThemeVariables:
    """Preprocessor variables plus a record of which mappings applied."""

    variables: dict[str, str] = field(default_factory=dict)
    mapped: list[MappedVariable] = field(default_factory=list)
    unmapped: list[str] = field(default_factory=list)


def build_theme_variables(
    tree: TokenTree,
    mappings: tuple[ThemeMapping, ...] = THEME_VARIABLE_MAP,
) -> ThemeVariables:
    """Resolve every mapped token into a preprocessor variable map.

    Token paths missing from the document are reported in ``unmapped``;
    they are not an error.
    """
    result = ThemeVariables()

    for mapping in mappings:
        resolved = lookup_resolved(mapping.token_path, tree.index)
        if resolved is None:
            result.unmapped.append(mapping.token_path)
            continue

        value = mapping.apply(resolved, tree)
        result.variables[mapping.variable] = value
        result.mapped.append(MappedVariable(mapping.token_path, mapping.variable, value))

    for variable in result.mapped:
        logger.debug("@%s: %s  (from %s)", variable.variable, variable.value, variable.token_path)
    if result.unmapped:
        logger.warning(
            "%d theme tokens not found in document: %s",
            len(result.unmapped),
            ", ".join(result.unmapped),
        )
    return result


# =============================================================================
# Dark variant
# =============================================================================


@dataclass(frozen=True)
class ColorSet:
    """An extra top-level colour set such as ``"1. Colors/Dark"``."""

    name: str
    set_key: str


def detect_color_sets(document: Mapping[str, Any]) -> list[ColorSet]:
    """List top-level colour sets other than the default light one."""
    sets: list[ColorSet] = []
    for key in document:
        match = COLOR_SET_PATTERN.match(str(key))
        if not match:
            continue
        name = match.group(1).lower()
        if name == DEFAULT_SET_NAME:
            continue
        sets.append(ColorSet(name=name, set_key=str(key)))
    return sets


def find_dark_set(document: Mapping[str, Any]) -> ColorSet | None:
    return next((s for s in detect_color_sets(document) if s.name == DARK_SET_NAME), None)


def build_dark_variables(
    light_variables: Mapping[str, str],
    document: Mapping[str, Any],
    tree: TokenTree,
    dark_set: ColorSet | None = None,
    mappings: tuple[ThemeMapping, ...] = THEME_VARIABLE_MAP,
) -> dict[str, str]:
    """Derive the dark variable map from the light one.

    Args:
        light_variables: Result of :func:`build_theme_variables`.
        document: Raw token document (needed to walk the dark set).
        tree: Tree collected from the whole document; dark-set references
            that miss the dark set are resolved against it.
        dark_set: Colour set to re-resolve semantic/neutral colours from.

    Returns:
        Variables for the dark compile; every ``DARK_NEUTRAL_OVERRIDES`` key
        is present with its fixed value.
    """
    dark_variables = dict(light_variables)

    if dark_set is not None:
        set_tree = _collect_set(document.get(dark_set.set_key))
        if set_tree is not None:
            for mapping in mappings:
                if not mapping.token_path.startswith(DARK_REMAPPED_PREFIXES):
                    continue
                token = set_tree.index.get(mapping.token_path)
                if token is None:
                    continue
                value = resolve_value(token.value, set_tree.index, fallback=tree.index)
                dark_variables[mapping.variable] = mapping.apply(value, tree)

    dark_variables.update(DARK_NEUTRAL_OVERRIDES)
    return dark_variables


def _collect_set(node: Any) -> TokenTree | None:
    try:
        return collect_tokens(node)
    except EmptyDocumentError:
        logger.warning("Dark colour set contains no tokens; using default dark neutrals only")
        return None
