"""
Hardcoded colour report.

Scans a third-party stylesheet for literal hex colours and correlates each
one with the colour tokens that resolve to the same value, so designers can
see which hardcoded colours are already covered by the token set.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .collector import TokenTree, collect_tokens
from .css import css_value
from .resolver import resolve_value

HEX_COLOR_PATTERN = re.compile(r"#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})\b")


class ColorMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    hex: str
    count: int
    tokens: list[str]


class UnmatchedColor(BaseModel):
    model_config = ConfigDict(frozen=True)

    hex: str
    count: int


class HardcodedColorReport(BaseModel):
    """Report document, serialised with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    source_css_path: str = Field(alias="sourceCssPath")
    total_hardcoded_colors: int = Field(alias="totalHardcodedColors")
    matched_count: int = Field(alias="matchedCount")
    unmatched_count: int = Field(alias="unmatchedCount")
    color_matches: list[ColorMatch] = Field(default_factory=list, alias="colorMatches")
    unmatched: list[UnmatchedColor] = Field(default_factory=list)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


def normalize_hex(value: str) -> str | None:
    """Lower-case a hex colour and expand the 3/4 digit short forms.

    Returns None for anything that is not a 3, 4, 6 or 8 digit hex colour.
    """
    hex_value = value.strip().lower()
    if not hex_value.startswith("#"):
        return None

    digits = hex_value[1:]
    if len(digits) in (3, 4):
        return "#" + "".join(ch * 2 for ch in digits)
    if len(digits) in (6, 8):
        return hex_value
    return None


def collect_color_tokens(document: Any) -> TokenTree:
    """Collect only ``color`` tokens, indexed by full and ``Colors``-onward path."""
    return collect_tokens(document, type_filter="color", strip_set_name=False)


def index_color_values(tree: TokenTree) -> dict[str, list[str]]:
    """Map each normalised resolved hex value to the token paths producing it."""
    value_to_tokens: dict[str, list[str]] = {}
    for token in tree.tokens:
        resolved = resolve_value(token.value, tree.index)
        normalized = normalize_hex(css_value(resolved))
        if normalized is None:
            continue
        value_to_tokens.setdefault(normalized, []).append(token.dotted_path)
    return value_to_tokens


def scan_hex_colors(css_text: str) -> Counter[str]:
    """Count normalised hex colour literals in a stylesheet."""
    counts: Counter[str] = Counter()
    for raw in HEX_COLOR_PATTERN.findall(css_text):
        normalized = normalize_hex(raw)
        if normalized is not None:
            counts[normalized] += 1
    return counts


def build_report(css_path: str, css_text: str, tree: TokenTree) -> HardcodedColorReport:
    """Correlate hex colours in ``css_text`` with the colour tokens of ``tree``."""
    value_to_tokens = index_color_values(tree)
    counts = scan_hex_colors(css_text)

    matches: list[ColorMatch] = []
    unmatched: list[UnmatchedColor] = []
    for hex_value, count in sorted(counts.items()):
        tokens = value_to_tokens.get(hex_value, [])
        if tokens:
            matches.append(ColorMatch(hex=hex_value, count=count, tokens=tokens))
        else:
            unmatched.append(UnmatchedColor(hex=hex_value, count=count))

    return HardcodedColorReport(
        source_css_path=css_path,
        total_hardcoded_colors=len(counts),
        matched_count=len(matches),
        unmatched_count=len(unmatched),
        color_matches=matches,
        unmatched=unmatched,
    )
