"""
CSS generation for projected token variables.

Produces the palette stylesheet (``:root`` block of ``--ant-<palette>-<shade>``
properties) and the overrides stylesheet (``:root`` block plus generated
component rules and tag preset rules).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .classifier import ComponentTokenEntry, ProjectedVariables
from .inference import build_component_rules

GENERATOR_NAME = "ant-tokens"

# Ant Design tag preset -> palette whose shades 1/3/7 style it
TAG_PRESET_PALETTES: dict[str, str] = {
    "blue": "seablue",
    "cyan": "aquamarine",
    "green": "green",
    "red": "red",
    "orange": "orange",
    "purple": "purple",
    "pink": "pink",
    "yellow": "yellow",
}


def render_root_block(
    variables: Mapping[str, Any],
    header_label: str,
    extra_blocks: Iterable[str] = (),
) -> str:
    """
    Render variables as a ``:root`` block followed by optional extra blocks.

    Args:
        variables: Variable name -> value
        header_label: Label placed in the generated-file comment
        extra_blocks: Additional CSS appended after a blank line; blank
            blocks are skipped

    Returns:
        CSS text ending in a newline
    """
    lines: list[str] = [f"/* Generated by {GENERATOR_NAME} ({header_label}) */", ":root {"]

    for name, value in sorted(variables.items()):
        lines.append(f"  {name}: {css_value(value)};")

    lines.append("}")

    for block in extra_blocks:
        if block and block.strip():
            lines.append("")
            lines.append(block.strip())

    lines.append("")
    return "\n".join(lines)


def render_component_overrides(entries: Iterable[ComponentTokenEntry]) -> str:
    """
    Render ``selector { property: var(--ant-...) !important; }`` rules.

    Returns:
        CSS text, or an empty string when there are no component tokens
    """
    entries = list(entries)
    if not entries:
        return ""

    rules = build_component_rules(entries)
    lines = ["/* Generated component overrides */"]
    for selector in sorted(rules):
        lines.append(f"{selector} {{")
        for css_property, value in sorted(rules[selector].items()):
            lines.append(f"  {css_property}: {value} !important;")
        lines.append("}")
        lines.append("")

    return "\n".join(lines).strip()


def render_tag_preset_overrides(palette: Mapping[str, Any]) -> str:
    """
    Render ``.ant-tag-<preset>`` rules for presets whose palette has
    shades 1, 3 and 7.

    Returns:
        CSS text, or an empty string when no preset qualifies
    """
    lines = ["/* Generated tag preset overrides */"]
    has_any = False

    for preset, palette_name in TAG_PRESET_PALETTES.items():
        shade1 = f"--ant-{palette_name}-1"
        shade3 = f"--ant-{palette_name}-3"
        shade7 = f"--ant-{palette_name}-7"
        if not all(shade in palette for shade in (shade1, shade3, shade7)):
            continue

        has_any = True
        lines.append(f".ant-tag-{preset} {{")
        lines.append(f"  color: var({shade7}) !important;")
        lines.append(f"  background-color: var({shade1}) !important;")
        lines.append(f"  border-color: var({shade3}) !important;")
        lines.append("}")
        lines.append("")

    return "\n".join(lines).strip() if has_any else ""


def render_palette_css(palette: Mapping[str, Any]) -> str:
    return render_root_block(palette, "palette")


def render_overrides_css(projected: ProjectedVariables) -> str:
    return render_root_block(
        projected.overrides,
        "overrides",
        [
            render_component_overrides(projected.component_entries),
            render_tag_preset_overrides(projected.palette),
        ],
    )


def css_value(value: Any) -> str:
    """Format a resolved token value the way it was written in JSON."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if value is None:
        return "null"
    return str(value)
