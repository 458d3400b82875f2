"""Identifier helpers shared by the classifier and the CSS projections."""

from __future__ import annotations

import re

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[_\s]+")
_INVALID = re.compile(r"[^a-zA-Z0-9-]")
_HYPHEN_RUNS = re.compile(r"-+")
_NUMERIC = re.compile(r"[0-9]+")


def to_kebab(text: object) -> str:
    """Convert a token path segment to kebab-case.

    ``fontSizeHeading1`` -> ``font-size-heading1``, ``paddingXXS`` ->
    ``padding-xxs``, ``Font Size`` -> ``font-size``.
    """
    result = _CAMEL_BOUNDARY.sub(r"\1-\2", str(text))
    result = _SEPARATORS.sub("-", result)
    result = _INVALID.sub("-", result)
    result = _HYPHEN_RUNS.sub("-", result)
    return result.strip("-").lower()


def is_numeric(text: object) -> bool:
    """True for strings made only of ASCII digits (shade indexes)."""
    return _NUMERIC.fullmatch(str(text)) is not None


def capitalize_first(text: str) -> str:
    # str.capitalize() would lowercase the rest of a camelCase key
    return text[:1].upper() + text[1:]
