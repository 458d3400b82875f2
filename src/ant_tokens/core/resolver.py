"""
Reference resolution.

A token value of the form ``{Some.Token.Path}`` refers to another token.
Resolution follows such references through a :class:`TokenIndex` until a
literal is reached, failing on cycles and on paths missing from the index.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from .collector import Token
from .errors import CircularReferenceError, UnresolvedReferenceError

REFERENCE_PATTERN = re.compile(r"\{(.+)\}")


def reference_path(value: Any) -> str | None:
    """Return the inner path of a reference string, or None for literals."""
    if not isinstance(value, str):
        return None
    match = REFERENCE_PATTERN.fullmatch(value)
    return match.group(1) if match else None


def is_reference(value: Any) -> bool:
    return reference_path(value) is not None


def resolve_value(
    raw_value: Any,
    index: Mapping[str, Token],
    stack: Sequence[str] = (),
    *,
    fallback: Mapping[str, Token] | None = None,
) -> Any:
    """Follow references starting at ``raw_value`` until a literal is found.

    Args:
        raw_value: A token's raw value (literal or ``{path}`` reference).
        index: Primary path index.
        stack: Paths already being resolved by the caller.
        fallback: Secondary index consulted when ``index`` misses a path.

    Returns:
        The literal value at the end of the chain. Literals (including
        numbers) are returned unchanged.

    Raises:
        CircularReferenceError: If a path on the chain repeats.
        UnresolvedReferenceError: If a referenced path is in neither index.
    """
    visited = list(stack)
    value = raw_value

    while (path := reference_path(value)) is not None:
        if path in visited:
            raise CircularReferenceError([*visited, path])

        token = index.get(path)
        if token is None and fallback is not None:
            token = fallback.get(path)
        if token is None:
            raise UnresolvedReferenceError(path)

        visited.append(path)
        value = token.value

    return value


def lookup_resolved(
    path: str,
    index: Mapping[str, Token],
    *,
    fallback: Mapping[str, Token] | None = None,
) -> Any | None:
    """Resolve the token stored at ``path``; None if no token lives there."""
    token = index.get(path)
    if token is None:
        return None
    return resolve_value(token.value, index, fallback=fallback)
