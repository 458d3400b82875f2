"""
Token tree collection.

Flattens a nested token document (groups of groups terminating in
``{"value": ..., "type": ...}`` leaves) into an ordered token list and a
path index that accepts the reference spellings used by the exporter:

- the full dotted path (``Global.Colors.Base.Blue.6``)
- the path without its top-level set name (``Colors.Base.Blue.6``)
- the path starting at a ``Colors`` segment, wherever it occurs
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict

from .errors import EmptyDocumentError

logger = logging.getLogger(__name__)

COLORS_SEGMENT = "Colors"


class Token(BaseModel):
    """A single ``{value, type}`` leaf and where it lives in the tree."""

    model_config = ConfigDict(frozen=True)

    path: tuple[str, ...]
    value: Any
    type: str

    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)

    @property
    def key(self) -> str:
        """Final path segment."""
        return self.path[-1] if self.path else ""


class TokenIndex(Mapping[str, Token]):
    """Read-only path -> token lookup with several keys per token.

    Later tokens overwrite earlier ones on key collisions; every token is
    still reachable by its full dotted path unless two tokens share one.
    """

    def __init__(self, tokens: Iterable[Token] = (), *, strip_set_name: bool = True):
        self._entries: dict[str, Token] = {}
        for token in tokens:
            for alias in index_keys(token.path, strip_set_name=strip_set_name):
                self._entries[alias] = token

    def __getitem__(self, path: str) -> Token:
        return self._entries[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"TokenIndex({len(self._entries)} keys)"


@dataclass(frozen=True)
class TokenTree:
    """Collected tokens in document order plus their index."""

    tokens: tuple[Token, ...]
    index: TokenIndex


def index_keys(path: tuple[str, ...], *, strip_set_name: bool = True) -> list[str]:
    """Return the lookup keys for a token path, most specific first."""
    keys = [".".join(path)]
    if strip_set_name and len(path) > 1:
        keys.append(".".join(path[1:]))
    if COLORS_SEGMENT in path:
        keys.append(".".join(path[path.index(COLORS_SEGMENT) :]))
    return keys


def is_leaf(node: Any) -> bool:
    """A leaf is a mapping carrying both ``value`` and ``type``."""
    return isinstance(node, dict) and "value" in node and "type" in node


def iter_tokens(
    node: Any,
    path: tuple[str, ...] = (),
    *,
    type_filter: str | None = None,
) -> Iterator[Token]:
    """Depth-first walk yielding leaves in document order.

    Scalars and lists found where a group is expected are skipped. With
    ``type_filter`` set, only leaves of that type end descent; a
    ``{value, type}`` node of another type is walked like a group, so a
    matching leaf nested inside its value is still found.
    """
    stack: list[tuple[Any, tuple[str, ...]]] = [(node, path)]
    while stack:
        current, current_path = stack.pop()
        if not isinstance(current, dict):
            continue

        if is_leaf(current) and (type_filter is None or current["type"] == type_filter):
            yield Token(path=current_path, value=current["value"], type=str(current["type"]))
            continue

        # Reverse so the pop order follows document order
        children = [(child, current_path + (str(key),)) for key, child in current.items()]
        stack.extend(reversed(children))


def build_index(tokens: Iterable[Token], *, strip_set_name: bool = True) -> TokenIndex:
    return TokenIndex(tokens, strip_set_name=strip_set_name)


def collect_tokens(
    document: Any,
    *,
    type_filter: str | None = None,
    strip_set_name: bool = True,
) -> TokenTree:
    """Collect every token in ``document`` and index it.

    Args:
        document: Parsed token document (usually the result of ``json.load``).
        type_filter: Only collect leaves whose ``type`` equals this tag.
        strip_set_name: Also index each token without its first path segment.

    Returns:
        TokenTree with tokens in traversal order.

    Raises:
        EmptyDocumentError: If no tokens were found.
    """
    tokens = tuple(iter_tokens(document, type_filter=type_filter))
    if not tokens:
        kind = f"{type_filter} tokens" if type_filter else "tokens"
        raise EmptyDocumentError(f"No {kind} found in token document.")

    index = build_index(tokens, strip_set_name=strip_set_name)
    logger.debug("Collected %d tokens (%d index keys)", len(tokens), len(index))
    return TokenTree(tokens=tokens, index=index)
