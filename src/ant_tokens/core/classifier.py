"""
Variable classification.

Decides, for each token, which CSS custom property it produces and which
stylesheet it belongs to:

- ``palette``: numbered base colour shades (``--ant-blue-6``)
- ``overrides``: everything else (gradients, component tokens, globals)

Rules are an ordered table; the first rule whose predicate matches builds
the descriptor. A rule may also decide that a token produces no variable.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, MutableMapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

from .collector import COLORS_SEGMENT, TokenTree
from .naming import capitalize_first, is_numeric, to_kebab
from .resolver import resolve_value

logger = logging.getLogger(__name__)

VARIABLE_PREFIX = "--ant-"
COMPONENTS_SEGMENT = "Components"


class Bucket(StrEnum):
    """Stylesheet a generated variable is written to."""

    PALETTE = "palette"
    OVERRIDES = "overrides"


class VariableDescriptor(BaseModel):
    """Generated variable name and routing for one token."""

    model_config = ConfigDict(frozen=True)

    name: str
    bucket: Bucket
    component_name: str | None = None
    token_key: str | None = None


class ComponentTokenEntry(BaseModel):
    """A component-scoped override, kept for selector/property inference."""

    model_config = ConfigDict(frozen=True)

    component_name: str
    token_key: str
    variable_name: str
    token_type: str


# =============================================================================
# Rule table
# =============================================================================


@dataclass(frozen=True)
class TokenShape:
    """Path facts the rules match on, computed once per token."""

    path: tuple[str, ...]
    type: str

    @property
    def last(self) -> str:
        return self.path[-1] if self.path else ""

    @property
    def after_colors(self) -> tuple[str, ...] | None:
        """Segments following the first ``Colors`` segment, if any."""
        if COLORS_SEGMENT not in self.path:
            return None
        return self.path[self.path.index(COLORS_SEGMENT) + 1 :]

    @property
    def component(self) -> str | None:
        """Segment following the first ``Components`` segment, if any."""
        if COMPONENTS_SEGMENT not in self.path:
            return None
        position = self.path.index(COMPONENTS_SEGMENT)
        if position + 1 >= len(self.path):
            return None
        return self.path[position + 1]


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    matches: Callable[[TokenShape], bool]
    build: Callable[[TokenShape], VariableDescriptor | None]


def _is_palette_shade(shape: TokenShape) -> bool:
    after = shape.after_colors
    return (
        after is not None
        and shape.type == "color"
        and len(after) >= 3
        and after[0] == "Base"
        and is_numeric(shape.last)
    )


def _palette_descriptor(shape: TokenShape) -> VariableDescriptor:
    palette_name = shape.after_colors[1]  # type: ignore[index]
    return VariableDescriptor(
        name=f"{VARIABLE_PREFIX}{to_kebab(palette_name)}-{shape.last}",
        bucket=Bucket.PALETTE,
    )


def _is_gradient_endpoint(shape: TokenShape) -> bool:
    after = shape.after_colors
    return (
        after is not None
        and shape.type == "color"
        and len(after) > 0
        and after[0] == "Gradient"
        and shape.last in ("From", "To")
    )


def _gradient_descriptor(shape: TokenShape) -> VariableDescriptor:
    middle = shape.after_colors[1:-1]  # type: ignore[index]
    gradient_name = "-".join(part for part in map(to_kebab, middle) if part) or "default"
    return VariableDescriptor(
        name=f"{VARIABLE_PREFIX}gradient-{gradient_name}-{to_kebab(shape.last)}",
        bucket=Bucket.OVERRIDES,
    )


def _component_descriptor(shape: TokenShape) -> VariableDescriptor:
    component_name = shape.component or ""
    token_key = shape.last
    if token_key.lower().startswith(component_name.lower()):
        semantic_name = token_key
    else:
        semantic_name = f"{component_name}{capitalize_first(token_key)}"
    return VariableDescriptor(
        name=f"{VARIABLE_PREFIX}{to_kebab(semantic_name)}",
        bucket=Bucket.OVERRIDES,
        component_name=component_name,
        token_key=token_key,
    )


def _fallback_descriptor(shape: TokenShape) -> VariableDescriptor:
    return VariableDescriptor(
        name=f"{VARIABLE_PREFIX}{to_kebab(shape.last)}",
        bucket=Bucket.OVERRIDES,
    )


CLASSIFICATION_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule("palette-shade", _is_palette_shade, _palette_descriptor),
    ClassificationRule("gradient-endpoint", _is_gradient_endpoint, _gradient_descriptor),
    # Shade-like numeric keys outside the two rules above have no sensible name
    ClassificationRule("numeric-key", lambda shape: is_numeric(shape.last), lambda shape: None),
    ClassificationRule(
        "component-token", lambda shape: shape.component is not None, _component_descriptor
    ),
    ClassificationRule("fallback", lambda shape: True, _fallback_descriptor),
)


def match_rule(path: Sequence[str], token_type: str) -> ClassificationRule:
    """Return the first rule that applies to a token."""
    shape = TokenShape(path=tuple(path), type=token_type)
    return next(rule for rule in CLASSIFICATION_RULES if rule.matches(shape))


def classify(path: Sequence[str], token_type: str) -> VariableDescriptor | None:
    """Classify a token by path and type.

    Returns:
        The variable descriptor, or None when the token produces no variable.
    """
    shape = TokenShape(path=tuple(path), type=token_type)
    rule = match_rule(shape.path, token_type)
    descriptor = rule.build(shape)
    if descriptor is None or not descriptor.name.startswith(VARIABLE_PREFIX):
        return None
    return descriptor


# =============================================================================
# Variable maps
# =============================================================================


@dataclass
class VariableCollision:
    name: str
    previous: Any
    value: Any
    source_path: str


@dataclass
class VariableMap(MutableMapping[str, Any]):
    """Variable name -> resolved value; last write wins.

    Overwriting a name with a different value logs a warning and is
    recorded in ``collisions``.
    """

    label: str = "variables"
    collisions: list[VariableCollision] = field(default_factory=list)
    _values: dict[str, Any] = field(default_factory=dict, repr=False)

    def set(self, name: str, value: Any, source_path: Sequence[str] = ()) -> None:
        if name in self._values and self._values[name] != value:
            dotted = ".".join(source_path)
            logger.warning(
                "Duplicate %s variable %s from %s overwrote previous value.",
                self.label,
                name,
                dotted or "?",
            )
            self.collisions.append(
                VariableCollision(
                    name=name, previous=self._values[name], value=value, source_path=dotted
                )
            )
        self._values[name] = value

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __delitem__(self, name: str) -> None:
        del self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def sorted_items(self) -> list[tuple[str, Any]]:
        return sorted(self._values.items())


@dataclass
class ProjectedVariables:
    """Output of classifying and resolving every token in a tree."""

    palette: VariableMap = field(default_factory=lambda: VariableMap("palette"))
    overrides: VariableMap = field(default_factory=lambda: VariableMap("overrides"))
    component_entries: list[ComponentTokenEntry] = field(default_factory=list)

    @property
    def collisions(self) -> list[VariableCollision]:
        return [*self.palette.collisions, *self.overrides.collisions]


def project_variables(tree: TokenTree) -> ProjectedVariables:
    """Resolve and classify every token of ``tree`` in document order.

    Raises:
        CircularReferenceError: From resolution.
        UnresolvedReferenceError: From resolution.
    """
    projected = ProjectedVariables()

    for token in tree.tokens:
        resolved = resolve_value(token.value, tree.index)
        descriptor = classify(token.path, token.type)
        if descriptor is None:
            continue

        if descriptor.bucket is Bucket.PALETTE:
            projected.palette.set(descriptor.name, resolved, token.path)
            continue

        projected.overrides.set(descriptor.name, resolved, token.path)
        if descriptor.component_name and descriptor.token_key:
            projected.component_entries.append(
                ComponentTokenEntry(
                    component_name=descriptor.component_name,
                    token_key=descriptor.token_key,
                    variable_name=descriptor.name,
                    token_type=token.type,
                )
            )

    logger.info(
        "Projected %d palette and %d override variables (%d component tokens)",
        len(projected.palette),
        len(projected.overrides),
        len(projected.component_entries),
    )
    return projected


def project_palette(tree: TokenTree) -> VariableMap:
    """Resolve only the palette shades of ``tree``.

    Tokens that classify into any other bucket are never resolved, so a
    broken reference in a component or override token leaves the palette
    unaffected.
    """
    palette = VariableMap("palette")
    for token in tree.tokens:
        descriptor = classify(token.path, token.type)
        if descriptor is None or descriptor.bucket is not Bucket.PALETTE:
            continue
        palette.set(descriptor.name, resolve_value(token.value, tree.index), token.path)
    return palette
