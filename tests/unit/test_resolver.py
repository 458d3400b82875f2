"""Tests for reference resolution."""

from __future__ import annotations

from typing import Any

import pytest

from ant_tokens.core.collector import TokenTree, collect_tokens
from ant_tokens.core.errors import CircularReferenceError, UnresolvedReferenceError
from ant_tokens.core.resolver import (
    is_reference,
    lookup_resolved,
    reference_path,
    resolve_value,
)


def _tree(**values: Any) -> TokenTree:
    return collect_tokens({"Set": {k: {"value": v, "type": "other"} for k, v in values.items()}})


class TestReferencePath:
    def test_reference(self) -> None:
        assert reference_path("{Colors.Base.Blue.6}") == "Colors.Base.Blue.6"

    def test_literal(self) -> None:
        assert reference_path("#1677ff") is None

    def test_partial_reference_is_literal(self) -> None:
        assert reference_path("calc({gap} * 2)") is None

    def test_non_string(self) -> None:
        assert reference_path(4) is None
        assert not is_reference(None)

    def test_empty_braces(self) -> None:
        assert reference_path("{}") is None


class TestResolveValue:
    def test_literal_identity(self) -> None:
        tree = _tree(a="x")
        assert resolve_value("#ffffff", tree.index) == "#ffffff"
        assert resolve_value(0.65, tree.index) == 0.65

    def test_chain(self) -> None:
        tree = _tree(a="{b}", b="{c}", c="#000000")
        assert resolve_value("{a}", tree.index) == "#000000"

    def test_self_reference(self) -> None:
        tree = _tree(a="{a}")
        with pytest.raises(CircularReferenceError) as exc_info:
            resolve_value("{a}", tree.index)
        assert exc_info.value.chain == ("a", "a")

    def test_cycle_reports_chain(self) -> None:
        tree = _tree(a="{b}", b="{a}")
        with pytest.raises(CircularReferenceError, match="a -> b -> a"):
            resolve_value("{a}", tree.index)

    def test_stack_seeds_cycle_detection(self) -> None:
        tree = _tree(a="{b}", b="1")
        with pytest.raises(CircularReferenceError):
            resolve_value("{b}", tree.index, stack=["b"])

    def test_missing(self) -> None:
        tree = _tree(a="{missing}")
        with pytest.raises(UnresolvedReferenceError) as exc_info:
            resolve_value("{a}", tree.index)
        assert exc_info.value.path == "missing"
        assert "Unresolved reference: missing" in str(exc_info.value)

    def test_fallback_index(self) -> None:
        primary = _tree(a="{b}")
        fallback = _tree(b="#141414")
        assert resolve_value("{a}", primary.index, fallback=fallback.index) == "#141414"

    def test_primary_wins_over_fallback(self) -> None:
        primary = _tree(a="{b}", b="primary")
        fallback = _tree(b="fallback")
        assert resolve_value("{a}", primary.index, fallback=fallback.index) == "primary"


class TestLookupResolved:
    def test_found(self, sample_tree: TokenTree) -> None:
        value = lookup_resolved("Colors.Semantic.Primary.colorPrimary", sample_tree.index)
        assert value == "#1677ff"

    def test_absent(self, sample_tree: TokenTree) -> None:
        assert lookup_resolved("Colors.Semantic.Success.colorSuccess", sample_tree.index) is None
