"""Tests for the hardcoded colour report."""

from __future__ import annotations

import json
from typing import Any

import pytest

from ant_tokens.core.errors import EmptyDocumentError
from ant_tokens.core.report import (
    HardcodedColorReport,
    build_report,
    collect_color_tokens,
    index_color_values,
    normalize_hex,
    scan_hex_colors,
)

_CSS = """
.ant-btn-primary { background: #1677FF; border-color: #1677ff; }
.ant-tabs { background: #E6F4FF; }
.ant-alert { color: #f00; }
.ant-link { color: #1677ff80; }
"""


class TestNormalizeHex:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("#FFF", "#ffffff"),
            ("#f0a8", "#ff00aa88"),
            ("#1677FF", "#1677ff"),
            ("#1677ff80", "#1677ff80"),
        ],
    )
    def test_valid(self, value: str, expected: str) -> None:
        assert normalize_hex(value) == expected

    def test_invalid(self) -> None:
        assert normalize_hex("1677ff") is None
        assert normalize_hex("#12345") is None
        assert normalize_hex("rgba(0, 0, 0, 0.88)") is None


class TestScanHexColors:
    def test_counts_normalised(self) -> None:
        counts = scan_hex_colors(_CSS)
        assert counts["#1677ff"] == 2
        assert counts["#e6f4ff"] == 1
        assert counts["#ff0000"] == 1
        assert counts["#1677ff80"] == 1

    def test_ignores_longer_runs(self) -> None:
        assert scan_hex_colors("a { color: #1234567; }") == {}


class TestColorTokens:
    def test_only_color_tokens(self, sample_document: dict[str, Any]) -> None:
        tree = collect_color_tokens(sample_document)
        assert all(token.type == "color" for token in tree.tokens)
        assert "Colors.Base.Blue.6" in tree.index
        # No set-name stripped alias outside the Colors segment
        assert "Tabs.colorBg" not in tree.index

    def test_no_color_tokens(self) -> None:
        with pytest.raises(EmptyDocumentError):
            collect_color_tokens({"gap": {"value": "8px", "type": "dimension"}})

    def test_index_color_values(self, sample_document: dict[str, Any]) -> None:
        values = index_color_values(collect_color_tokens(sample_document))
        assert values["#1677ff"] == [
            "Global.Colors.Base.Blue.6",
            "Global.Colors.Gradient.Hero.To",
            "Global.Colors.Semantic.Primary.colorPrimary",
        ]
        assert "rgba(0, 0, 0, 0.88)" not in values


class TestBuildReport:
    def test_matches_and_unmatched(self, sample_document: dict[str, Any]) -> None:
        tree = collect_color_tokens(sample_document)
        report = build_report("vendor/ant.css", _CSS, tree)

        assert report.total_hardcoded_colors == 4
        assert report.matched_count == 2
        assert report.unmatched_count == 2
        assert [m.hex for m in report.color_matches] == ["#1677ff", "#e6f4ff"]
        assert report.color_matches[0].count == 2
        assert [u.hex for u in report.unmatched] == ["#1677ff80", "#ff0000"]

    def test_json_uses_camel_case(self, sample_document: dict[str, Any]) -> None:
        tree = collect_color_tokens(sample_document)
        data = json.loads(build_report("ant.css", _CSS, tree).to_json())

        assert data["sourceCssPath"] == "ant.css"
        assert set(data) == {
            "sourceCssPath",
            "totalHardcodedColors",
            "matchedCount",
            "unmatchedCount",
            "colorMatches",
            "unmatched",
        }
        assert data["colorMatches"][1]["tokens"] == [
            "Global.Colors.Base.Blue.1",
            "Global.Colors.Gradient.Hero.From",
            "Components.Tabs.colorBg",
        ]

    def test_populate_by_alias(self) -> None:
        report = HardcodedColorReport.model_validate(
            {
                "sourceCssPath": "x.css",
                "totalHardcodedColors": 0,
                "matchedCount": 0,
                "unmatchedCount": 0,
            }
        )
        assert report.source_css_path == "x.css"
        assert report.color_matches == []
