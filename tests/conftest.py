"""Shared pytest fixtures for ant-tokens tests."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from ant_tokens.config import BuildConfig, OutputConfig, ReportConfig, ThemeConfig
from ant_tokens.core.collector import TokenTree, collect_tokens


def _token(value: Any, token_type: str) -> dict[str, Any]:
    return {"value": value, "type": token_type}


_SAMPLE_DOCUMENT: dict[str, Any] = {
    "Global": {
        "Colors": {
            "Base": {
                "Blue": {
                    "1": _token("#e6f4ff", "color"),
                    "3": _token("#91caff", "color"),
                    "6": _token("#1677ff", "color"),
                    "7": _token("#0958d9", "color"),
                },
                "Seablue": {
                    "1": _token("#E6FFFB", "color"),
                    "3": _token("#87e8de", "color"),
                    "7": _token("#08979c", "color"),
                },
            },
            "Gradient": {
                "Hero": {
                    "From": _token("{Colors.Base.Blue.1}", "color"),
                    "To": _token("{Colors.Base.Blue.6}", "color"),
                },
            },
            "Semantic": {
                "Primary": {"colorPrimary": _token("{Colors.Base.Blue.6}", "color")},
                "Error": {"colorError": _token("#ff4d4f", "color")},
            },
            "Neutral": {
                "Text": {"colorText": _token("rgba(0, 0, 0, 0.88)", "color")},
                "Bg": {"colorBgContainer": _token("#ffffff", "color")},
            },
        },
        "Typography": {
            "Font Family": {"fontFamily": _token("Inter", "text")},
            "Font Size": {"fontSize": _token("16px", "dimension")},
            "Line Height": {"lineHeight": _token("24px", "dimension")},
            "Font Weight": {"fontWeightStrong": _token("600px", "number")},
        },
        "Border Radius": {"borderRadius": _token("6px", "dimension")},
    },
    "Components": {
        "Tabs": {"colorBg": _token("{Colors.Base.Blue.1}", "color")},
        "Table": {
            "headerBg": _token("#fafafa", "color"),
            "7": _token("4", "dimension"),
        },
        "Button": {
            "buttonPaddingInline": _token("15px", "dimension"),
            "opacityLoading": _token(0.65, "opacity"),
            "contentFontWeight": _token("{Typography.Font Weight.fontWeightStrong}", "other"),
        },
    },
}


@pytest.fixture
def sample_document() -> dict[str, Any]:
    """A small Figma Tokens export with references, components and palettes."""
    return copy.deepcopy(_SAMPLE_DOCUMENT)


@pytest.fixture
def sample_tree(sample_document: dict[str, Any]) -> TokenTree:
    return collect_tokens(sample_document)


@pytest.fixture
def project_dir(tmp_path: Path, sample_document: dict[str, Any]) -> Path:
    """Project root containing tokens.json."""
    (tmp_path / "tokens.json").write_text(json.dumps(sample_document), encoding="utf-8")
    return tmp_path


@pytest.fixture
def build_config(project_dir: Path) -> BuildConfig:
    """Config writing into <project>/out and reading sources from <project>/less."""
    return BuildConfig(
        project_root=project_dir,
        tokens=Path("tokens.json"),
        output=OutputConfig(dir=Path("out")),
        theme=ThemeConfig(source_dir=project_dir / "less"),
        report=ReportConfig(css=Path("vendor/ant.css"), output=Path("out/report.json")),
    )
