"""
Generation runs.

Each function performs one batch run end to end: load the token document,
collect and resolve tokens, project them, write the results. Any error
aborts the run; files written by earlier runs are left in place.

- ``generate_css``: palette + component override stylesheets
- ``generate_theme``: light and dark compiled Ant Design themes + palette
- ``generate_report``: hardcoded colour report for a third-party stylesheet
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .config import BuildConfig
from .core.classifier import ProjectedVariables, project_palette, project_variables
from .core.collector import collect_tokens
from .core.css import render_overrides_css, render_palette_css
from .core.errors import DocumentReadError
from .core.loader import load_document, read_text, write_output
from .core.preprocessor import StylesheetCompiler, create_compiler
from .core.report import HardcodedColorReport, build_report, collect_color_tokens
from .core.theme import ThemeVariables, build_dark_variables, build_theme_variables, find_dark_set

logger = logging.getLogger(__name__)


@dataclass
class CssResult:
    projected: ProjectedVariables
    written: list[Path] = field(default_factory=list)


@dataclass
class ThemeResult:
    light: ThemeVariables
    dark_variables: dict[str, str]
    dark_set: str | None = None
    written: list[Path] = field(default_factory=list)


@dataclass
class ReportResult:
    report: HardcodedColorReport
    written: list[Path] = field(default_factory=list)


def project_document(config: BuildConfig) -> ProjectedVariables:
    """Load the token document and project it without writing anything."""
    document = load_document(config.tokens_path)
    return project_variables(collect_tokens(document))


def generate_css(config: BuildConfig) -> CssResult:
    """Write the palette and overrides stylesheets.

    Raises:
        TokenPipelineError: On any read, resolution or write failure.
    """
    projected = project_document(config)

    # Render both before writing so a failure leaves no partial pair
    palette_css = render_palette_css(projected.palette)
    overrides_css = render_overrides_css(projected)

    result = CssResult(projected=projected)
    result.written.append(write_output(config.palette_path, palette_css))
    result.written.append(write_output(config.overrides_path, overrides_css))
    return result


def generate_theme(
    config: BuildConfig,
    compiler: StylesheetCompiler | None = None,
) -> ThemeResult:
    """Compile the light and dark Ant Design themes and refresh the palette.

    The light theme is compiled first; the dark variables are derived from
    the light ones.
    """
    document = load_document(config.tokens_path)
    tree = collect_tokens(document)
    compiler = compiler or create_compiler(config.theme)

    light = build_theme_variables(tree)
    logger.info("%d tokens mapped to theme variables", len(light.mapped))

    light_css = compiler.compile(light.variables)
    result = ThemeResult(light=light, dark_variables={})
    result.written.append(write_output(config.light_theme_path, light_css))

    dark_set = find_dark_set(document) if isinstance(document, dict) else None
    if dark_set is not None:
        logger.info('Found dark colour set: "%s"', dark_set.set_key)
        result.dark_set = dark_set.set_key
    else:
        logger.info('No "Colors/Dark" set in token document; using default dark neutrals')

    result.dark_variables = build_dark_variables(light.variables, document, tree, dark_set)
    dark_css = compiler.compile(result.dark_variables)
    result.written.append(write_output(config.dark_theme_path, dark_css))

    palette_css = render_palette_css(project_palette(tree))
    result.written.append(write_output(config.palette_path, palette_css))
    return result


def generate_report(config: BuildConfig) -> ReportResult:
    """Scan the configured third-party stylesheet and write the colour report."""
    document = load_document(config.tokens_path)
    tree = collect_color_tokens(document)

    css_path = config.report_css_path
    if not css_path.is_file():
        raise DocumentReadError(
            f"AntDesign CSS not found at {css_path}. Set ANTDESIGN_CSS to the file path."
        )
    css_text = read_text(css_path, label="AntDesign CSS")

    report = build_report(str(css_path), css_text, tree)
    logger.info(
        "%d hardcoded colours: %d matched, %d unmatched",
        report.total_hardcoded_colors,
        report.matched_count,
        report.unmatched_count,
    )

    written = write_output(config.report_path, report.to_json())
    return ReportResult(report=report, written=[written])
