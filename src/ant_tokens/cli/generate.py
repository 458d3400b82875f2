"""
Generation CLI commands.

Commands:
- css:    palette + component override stylesheets
- theme:  compiled light/dark Ant Design themes
- report: hardcoded colour report for the upstream stylesheet
- all:    css, theme and report in sequence
"""

from __future__ import annotations

from pathlib import Path

import typer

from ant_tokens.cli.utils import (
    ConfigOption,
    OutputOption,
    ProjectOption,
    TokensOption,
    VerboseOption,
    console,
    handle_pipeline_errors,
    prepare_config,
    report_written,
)
from ant_tokens.config import COMPILER_KINDS, BuildConfig


def _run_css(config: BuildConfig) -> None:
    from ant_tokens.pipeline import generate_css

    with handle_pipeline_errors():
        result = generate_css(config)

    collisions = result.projected.collisions
    if collisions:
        console.print(
            f"[yellow]{len(collisions)} duplicate variable(s) overwritten; "
            "see log for details[/yellow]"
        )
    report_written(result.written)


def _run_theme(config: BuildConfig) -> None:
    from ant_tokens.pipeline import generate_theme

    with handle_pipeline_errors():
        result = generate_theme(config)

    console.print(f"{len(result.light.mapped)} tokens mapped to theme variables")
    for token_path in result.light.unmapped:
        console.print(f"  [yellow]not found:[/yellow] {token_path}", highlight=False)
    if result.dark_set:
        console.print(f'Dark variant uses colour set "{result.dark_set}"', highlight=False)
    report_written(result.written)


def _run_report(config: BuildConfig) -> None:
    from ant_tokens.pipeline import generate_report

    with handle_pipeline_errors():
        result = generate_report(config)

    report = result.report
    console.print(
        f"{report.total_hardcoded_colors} hardcoded colours: "
        f"{report.matched_count} matched, {report.unmatched_count} unmatched"
    )
    report_written(result.written)


def css_command(
    project_root: Path = ProjectOption,
    config_file: Path | None = ConfigOption,
    tokens: Path | None = TokensOption,
    output_dir: Path | None = OutputOption,
    verbose: bool = VerboseOption,
) -> None:
    """Generate the palette and component override stylesheets."""
    _run_css(prepare_config(project_root, config_file, tokens, output_dir, verbose))


def theme_command(
    project_root: Path = ProjectOption,
    config_file: Path | None = ConfigOption,
    tokens: Path | None = TokensOption,
    output_dir: Path | None = OutputOption,
    compiler: str | None = typer.Option(
        None, "--compiler", help="Preprocessor backend: less (default) or sass"
    ),
    verbose: bool = VerboseOption,
) -> None:
    """Compile the light and dark Ant Design theme stylesheets."""
    if compiler and compiler.lower() not in COMPILER_KINDS:
        raise typer.BadParameter(
            f"expected one of {', '.join(COMPILER_KINDS)}", param_hint="--compiler"
        )
    config = prepare_config(project_root, config_file, tokens, output_dir, verbose)
    if compiler:
        config.theme.compiler = compiler.lower()
    _run_theme(config)


def report_command(
    project_root: Path = ProjectOption,
    config_file: Path | None = ConfigOption,
    tokens: Path | None = TokensOption,
    css: Path | None = typer.Option(
        None, "--css", help="Stylesheet to scan (default: ANTDESIGN_CSS or NuGet package)"
    ),
    verbose: bool = VerboseOption,
) -> None:
    """Report hardcoded colours in the Ant Design stylesheet and their tokens."""
    config = prepare_config(project_root, config_file, tokens, None, verbose)
    if css is not None:
        config.report.css = css
    _run_report(config)


def all_command(
    project_root: Path = ProjectOption,
    config_file: Path | None = ConfigOption,
    tokens: Path | None = TokensOption,
    output_dir: Path | None = OutputOption,
    skip_report: bool = typer.Option(False, "--skip-report", help="Do not run the colour report"),
    verbose: bool = VerboseOption,
) -> None:
    """Run css, theme and report in sequence, stopping at the first failure."""
    config = prepare_config(project_root, config_file, tokens, output_dir, verbose)
    _run_css(config)
    _run_theme(config)
    if not skip_report:
        _run_report(config)
