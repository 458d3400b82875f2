"""Shared CLI helpers: version display, logging setup, config and error handling."""

from __future__ import annotations

import logging
import os
import platform
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from ant_tokens.config import BuildConfig, load_config
from ant_tokens.core.errors import TokenPipelineError

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

ProjectOption = typer.Option(Path("."), "--project", "-p", help="Project root directory")
ConfigOption = typer.Option(
    None, "--config", "-c", help="Config file (default: <project>/ant-tokens.toml)"
)
TokensOption = typer.Option(None, "--tokens", "-t", help="Token document (default: tokens.json)")
OutputOption = typer.Option(None, "--output", "-o", help="Directory for generated CSS")
VerboseOption = typer.Option(False, "--verbose", help="Enable debug logging")


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        from ant_tokens import __version__

        typer.echo(f"ant-tokens {__version__}")
        typer.echo(
            f"Python {platform.python_version()} ({platform.python_implementation()})"
        )
        raise typer.Exit()


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging once per CLI invocation.

    ``--verbose`` forces DEBUG; otherwise ``LOG_LEVEL`` (default INFO) applies.
    """
    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.getenv("LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def resolve_config(
    project_root: Path,
    config_file: Path | None = None,
    tokens: Path | None = None,
    output_dir: Path | None = None,
) -> BuildConfig:
    """Load configuration and apply command line overrides."""
    with handle_pipeline_errors():
        config = load_config(project_root.resolve(), config_file)
    if tokens is not None:
        config.tokens = tokens
    if output_dir is not None:
        config.output.dir = output_dir
    return config


def prepare_config(
    project_root: Path,
    config_file: Path | None,
    tokens: Path | None,
    output_dir: Path | None,
    verbose: bool,
) -> BuildConfig:
    """Configure logging, then load the build configuration."""
    setup_logging(verbose)
    return resolve_config(project_root, config_file, tokens, output_dir)


@contextmanager
def handle_pipeline_errors() -> Iterator[None]:
    """Report pipeline errors on stderr and exit with code 1."""
    try:
        yield
    except TokenPipelineError as e:
        err_console.print(f"[red]ERROR:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1)


def report_written(paths: list[Path]) -> None:
    for path in paths:
        console.print(f"[green]Generated[/green] {escape(str(path))}", highlight=False)
