"""
Inspection CLI commands.

Commands:
- inspect:  show the variables a token document projects to
- resolve:  resolve a single token path or reference
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from rich.table import Table

from ant_tokens.cli.utils import (
    ConfigOption,
    ProjectOption,
    TokensOption,
    VerboseOption,
    console,
    handle_pipeline_errors,
    prepare_config,
)
from ant_tokens.core.classifier import Bucket, ProjectedVariables
from ant_tokens.core.css import css_value
from ant_tokens.core.inference import build_component_rules


def _projection_to_dict(projected: ProjectedVariables) -> dict[str, Any]:
    return {
        "palette": {name: css_value(value) for name, value in projected.palette.sorted_items()},
        "overrides": {
            name: css_value(value) for name, value in projected.overrides.sorted_items()
        },
        "componentRules": build_component_rules(projected.component_entries),
        "collisions": [
            {
                "name": c.name,
                "previous": css_value(c.previous),
                "value": css_value(c.value),
                "source": c.source_path,
            }
            for c in projected.collisions
        ],
    }


def _print_table(title: str, rows: list[tuple[str, Any]]) -> None:
    table = Table(title=title)
    table.add_column("Variable", style="cyan")
    table.add_column("Value")
    for name, value in rows:
        table.add_row(name, css_value(value))
    console.print(table)


def inspect_command(
    project_root: Path = ProjectOption,
    config_file: Path | None = ConfigOption,
    tokens: Path | None = TokensOption,
    bucket: str | None = typer.Option(
        None, "--bucket", "-b", help="Only show one bucket: palette or overrides"
    ),
    format: str = typer.Option(
        "table", "--format", "-f", help="Output format: table (default) or json"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Show the CSS variables a token document projects to, without writing files."""
    from ant_tokens.pipeline import project_document

    buckets = [b.value for b in Bucket]
    if bucket is not None and bucket not in buckets:
        raise typer.BadParameter(f"expected one of {', '.join(buckets)}", param_hint="--bucket")
    if format not in ("table", "json"):
        raise typer.BadParameter("expected table or json", param_hint="--format")

    config = prepare_config(project_root, config_file, tokens, None, verbose)
    with handle_pipeline_errors():
        projected = project_document(config)

    if format == "json":
        data = _projection_to_dict(projected)
        if bucket:
            data = {bucket: data.get(bucket, {})}
        typer.echo(json.dumps(data, indent=2))
        return

    if bucket in (None, "palette"):
        _print_table("Palette", projected.palette.sorted_items())
    if bucket in (None, "overrides"):
        _print_table("Overrides", projected.overrides.sorted_items())


def resolve_command(
    reference: str = typer.Argument(..., help="Token path, with or without braces"),
    project_root: Path = ProjectOption,
    config_file: Path | None = ConfigOption,
    tokens: Path | None = TokensOption,
    verbose: bool = VerboseOption,
) -> None:
    """Resolve a token path (e.g. ``Colors.Base.Blue.6``) to its literal value."""
    from ant_tokens.core.collector import collect_tokens
    from ant_tokens.core.loader import load_document
    from ant_tokens.core.resolver import resolve_value

    config = prepare_config(project_root, config_file, tokens, None, verbose)
    path = reference.strip().removeprefix("{").removesuffix("}")
    if not path:
        raise typer.BadParameter("token path is empty", param_hint="REFERENCE")

    with handle_pipeline_errors():
        tree = collect_tokens(load_document(config.tokens_path))
        value = resolve_value(f"{{{path}}}", tree.index)

    typer.echo(css_value(value))
