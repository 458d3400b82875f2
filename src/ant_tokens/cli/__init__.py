"""
ant-tokens CLI.

- generate.py: css, theme, report and all commands
- inspect.py: inspect and resolve commands
- utils.py: shared options, logging setup and error reporting
"""

from __future__ import annotations

import sys

import typer

from ant_tokens.cli.generate import all_command, css_command, report_command, theme_command
from ant_tokens.cli.inspect import inspect_command, resolve_command
from ant_tokens.cli.utils import version_callback

app = typer.Typer(
    help="""ant-tokens – design tokens to Ant Design stylesheets

Commands:
  • css      → figma-tokens.css + ant-theme-overrides.css
  • theme    → compiled light and dark Ant Design themes
  • report   → hardcoded colours in the Ant Design CSS vs. tokens
  • all      → css, theme and report in sequence
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """ant-tokens main callback for global options."""
    pass


app.command(name="css")(css_command)
app.command(name="theme")(theme_command)
app.command(name="report")(report_command)
app.command(name="all")(all_command)
app.command(name="inspect")(inspect_command)
app.command(name="resolve")(resolve_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = ["app", "main"]


if __name__ == "__main__":
    main(sys.argv[1:])
