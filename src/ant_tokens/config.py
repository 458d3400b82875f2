"""
Build configuration.

Settings come from three layers, later layers winning:

1. Defaults matching the FigmaExportDemo layout
   (``tokens.json`` at the project root, CSS under ``FigmaExportDemo/wwwroot/css``)
2. An optional ``ant-tokens.toml`` in the project root
3. Environment variables (``ANT_DESIGN_VERSION``, ``ANTDESIGN_CSS``,
   ``ANT_TOKENS_LESSC``)

Example ``ant-tokens.toml``::

    [project]
    tokens = "design/tokens.json"

    [output]
    dir = "wwwroot/css"

    [theme]
    compiler = "less"            # or "sass"
    ant_design_version = "1.5.1"

    [report]
    css = "vendor/ant-design-blazor.css"
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .core.errors import ConfigError

CONFIG_FILE = "ant-tokens.toml"
DEFAULT_ANT_DESIGN_VERSION = "1.5.1"
DEFAULT_OUTPUT_DIR = Path("FigmaExportDemo") / "wwwroot" / "css"
DEFAULT_REPORT_DIR = Path("FigmaExportDemo") / "wwwroot" / "scripts"
COMPILER_KINDS = ("less", "sass")


def _user_home() -> Path:
    profile = os.environ.get("USERPROFILE") or os.environ.get("HOME")
    return Path(profile) if profile else Path.home()


def nuget_package_dir(version: str) -> Path:
    """Static web assets of the restored AntDesign NuGet package."""
    return _user_home() / ".nuget" / "packages" / "antdesign" / version / "staticwebassets"


@dataclass
class OutputConfig:
    """Generated file locations, relative to ``dir`` unless absolute."""

    dir: Path = DEFAULT_OUTPUT_DIR
    palette_file: str = "figma-tokens.css"
    overrides_file: str = "ant-theme-overrides.css"
    light_theme_file: str = "ant-design-blazor-custom.css"
    dark_theme_file: str = "ant-design-blazor-dark.css"


@dataclass
class ThemeConfig:
    """Preprocessor settings."""

    compiler: str = "less"
    ant_design_version: str = DEFAULT_ANT_DESIGN_VERSION
    source_dir: Path | None = None  # Less/Sass sources; defaults to the NuGet package
    entry_file: str | None = None
    lessc: str | None = None  # Explicit lessc path; otherwise found on PATH
    timeout: float = 120.0

    def resolved_source_dir(self) -> Path:
        if self.source_dir is not None:
            return self.source_dir
        base = nuget_package_dir(self.ant_design_version)
        return base / ("scss" if self.compiler == "sass" else "less")

    def resolved_entry_file(self) -> str:
        if self.entry_file:
            return self.entry_file
        if self.compiler == "sass":
            return "ant-design-blazor.variable.scss"
        return "ant-design-blazor.variable.less"


@dataclass
class ReportConfig:
    """Hardcoded colour report settings."""

    css: Path | None = None  # Stylesheet to scan; defaults to the NuGet package CSS
    output: Path = DEFAULT_REPORT_DIR / "ant-hardcoded-colors.json"


@dataclass
class BuildConfig:
    """Complete configuration for one generation run."""

    project_root: Path = field(default_factory=Path.cwd)
    tokens: Path = Path("tokens.json")
    output: OutputConfig = field(default_factory=OutputConfig)
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    def _abs(self, path: Path) -> Path:
        return path if path.is_absolute() else self.project_root / path

    @property
    def tokens_path(self) -> Path:
        return self._abs(self.tokens)

    @property
    def output_dir(self) -> Path:
        return self._abs(self.output.dir)

    def output_path(self, name: str) -> Path:
        return self.output_dir / name

    @property
    def palette_path(self) -> Path:
        return self.output_path(self.output.palette_file)

    @property
    def overrides_path(self) -> Path:
        return self.output_path(self.output.overrides_file)

    @property
    def light_theme_path(self) -> Path:
        return self.output_path(self.output.light_theme_file)

    @property
    def dark_theme_path(self) -> Path:
        return self.output_path(self.output.dark_theme_file)

    @property
    def report_css_path(self) -> Path:
        if self.report.css is not None:
            return self._abs(self.report.css)
        return (
            nuget_package_dir(self.theme.ant_design_version) / "css" / "ant-design-blazor.css"
        )

    @property
    def report_path(self) -> Path:
        return self._abs(self.report.output)


def _optional_path(value: Any) -> Path | None:
    return Path(value) if value else None


def parse_config(data: dict[str, Any], project_root: Path) -> BuildConfig:
    """Build a BuildConfig from parsed TOML data.

    Raises:
        ConfigError: On unknown compiler kinds or wrongly typed values.
    """
    project = data.get("project", {})
    output_data = data.get("output", {})
    theme_data = data.get("theme", {})
    report_data = data.get("report", {})

    try:
        output = OutputConfig(
            dir=Path(output_data.get("dir", DEFAULT_OUTPUT_DIR)),
            palette_file=output_data.get("palette_file", "figma-tokens.css"),
            overrides_file=output_data.get("overrides_file", "ant-theme-overrides.css"),
            light_theme_file=output_data.get("light_theme_file", "ant-design-blazor-custom.css"),
            dark_theme_file=output_data.get("dark_theme_file", "ant-design-blazor-dark.css"),
        )

        theme = ThemeConfig(
            compiler=str(theme_data.get("compiler", "less")).lower(),
            ant_design_version=str(
                theme_data.get("ant_design_version", DEFAULT_ANT_DESIGN_VERSION)
            ),
            source_dir=_optional_path(theme_data.get("source_dir")),
            entry_file=theme_data.get("entry_file"),
            lessc=theme_data.get("lessc"),
            timeout=float(theme_data.get("timeout", 120.0)),
        )

        report = ReportConfig(
            css=_optional_path(report_data.get("css")),
            output=Path(
                report_data.get("output", DEFAULT_REPORT_DIR / "ant-hardcoded-colors.json")
            ),
        )

        config = BuildConfig(
            project_root=project_root,
            tokens=Path(project.get("tokens", "tokens.json")),
            output=output,
            theme=theme,
            report=report,
        )
    except (TypeError, ValueError, AttributeError) as e:
        raise ConfigError(f"Invalid {CONFIG_FILE}: {e}") from e

    if config.theme.compiler not in COMPILER_KINDS:
        raise ConfigError(
            f"Unknown compiler '{config.theme.compiler}' in {CONFIG_FILE}; "
            f"expected one of {', '.join(COMPILER_KINDS)}"
        )
    return config


def apply_env_overrides(config: BuildConfig) -> BuildConfig:
    """Apply environment variable overrides in place."""
    if version := os.environ.get("ANT_DESIGN_VERSION"):
        config.theme.ant_design_version = version
    if css := os.environ.get("ANTDESIGN_CSS"):
        config.report.css = Path(css)
    if lessc := os.environ.get("ANT_TOKENS_LESSC"):
        config.theme.lessc = lessc
    return config


def load_config(project_root: Path, config_path: Path | None = None) -> BuildConfig:
    """Load configuration for a project.

    Args:
        project_root: Directory that relative paths are resolved against.
        config_path: Explicit config file. When omitted, ``ant-tokens.toml``
            in ``project_root`` is used if present.

    Raises:
        ConfigError: If the file is missing (explicit path only) or invalid.
    """
    path = config_path or project_root / CONFIG_FILE

    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return apply_env_overrides(BuildConfig(project_root=project_root))

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    return apply_env_overrides(parse_config(data, project_root))
