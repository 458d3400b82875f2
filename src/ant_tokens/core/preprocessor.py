"""
Stylesheet preprocessor adapters.

The Ant Design theme stylesheets are produced by compiling the Ant Design
sources with a flat ``name -> value`` variable map. Two backends exist:

- ``LessCompiler`` runs the ``lessc`` CLI (the Ant Design Blazor sources are
  Less) with one ``--modify-var`` per variable.
- ``SassCompiler`` compiles in-process with libsass, prepending ``$name: value;``
  declarations to an import of the entry file.

Usage::

    compiler = create_compiler(config.theme)
    css = compiler.compile({"blue-6": "#1677ff"})
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Mapping
from pathlib import Path
from types import ModuleType
from typing import Protocol

from .errors import CompilerError

logger = logging.getLogger(__name__)

LESSC_INSTALL_HINT = "Install it with: npm install -g less"


class StylesheetCompiler(Protocol):
    """Opaque ``variables in, stylesheet text out`` collaborator."""

    def compile(self, variables: Mapping[str, str]) -> str: ...


def _require_entry(source_dir: Path, entry_file: str) -> Path:
    entry = source_dir / entry_file
    if not entry.is_file():
        raise CompilerError(
            f"Ant Design stylesheet source not found at: {entry}\n"
            "Ensure the AntDesign NuGet package is restored.\n"
            "Run: dotnet restore"
        )
    return entry


# =============================================================================
# Less
# =============================================================================


def get_lessc_binary(configured: str | None = None) -> Path | None:
    """Locate the ``lessc`` executable.

    Args:
        configured: Explicit path or command name from configuration.

    Returns:
        Path to the binary, or None if it cannot be found.
    """
    if configured:
        candidate = Path(configured)
        if candidate.is_file():
            return candidate
        found = shutil.which(configured)
        return Path(found) if found else None

    system_lessc = shutil.which("lessc")
    if system_lessc:
        return Path(system_lessc)
    return None


class LessCompiler:
    """Compile Less sources through the ``lessc`` command line tool."""

    def __init__(
        self,
        source_dir: Path,
        entry_file: str = "ant-design-blazor.variable.less",
        *,
        lessc: str | None = None,
        timeout: float = 120.0,
    ):
        self.source_dir = source_dir
        self.entry_file = entry_file
        self.lessc = lessc
        self.timeout = timeout

    def include_paths(self) -> list[Path]:
        return [self.source_dir, self.source_dir / "style"]

    def build_command(self, binary: Path, entry: Path, variables: Mapping[str, str]) -> list[str]:
        # Forward slashes keep Less @import resolution working on Windows
        include = os.pathsep.join(p.as_posix() for p in self.include_paths())
        cmd = [
            str(binary),
            "--js",
            "--math=always",
            f"--include-path={include}",
        ]
        cmd.extend(f"--modify-var={name}={value}" for name, value in variables.items())
        cmd.append(entry.as_posix())
        return cmd

    def compile(self, variables: Mapping[str, str]) -> str:
        entry = _require_entry(self.source_dir, self.entry_file)

        binary = get_lessc_binary(self.lessc)
        if binary is None:
            raise CompilerError(f"Cannot compile theme: lessc not found. {LESSC_INSTALL_HINT}")

        cmd = self.build_command(binary, entry, variables)
        logger.info("Compiling %s with %d variables", entry.name, len(variables))
        logger.debug("Less command: %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
                cwd=str(self.source_dir),
            )
        except subprocess.TimeoutExpired as e:
            raise CompilerError(f"Less compilation timed out after {self.timeout:.0f}s") from e
        except FileNotFoundError as e:
            raise CompilerError(f"lessc not found at {binary}. {LESSC_INSTALL_HINT}") from e

        if result.returncode != 0:
            raise CompilerError(f"Less compilation failed:\n{result.stderr.strip()}")

        return result.stdout


# =============================================================================
# Sass
# =============================================================================


def _load_sass() -> ModuleType:
    try:
        import sass
    except ImportError as e:
        raise CompilerError(
            "The 'libsass' package is not installed. Run: pip install libsass"
        ) from e
    return sass


class SassCompiler:
    """Compile Sass sources in-process with libsass."""

    def __init__(
        self,
        source_dir: Path,
        entry_file: str = "ant-design-blazor.variable.scss",
        *,
        output_style: str = "expanded",
    ):
        self.source_dir = source_dir
        self.entry_file = entry_file
        self.output_style = output_style

    def build_source(self, variables: Mapping[str, str]) -> str:
        lines = [f"${name}: {value};" for name, value in variables.items()]
        lines.append(f'@import "{Path(self.entry_file).stem}";')
        return "\n".join(lines) + "\n"

    def compile(self, variables: Mapping[str, str]) -> str:
        _require_entry(self.source_dir, self.entry_file)
        sass = _load_sass()

        include_paths = [str(self.source_dir), str(self.source_dir / "style")]
        logger.info("Compiling %s with %d variables", self.entry_file, len(variables))
        try:
            return sass.compile(
                string=self.build_source(variables),
                include_paths=include_paths,
                output_style=self.output_style,
            )
        except sass.CompileError as e:
            raise CompilerError(f"Sass compilation failed:\n{e}") from e


class ThemeSettings(Protocol):
    compiler: str
    lessc: str | None
    timeout: float

    def resolved_source_dir(self) -> Path: ...

    def resolved_entry_file(self) -> str: ...


def create_compiler(theme: ThemeSettings) -> StylesheetCompiler:
    """Build the compiler selected by the theme configuration."""
    source_dir = theme.resolved_source_dir()
    entry_file = theme.resolved_entry_file()
    if theme.compiler == "sass":
        return SassCompiler(source_dir, entry_file)
    return LessCompiler(source_dir, entry_file, lessc=theme.lessc, timeout=theme.timeout)
