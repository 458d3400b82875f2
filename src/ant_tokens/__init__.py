"""
ant-tokens - design token pipeline for Ant Design themes.

Turns a Figma Tokens export (``tokens.json``) into CSS custom properties,
component overrides, compiled light/dark Ant Design themes and a report of
hardcoded colours in the upstream stylesheet.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core.errors import (
    CircularReferenceError,
    EmptyDocumentError,
    TokenPipelineError,
    UnresolvedReferenceError,
)


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    try:
        return _metadata_version("ant-tokens")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "TokenPipelineError",
    "EmptyDocumentError",
    "CircularReferenceError",
    "UnresolvedReferenceError",
]
