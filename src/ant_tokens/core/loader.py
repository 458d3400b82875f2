"""Reading token documents and third-party stylesheets from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .errors import DocumentParseError, DocumentReadError, ErrorContext, OutputWriteError

logger = logging.getLogger(__name__)


def read_text(path: Path, *, label: str = "file") -> str:
    """Read a UTF-8 text file, raising DocumentReadError on failure."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise DocumentReadError(f"{label} not found at {path}") from e
    except OSError as e:
        raise DocumentReadError(f"Failed to read {label} {path}: {e}") from e


def load_document(path: Path) -> Any:
    """Load and parse a token document.

    Raises:
        DocumentReadError: If the file is missing or unreadable.
        DocumentParseError: If the file is not valid JSON.
    """
    content = read_text(path, label="Token document")
    try:
        document = json.loads(content)
    except json.JSONDecodeError as e:
        lines = content.splitlines()
        snippet = lines[e.lineno - 1] if 0 < e.lineno <= len(lines) else None
        context = ErrorContext(file=path, line=e.lineno, column=e.colno, snippet=snippet)
        raise DocumentParseError(f"Failed to parse token document: {e.msg}", context) from e

    logger.debug("Loaded token document %s (%d bytes)", path, len(content))
    return document


def write_output(path: Path, content: str) -> Path:
    """Write a generated file, creating parent directories.

    Raises:
        OutputWriteError: If the directory or file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(f"Failed to write {path}: {e}") from e

    logger.info("Written %s (%d bytes, %d lines)", path, len(content), content.count("\n") + 1)
    return path
