"""
Error types for token loading, resolution, compilation and output.

Every failure in a generation run is fatal: the CLI reports the message and
exits non-zero. Variable name collisions are not errors (they are logged by
``VariableMap``) and inference misses simply produce no rule.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path


class TokenPipelineError(Exception):
    """Base exception for all ant-tokens errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class EmptyDocumentError(TokenPipelineError):
    """Raised when a token document contains no ``{value, type}`` leaves."""

    pass


class CircularReferenceError(TokenPipelineError):
    """
    Raised when a reference chain revisits a path already being resolved.

    ``chain`` holds every path on the resolution stack followed by the path
    that closed the loop, e.g. ``("A", "B", "A")``.
    """

    def __init__(self, chain: Sequence[str]):
        self.chain = tuple(chain)
        super().__init__(f"Circular reference detected: {' -> '.join(self.chain)}")


class UnresolvedReferenceError(TokenPipelineError):
    """Raised when a reference points at a path missing from the index."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Unresolved reference: {path}")


class DocumentReadError(TokenPipelineError):
    """Raised when an input file is absent or unreadable."""

    pass


class DocumentParseError(TokenPipelineError):
    """Raised when an input file is not valid JSON."""

    pass


class OutputWriteError(TokenPipelineError):
    """Raised when a generated file cannot be written."""

    pass


class CompilerError(TokenPipelineError):
    """
    Raised when the stylesheet preprocessor cannot run or fails.

    Examples:
    - Less/Sass sources not restored
    - ``lessc`` not installed
    - Preprocessor exits non-zero or times out
    """

    pass


class ConfigError(TokenPipelineError):
    """Raised when ``ant-tokens.toml`` is malformed."""

    pass


@dataclass
class ErrorContext:
    """
    Source location attached to an error.

    Attributes:
        file: Path to the file being read
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional text of the offending line
    """

    file: Path
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "tokens.json:10:5"
        """
        location = f"{self.file}:{self.line}:{self.column}"
        if self.snippet is None:
            return location

        prefix = f"{self.line:4d} | "
        marker = " " * (len(prefix) + self.column - 1) + "^^^"
        return f"{location}\n{prefix}{self.snippet}\n{marker}"
