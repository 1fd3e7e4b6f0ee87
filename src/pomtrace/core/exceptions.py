"""
Exception taxonomy for pomtrace.

The engine degrades instead of failing: most of these are raised at
well-defined seams (reading a POM, loading config, resolving a CLI
argument) and caught by the caller that owns the query.
"""

from pathlib import Path
from typing import Union


class PomtraceError(Exception):
    """Base class for all pomtrace errors."""


class DocumentParseError(PomtraceError):
    """
    Raised when a POM or settings file cannot be read or parsed.

    Attributes:
        path: The offending file.
        message: Human-readable error message.
    """

    def __init__(self, path: Union[str, Path], message: str):
        self.path = str(path)
        self.message = message
        super().__init__(f"{self.path}: {message}")


class NodeNotFoundError(PomtraceError):
    """Raised when a node id or search term matches nothing in the graph."""

    def __init__(self, query: str):
        self.query = query
        super().__init__(f"No dependency found matching '{query}'")


class ReportNotFoundError(PomtraceError):
    """Raised when the dependency tree report file does not exist."""

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(f"Dependency tree report not found: {self.path}")


class ConfigError(PomtraceError):
    """Raised when pomtrace.toml is malformed."""
