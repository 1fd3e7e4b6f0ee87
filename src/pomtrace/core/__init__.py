"""
Core modules for pomtrace.

This package contains the fundamental building blocks:
- types: Data structures (DependencyNode, Location, etc.)
- coordinates: Maven coordinate parsing/formatting
- graph: Immutable dependency graph and its builder
- cache: Owned, explicitly invalidated caches
"""

from .cache import DocumentCache, FileSignature, ResolutionCache
from .coordinates import Coordinate, clean_coordinate, format_coordinate, parse_coordinate
from .exceptions import (
    ConfigError,
    DocumentParseError,
    NodeNotFoundError,
    PomtraceError,
    ReportNotFoundError,
)
from .graph import DependencyGraph, GraphBuilder
from .types import (
    DependencyNode,
    EffectiveDependency,
    Location,
    LocationKind,
    ManagementInfo,
    PathTarget,
    dedupe_locations,
)

__all__ = [
    # Types
    "DependencyNode", "EffectiveDependency", "Location", "LocationKind",
    "ManagementInfo", "PathTarget", "dedupe_locations",
    # Coordinates
    "Coordinate", "clean_coordinate", "format_coordinate", "parse_coordinate",
    # Graph
    "DependencyGraph", "GraphBuilder",
    # Caches
    "DocumentCache", "FileSignature", "ResolutionCache",
    # Errors
    "PomtraceError", "DocumentParseError", "NodeNotFoundError",
    "ReportNotFoundError", "ConfigError",
]
