"""
Version-origin resolution for pomtrace.

- chain: parent POM chain
- properties: ${...} interpolation and property locations
- locator: semantic match to line/column in raw POM text
- repository: local repository roots and manifest paths
- imports: BOM import search
- workspace: g:a index of workspace module POMs
- origin: the ordered resolution strategy and its orchestrator
"""

from .chain import build_chain
from .imports import ManifestImportResolver
from .locator import find_dependency_block, find_tag_ranges, offset_to_line_col
from .origin import (
    OriginResolver,
    PomFetcher,
    find_dependency_declaration,
    resolve_version_origin,
)
from .properties import PropertyResolver, get_property_refs
from .repository import discover_local_repositories, find_manifest, manifest_relative_path
from .workspace import WorkspaceIndex

__all__ = [
    "build_chain",
    "ManifestImportResolver",
    "find_dependency_block",
    "find_tag_ranges",
    "offset_to_line_col",
    "OriginResolver",
    "PomFetcher",
    "find_dependency_declaration",
    "resolve_version_origin",
    "PropertyResolver",
    "get_property_refs",
    "discover_local_repositories",
    "find_manifest",
    "manifest_relative_path",
    "WorkspaceIndex",
]
