"""Derived views over a DependencyGraph."""

from .conflicts import (
    ConflictVariant,
    build_effective_dependencies,
    collect_managed_from_version,
    conflict_paths,
    extract_conflict_with,
    extract_managed_from,
)
from .traversal import (
    DEFAULT_MAX_PATHS,
    collect_ancestor_ids,
    compute_shortest_depth,
    enumerate_paths,
    is_related_to_path,
    shortest_path_to_root,
)

__all__ = [
    "ConflictVariant",
    "build_effective_dependencies",
    "collect_managed_from_version",
    "conflict_paths",
    "extract_conflict_with",
    "extract_managed_from",
    "DEFAULT_MAX_PATHS",
    "collect_ancestor_ids",
    "compute_shortest_depth",
    "enumerate_paths",
    "is_related_to_path",
    "shortest_path_to_root",
]
