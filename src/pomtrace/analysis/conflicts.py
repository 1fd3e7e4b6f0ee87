"""
Conflict grouping for the flattened dependency view.

Nodes are grouped by (group, artifact, classifier). Each group collapses to
the representative Maven actually resolved: the shallowest node, preferring
a non-omitted one on ties.
"""

import logging
import re
import sys
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..core.graph import DependencyGraph
from ..core.types import DependencyNode, EffectiveDependency
from .traversal import (
    DEFAULT_MAX_PATHS,
    compute_shortest_depth,
    enumerate_paths,
    is_related_to_path,
)

logger = logging.getLogger(__name__)

_MANAGED_FROM_REASON = re.compile(r"managed from ([^;,\s)]+)", re.IGNORECASE)
_CONFLICT_WITH_REASON = re.compile(r"conflict with ([^;,\s)]+)", re.IGNORECASE)

UNREACHABLE = sys.maxsize


def extract_managed_from(reason: Optional[str]) -> str:
    """Pull a 'managed from X' version out of free-text omission reasons."""
    if not reason:
        return ""
    match = _MANAGED_FROM_REASON.search(reason)
    return match.group(1) if match else ""


def extract_conflict_with(reason: Optional[str]) -> str:
    if not reason:
        return ""
    match = _CONFLICT_WITH_REASON.search(reason)
    return match.group(1) if match else ""


def first_non_empty(values: Iterable[Optional[str]]) -> str:
    for value in values:
        if value and value.strip():
            return value.strip()
    return ""


def unique_values(values: Iterable[Optional[str]], exclude: Iterable[Optional[str]] = ()) -> List[str]:
    """Trimmed non-empty values in first-seen order, minus the excluded ones."""
    excluded = {v.strip() for v in exclude if v}
    result: List[str] = []
    for value in values:
        if not value or not value.strip():
            continue
        normalized = value.strip()
        if normalized not in excluded and normalized not in result:
            result.append(normalized)
    return result


def _is_better(candidate: DependencyNode, current: DependencyNode, depths: Dict[str, int]) -> bool:
    candidate_depth = depths.get(candidate.id, UNREACHABLE)
    current_depth = depths.get(current.id, UNREACHABLE)
    if candidate_depth != current_depth:
        return candidate_depth < current_depth
    return current.is_omitted and not candidate.is_omitted


def build_effective_dependencies(graph: DependencyGraph) -> List[EffectiveDependency]:
    """
    Collapse the graph into one entry per conflict group.

    Groups are returned in first-seen order of the report.
    """
    depths = compute_shortest_depth(graph)
    members: Dict[str, List[DependencyNode]] = {}
    chosen: Dict[str, DependencyNode] = {}

    for node in graph.iter_nodes():
        key = node.conflict_key
        members.setdefault(key, []).append(node)
        current = chosen.get(key)
        if current is None or _is_better(node, current, depths):
            chosen[key] = node

    effective: List[EffectiveDependency] = []
    for key, group in members.items():
        rep = chosen[key]
        versions = {n.version for n in group if n.version}
        managed = first_non_empty(
            [rep.managed_from_version, extract_managed_from(rep.omitted_reason)]
            + [n.managed_from_version for n in group]
            + [extract_managed_from(n.omitted_reason) for n in group]
        )
        omitted = first_non_empty([rep.omitted_reason] + [n.omitted_reason for n in group])
        conflicts_with = unique_values(
            [rep.conflict_with_version, extract_conflict_with(rep.omitted_reason)]
            + [n.conflict_with_version for n in group]
            + [extract_conflict_with(n.omitted_reason) for n in group],
            exclude=[rep.version],
        )
        depth = depths.get(rep.id)
        effective.append(
            EffectiveDependency(
                node=rep,
                depth=depth,
                conflict_count=max(0, len(versions) - 1),
                group_node_ids=[n.id for n in group],
                managed_from=managed,
                omitted=omitted,
                conflicts_with=conflicts_with,
            )
        )

    logger.debug(f"Collapsed {graph.node_count} nodes into {len(effective)} effective dependencies")
    return effective


def collect_managed_from_version(graph: DependencyGraph, node: DependencyNode) -> str:
    """
    Best-known pre-management version for a node.

    Checks the node's own annotation first, then every sibling sharing its
    group, artifact and classifier.
    """
    direct = node.managed_from_version or extract_managed_from(node.omitted_reason)
    if direct:
        return direct
    for sibling in graph.find_by_ga(node.group_id, node.artifact_id):
        if sibling.conflict_key != node.conflict_key:
            continue
        value = sibling.managed_from_version or extract_managed_from(sibling.omitted_reason)
        if value:
            return value
    return ""


@dataclass
class ConflictVariant:
    """Another version of an effective dependency and the paths that pull it in."""

    node: DependencyNode
    paths: List[List[str]] = field(default_factory=list)


def conflict_paths(
    graph: DependencyGraph,
    effective: EffectiveDependency,
    max_paths: int = DEFAULT_MAX_PATHS,
    related_only: bool = False,
) -> List[ConflictVariant]:
    """
    Enumerate the paths of every non-representative member of a group.

    With related_only, paths are kept only when they share an ancestor with
    the representative's shortest path.
    """
    reference: List[str] = []
    if related_only:
        shortest = enumerate_paths(graph, effective.node.id, 1)
        reference = shortest[0] if shortest else []

    variants: List[ConflictVariant] = []
    for variant_id in effective.variant_ids:
        node = graph.get_node(variant_id)
        if node is None:
            continue
        paths = enumerate_paths(graph, variant_id, max_paths)
        if related_only:
            paths = [p for p in paths if is_related_to_path(p, reference)]
        variants.append(ConflictVariant(node=node, paths=paths))
    return variants
