"""
Dependency Graph implementation backed by rustworkx.

The graph is built in two phases:
- GraphBuilder: append-only drafts keyed by node id. The tree parser may see
  a node once as a bare declaration and again with annotations, so fields
  are augmented in place here.
- DependencyGraph: the finished, immutable graph. Nodes are frozen pydantic
  models and the rustworkx index is never touched after construction.
  Re-parsing a report yields a new DependencyGraph; nothing mutates an
  existing one.
"""

from collections import defaultdict
from typing import Any, Dict, Iterator, List, Mapping, Optional, Set

import rustworkx as rx

from .coordinates import parse_coordinate
from .types import DependencyNode


class _NodeDraft:
    """Mutable node under construction."""

    __slots__ = (
        "id", "managed_from_version", "omitted_reason",
        "conflict_with_version", "children", "parents",
    )

    def __init__(self, node_id: str):
        self.id = node_id
        self.managed_from_version: Optional[str] = None
        self.omitted_reason: Optional[str] = None
        self.conflict_with_version: Optional[str] = None
        self.children: List[str] = []
        self.parents: List[str] = []

    def freeze(self) -> DependencyNode:
        coord = parse_coordinate(self.id)
        return DependencyNode(
            id=self.id,
            group_id=coord.group_id,
            artifact_id=coord.artifact_id,
            version=coord.version,
            classifier=coord.classifier,
            packaging=coord.packaging,
            scope=coord.scope,
            managed_from_version=self.managed_from_version,
            omitted_reason=self.omitted_reason,
            conflict_with_version=self.conflict_with_version,
            children=tuple(self.children),
            parents=tuple(self.parents),
        )


def _push_unique(items: List[str], value: str) -> None:
    if value not in items:
        items.append(value)


class GraphBuilder:
    """
    Append-only builder for DependencyGraph.

    Example:
        ```python
        builder = GraphBuilder()
        builder.add_node("com.acme:app:jar:1.0")
        builder.add_edge("com.acme:app:jar:1.0", "org.slf4j:slf4j-api:jar:2.0.9:compile")
        graph = builder.build()
        ```
    """

    def __init__(self):
        self._drafts: Dict[str, _NodeDraft] = {}
        self._declared_roots: List[str] = []

    def add_node(
        self,
        node_id: str,
        managed_from_version: Optional[str] = None,
        omitted_reason: Optional[str] = None,
        conflict_with_version: Optional[str] = None,
    ) -> None:
        """Create a node, or augment an existing one with annotation fields."""
        draft = self._drafts.get(node_id)
        if draft is None:
            draft = _NodeDraft(node_id)
            self._drafts[node_id] = draft
        if managed_from_version:
            draft.managed_from_version = managed_from_version
        if omitted_reason:
            draft.omitted_reason = omitted_reason
        if conflict_with_version:
            draft.conflict_with_version = conflict_with_version

    def add_edge(self, parent_id: str, child_id: str) -> None:
        """Link parent to child (both directions, unique)."""
        self.add_node(parent_id)
        self.add_node(child_id)
        _push_unique(self._drafts[parent_id].children, child_id)
        _push_unique(self._drafts[child_id].parents, parent_id)

    def declare_root(self, node_id: str) -> None:
        """Record a node that appeared on a depth-0 line."""
        self.add_node(node_id)
        self._declared_roots.append(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._drafts

    def build(self) -> "DependencyGraph":
        """
        Finalise into an immutable graph.

        Roots are the declared depth-0 nodes (or every node when none were
        declared), deduplicated and filtered to those without parents.
        """
        nodes = {node_id: draft.freeze() for node_id, draft in self._drafts.items()}
        candidates = self._declared_roots or list(nodes)
        roots: List[str] = []
        for node_id in candidates:
            if node_id not in roots and not nodes[node_id].parents:
                roots.append(node_id)
        return DependencyGraph(nodes, roots)


class DependencyGraph:
    """
    Immutable dependency graph.

    Features:
    - O(1) node lookup by id
    - Ordered parent/child lists on every node (insertion order of the report)
    - rustworkx index for descendant queries and counts
    """

    def __init__(self, nodes: Mapping[str, DependencyNode], roots: List[str]):
        self._nodes: Dict[str, DependencyNode] = dict(nodes)
        self._roots = tuple(roots)
        self._graph = rx.PyDiGraph(multigraph=False)
        self._id_to_idx: Dict[str, int] = {}
        self._idx_to_id: Dict[int, str] = {}

        for node_id in self._nodes:
            idx = self._graph.add_node(node_id)
            self._id_to_idx[node_id] = idx
            self._idx_to_id[idx] = node_id

        for node in self._nodes.values():
            u_idx = self._id_to_idx[node.id]
            for child_id in node.children:
                self._graph.add_edge(u_idx, self._id_to_idx[child_id], None)

    @classmethod
    def empty(cls) -> "DependencyGraph":
        return cls({}, [])

    @property
    def roots(self) -> List[str]:
        return list(self._roots)

    @property
    def nodes(self) -> Mapping[str, DependencyNode]:
        return dict(self._nodes)

    def get_node(self, node_id: str) -> Optional[DependencyNode]:
        """Retrieve a node by ID."""
        return self._nodes.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def iter_nodes(self) -> Iterator[DependencyNode]:
        return iter(self._nodes.values())

    def find_nodes(self, pattern: str) -> List[str]:
        """
        Find node ids containing a substring (case-insensitive).

        Exact id matches come first.
        """
        if pattern in self._nodes:
            return [pattern]
        pattern_lower = pattern.lower()
        return [node_id for node_id in self._nodes if pattern_lower in node_id.lower()]

    def find_by_ga(self, group_id: str, artifact_id: str) -> List[DependencyNode]:
        """All versions of group:artifact present in the graph."""
        return [
            node for node in self._nodes.values()
            if node.group_id == group_id and node.artifact_id == artifact_id
        ]

    def get_descendants(self, node_id: str) -> Set[str]:
        """All node IDs reachable through child edges."""
        if node_id not in self._id_to_idx:
            return set()
        indices = rx.descendants(self._graph, self._id_to_idx[node_id])
        return {self._idx_to_id[idx] for idx in indices}

    @property
    def node_count(self) -> int:
        return self._graph.num_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.num_edges()

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def get_stats(self) -> Dict[str, Any]:
        versions_by_ga: Dict[str, Set[str]] = defaultdict(set)
        for node in self._nodes.values():
            versions_by_ga[node.ga].add(node.version)

        return {
            "total_nodes": self.node_count,
            "total_edges": self.edge_count,
            "roots": len(self._roots),
            "artifacts": len(versions_by_ga),
            "conflicting_artifacts": sum(1 for v in versions_by_ga.values() if len(v) > 1),
            "omitted_nodes": sum(1 for n in self._nodes.values() if n.is_omitted),
            "backend": "rustworkx",
        }
