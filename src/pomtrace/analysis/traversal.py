"""
Graph traversals over the dependency tree.

All functions read an immutable DependencyGraph and follow the ordered
parent/child lists on its nodes, so results are deterministic for a given
report.
"""

from collections import deque
from typing import Deque, Dict, List, Optional, Sequence, Set, Tuple

from ..core.graph import DependencyGraph

DEFAULT_MAX_PATHS = 10


def compute_shortest_depth(graph: DependencyGraph) -> Dict[str, int]:
    """
    Minimum depth of every node reachable from the roots (roots are 0).

    Multi-source BFS; a node is re-enqueued whenever a shorter path to it
    is found, so the result does not depend on visitation order.
    """
    depths: Dict[str, int] = {}
    queue: Deque[str] = deque()

    for root_id in graph.roots:
        depths[root_id] = 0
        queue.append(root_id)

    while queue:
        current = queue.popleft()
        node = graph.get_node(current)
        if node is None:
            continue
        next_depth = depths.get(current, 0) + 1
        for child_id in node.children:
            if child_id not in depths or next_depth < depths[child_id]:
                depths[child_id] = next_depth
                queue.append(child_id)

    return depths


def enumerate_paths(
    graph: DependencyGraph,
    node_id: str,
    max_paths: int = DEFAULT_MAX_PATHS,
) -> List[List[str]]:
    """
    Enumerate paths from the roots down to node_id.

    Walks parent edges breadth-first. A path is complete when it reaches a
    node with no parents; a path never revisits a node it already contains.
    Enumeration stops after max_paths complete paths.

    Returns:
        Paths ordered root first, sorted by ascending hop count.
    """
    if max_paths <= 0 or not graph.has_node(node_id):
        return []

    paths: List[List[str]] = []
    queue: Deque[Tuple[str, List[str]]] = deque([(node_id, [node_id])])

    while queue and len(paths) < max_paths:
        current, path = queue.popleft()
        node = graph.get_node(current)
        if node is None or not node.parents:
            paths.append(list(reversed(path)))
            continue
        for parent_id in node.parents:
            if parent_id not in path:
                queue.append((parent_id, path + [parent_id]))

    paths.sort(key=len)
    return paths


def shortest_path_to_root(graph: DependencyGraph, node_id: str) -> List[str]:
    """
    One shortest route from node_id up to a root, node first.

    Returns an empty list for unknown ids.
    """
    if not graph.has_node(node_id):
        return []

    queue: Deque[Tuple[str, List[str]]] = deque([(node_id, [node_id])])
    visited: Set[str] = {node_id}

    while queue:
        current, path = queue.popleft()
        node = graph.get_node(current)
        if node is None or not node.parents:
            return path
        for parent_id in node.parents:
            if parent_id in visited:
                continue
            visited.add(parent_id)
            queue.append((parent_id, path + [parent_id]))

    return []


def collect_ancestor_ids(graph: DependencyGraph, node_id: str) -> List[str]:
    """All ancestors of node_id in breadth-first order, nearest first."""
    node = graph.get_node(node_id)
    if node is None:
        return []

    ordered: List[str] = []
    visited: Set[str] = set()
    queue: Deque[str] = deque(node.parents)

    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        ordered.append(current)
        parent = graph.get_node(current)
        if parent is not None:
            queue.extend(parent.parents)

    return ordered


def is_related_to_path(path_ids: Sequence[str], reference: Optional[Sequence[str]]) -> bool:
    """
    Whether a path shares an ancestor with a reference path.

    Both paths are root first; the last element of each (the dependency
    itself) is not considered. An empty reference relates to everything.
    """
    if not reference:
        return True
    ancestors = set(reference[:-1])
    return any(node_id in ancestors for node_id in path_ids[:-1])
