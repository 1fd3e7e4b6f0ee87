"""Unit tests for depth, path and ancestor traversals."""

from pomtrace.analysis.traversal import (
    collect_ancestor_ids,
    compute_shortest_depth,
    enumerate_paths,
    is_related_to_path,
    shortest_path_to_root,
)
from pomtrace.core.graph import GraphBuilder

ROOT = "com.acme:root:jar:1.0"
A = "com.acme:a:jar:1.0:compile"
B = "com.acme:b:jar:1.0:compile"
C = "com.acme:c:jar:1.0:compile"


class TestComputeShortestDepth:
    def test_diamond(self, diamond_graph):
        depths = compute_shortest_depth(diamond_graph)

        assert depths[ROOT] == 0
        assert depths[A] == 1
        assert depths[B] == 1
        assert depths[C] == 1 + min(depths[A], depths[B])

    def test_shorter_route_wins(self):
        builder = GraphBuilder()
        builder.declare_root("r:r:jar:1")
        builder.add_edge("r:r:jar:1", "x:x:jar:1:compile")
        builder.add_edge("x:x:jar:1:compile", "y:y:jar:1:compile")
        builder.add_edge("y:y:jar:1:compile", "t:t:jar:1:compile")
        builder.add_edge("r:r:jar:1", "t:t:jar:1:compile")

        assert compute_shortest_depth(builder.build())["t:t:jar:1:compile"] == 1

    def test_unreachable_nodes_absent(self):
        builder = GraphBuilder()
        builder.declare_root("r:r:jar:1")
        builder.add_node("orphan:o:jar:1:compile")
        builder.add_edge("orphan:o:jar:1:compile", "k:k:jar:1:compile")

        depths = compute_shortest_depth(builder.build())
        assert "k:k:jar:1:compile" not in depths


class TestEnumeratePaths:
    def test_diamond_paths(self, diamond_graph):
        paths = enumerate_paths(diamond_graph, C)

        assert paths == [[ROOT, A, C], [ROOT, B, C]]

    def test_no_repeated_ids_in_a_path(self):
        builder = GraphBuilder()
        builder.declare_root("r:r:jar:1")
        builder.add_edge("r:r:jar:1", "a:a:jar:1:compile")
        builder.add_edge("a:a:jar:1:compile", "b:b:jar:1:compile")
        builder.add_edge("b:b:jar:1:compile", "a:a:jar:1:compile")
        graph = builder.build()

        paths = enumerate_paths(graph, "b:b:jar:1:compile")
        assert paths == [["r:r:jar:1", "a:a:jar:1:compile", "b:b:jar:1:compile"]]
        for path in paths:
            assert len(path) == len(set(path))

    def test_sorted_by_length(self):
        builder = GraphBuilder()
        builder.declare_root("r:r:jar:1")
        builder.add_edge("r:r:jar:1", "x:x:jar:1:compile")
        builder.add_edge("x:x:jar:1:compile", "y:y:jar:1:compile")
        builder.add_edge("y:y:jar:1:compile", "t:t:jar:1:compile")
        builder.add_edge("r:r:jar:1", "t:t:jar:1:compile")

        paths = enumerate_paths(builder.build(), "t:t:jar:1:compile")
        assert [len(p) for p in paths] == [2, 4]
        assert paths[0] == ["r:r:jar:1", "t:t:jar:1:compile"]

    def test_max_paths_bounds_result(self):
        builder = GraphBuilder()
        for i in range(4):
            builder.add_edge(f"r{i}:r:jar:1", "t:t:jar:1:compile")

        paths = enumerate_paths(builder.build(), "t:t:jar:1:compile", max_paths=2)
        assert len(paths) == 2

    def test_unknown_node_or_zero_limit(self, diamond_graph):
        assert enumerate_paths(diamond_graph, "missing") == []
        assert enumerate_paths(diamond_graph, C, max_paths=0) == []

    def test_root_is_its_own_path(self, diamond_graph):
        assert enumerate_paths(diamond_graph, ROOT) == [[ROOT]]


class TestShortestPathToRoot:
    def test_node_first(self, diamond_graph):
        assert shortest_path_to_root(diamond_graph, C) == [C, A, ROOT]

    def test_unknown(self, diamond_graph):
        assert shortest_path_to_root(diamond_graph, "missing") == []


class TestCollectAncestorIds:
    def test_nearest_first(self, diamond_graph):
        assert collect_ancestor_ids(diamond_graph, C) == [A, B, ROOT]

    def test_root_has_none(self, diamond_graph):
        assert collect_ancestor_ids(diamond_graph, ROOT) == []


class TestIsRelatedToPath:
    def test_shared_ancestor(self):
        assert is_related_to_path([ROOT, B, C], [ROOT, A, C])

    def test_disjoint(self):
        assert not is_related_to_path(["x", "y", C], [ROOT, A, C])

    def test_dependency_itself_does_not_count(self):
        assert not is_related_to_path(["x", C], ["y", C])

    def test_empty_reference_relates_to_everything(self):
        assert is_related_to_path(["x", C], [])
        assert is_related_to_path(["x", C], None)
