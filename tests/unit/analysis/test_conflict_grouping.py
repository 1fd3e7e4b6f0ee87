"""Unit tests for conflict grouping and variant paths."""

from pomtrace.analysis.conflicts import (
    build_effective_dependencies,
    collect_managed_from_version,
    conflict_paths,
    extract_conflict_with,
    extract_managed_from,
    first_non_empty,
    unique_values,
)
from pomtrace.core.graph import GraphBuilder

ROOT = "com.acme:app:jar:1.0"


def _by_artifact(effective):
    return {e.node.artifact_id: e for e in effective}


class TestReasonExtraction:
    def test_managed_from(self):
        assert extract_managed_from("version managed from 1.2; omitted for duplicate") == "1.2"
        assert extract_managed_from("Managed From 3.0)") == "3.0"
        assert extract_managed_from("duplicate") == ""
        assert extract_managed_from(None) == ""

    def test_conflict_with(self):
        assert extract_conflict_with("conflict with 2.1") == "2.1"
        assert extract_conflict_with("duplicate") == ""

    def test_first_non_empty(self):
        assert first_non_empty([None, "  ", " x "]) == "x"
        assert first_non_empty([]) == ""

    def test_unique_values(self):
        assert unique_values(["1.0", " 1.0", None, "2.0", "3.0"], exclude=["3.0"]) == ["1.0", "2.0"]


class TestBuildEffectiveDependencies:
    def test_shallow_non_omitted_representative(self):
        builder = GraphBuilder()
        builder.declare_root(ROOT)
        builder.add_node("g:a:jar:2.0:runtime", omitted_reason="duplicate")
        builder.add_edge(ROOT, "g:a:jar:2.0:runtime")
        builder.add_edge(ROOT, "g:a:jar:2.0:compile")
        builder.add_edge(ROOT, "x:y:jar:1.0:compile")
        builder.add_edge("x:y:jar:1.0:compile", "g:a:jar:1.0:compile")

        groups = _by_artifact(build_effective_dependencies(builder.build()))
        effective = groups["a"]

        assert effective.node.id == "g:a:jar:2.0:compile"
        assert effective.node.version == "2.0"
        assert not effective.node.is_omitted
        assert effective.depth == 1
        assert effective.conflict_count == 1
        assert set(effective.group_node_ids) == {
            "g:a:jar:2.0:runtime", "g:a:jar:2.0:compile", "g:a:jar:1.0:compile",
        }

    def test_groups_follow_report_order(self):
        builder = GraphBuilder()
        builder.declare_root(ROOT)
        builder.add_edge(ROOT, "z:z:jar:1:compile")
        builder.add_edge(ROOT, "a:a:jar:1:compile")

        effective = build_effective_dependencies(builder.build())
        assert [e.node.artifact_id for e in effective] == ["app", "z", "a"]
        assert effective[0].depth == 0

    def test_classifier_splits_groups(self):
        builder = GraphBuilder()
        builder.declare_root(ROOT)
        builder.add_edge(ROOT, "io.netty:epoll:jar:linux-x86_64:4.1:runtime")
        builder.add_edge(ROOT, "io.netty:epoll:jar:4.0:compile")

        effective = build_effective_dependencies(builder.build())
        epoll = [e for e in effective if e.node.artifact_id == "epoll"]
        assert len(epoll) == 2
        assert all(e.conflict_count == 0 for e in epoll)

    def test_display_values_come_from_siblings(self):
        builder = GraphBuilder()
        builder.declare_root(ROOT)
        builder.add_edge(ROOT, "g:a:jar:2.0:compile")
        builder.add_edge(ROOT, "x:y:jar:1.0:compile")
        builder.add_node(
            "g:a:jar:1.0:compile",
            omitted_reason="version managed from 1.5; conflict with 2.1",
            conflict_with_version="2.0",
        )
        builder.add_edge("x:y:jar:1.0:compile", "g:a:jar:1.0:compile")

        effective = _by_artifact(build_effective_dependencies(builder.build()))["a"]
        assert effective.node.id == "g:a:jar:2.0:compile"
        assert effective.managed_from == "1.5"
        assert effective.omitted == "version managed from 1.5; conflict with 2.1"
        assert effective.conflicts_with == ["2.1"]

    def test_unreachable_representative_has_no_depth(self):
        builder = GraphBuilder()
        builder.declare_root(ROOT)
        builder.add_node("lost:l:jar:1:compile")
        builder.add_edge("lost:l:jar:1:compile", "k:k:jar:1:compile")

        effective = _by_artifact(build_effective_dependencies(builder.build()))
        assert effective["k"].depth is None


class TestCollectManagedFromVersion:
    def test_own_annotation_first(self):
        builder = GraphBuilder()
        builder.add_node("g:a:jar:2.0:compile", managed_from_version="1.0")
        graph = builder.build()

        assert collect_managed_from_version(graph, graph.get_node("g:a:jar:2.0:compile")) == "1.0"

    def test_sibling_annotation(self):
        builder = GraphBuilder()
        builder.add_node("g:a:jar:2.0:compile")
        builder.add_node("g:a:jar:1.0:compile", omitted_reason="version managed from 0.9; omitted for duplicate")
        graph = builder.build()

        assert collect_managed_from_version(graph, graph.get_node("g:a:jar:2.0:compile")) == "0.9"

    def test_other_classifier_is_not_a_sibling(self):
        builder = GraphBuilder()
        builder.add_node("g:a:jar:2.0:compile")
        builder.add_node("g:a:jar:tests:1.0:test", managed_from_version="0.9")
        graph = builder.build()

        assert collect_managed_from_version(graph, graph.get_node("g:a:jar:2.0:compile")) == ""

    def test_nothing_known(self):
        builder = GraphBuilder()
        builder.add_node("g:a:jar:2.0:compile")
        graph = builder.build()

        assert collect_managed_from_version(graph, graph.get_node("g:a:jar:2.0:compile")) == ""


class TestConflictPaths:
    def _two_trees(self):
        builder = GraphBuilder()
        builder.declare_root("r1:r:jar:1")
        builder.declare_root("r2:r:jar:1")
        builder.add_edge("r1:r:jar:1", "a:a:jar:1:compile")
        builder.add_edge("a:a:jar:1:compile", "g:x:jar:2.0:compile")
        builder.add_edge("r2:r:jar:1", "b:b:jar:1:compile")
        builder.add_edge("b:b:jar:1:compile", "c:c:jar:1:compile")
        builder.add_node("g:x:jar:1.0:compile", omitted_reason="conflict with 2.0")
        builder.add_edge("c:c:jar:1:compile", "g:x:jar:1.0:compile")
        return builder.build()

    def test_variant_paths(self):
        graph = self._two_trees()
        effective = _by_artifact(build_effective_dependencies(graph))["x"]

        variants = conflict_paths(graph, effective)
        assert [v.node.id for v in variants] == ["g:x:jar:1.0:compile"]
        assert variants[0].paths == [[
            "r2:r:jar:1", "b:b:jar:1:compile", "c:c:jar:1:compile", "g:x:jar:1.0:compile",
        ]]

    def test_related_only_drops_disjoint_paths(self):
        graph = self._two_trees()
        effective = _by_artifact(build_effective_dependencies(graph))["x"]

        variants = conflict_paths(graph, effective, related_only=True)
        assert variants[0].paths == []

    def test_related_only_keeps_shared_ancestry(self):
        builder = GraphBuilder()
        builder.declare_root(ROOT)
        builder.add_edge(ROOT, "g:x:jar:2.0:compile")
        builder.add_edge(ROOT, "b:b:jar:1:compile")
        builder.add_edge("b:b:jar:1:compile", "g:x:jar:1.0:compile")
        graph = builder.build()
        effective = _by_artifact(build_effective_dependencies(graph))["x"]

        variants = conflict_paths(graph, effective, related_only=True)
        assert variants[0].paths == [[ROOT, "b:b:jar:1:compile", "g:x:jar:1.0:compile"]]
