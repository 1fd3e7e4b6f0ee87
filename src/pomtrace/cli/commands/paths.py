"""
Paths Command - Show how a dependency is pulled into the build.

Usage:
    pomtrace paths tree.txt jackson-databind
    pomtrace paths tree.txt jackson-databind --conflicts --related-only
"""

import sys
from typing import List, Optional

import click
from pydantic import BaseModel, Field

from ...analysis.conflicts import build_effective_dependencies, conflict_paths
from ...analysis.traversal import enumerate_paths
from ...core.exceptions import PomtraceError
from ...core.graph import DependencyGraph
from ...core.types import EffectiveDependency
from ..renderers import JsonRenderer
from ..utils import config_from_context, echo_error, echo_warning, load_report, resolve_node


# --- API Models ---
class ApiConflictVariant(BaseModel):
    id: str
    version: str
    omitted: Optional[str] = None
    paths: List[List[str]] = Field(default_factory=list)


class PathsResponse(BaseModel):
    node_id: str
    paths: List[List[str]] = Field(default_factory=list)
    conflicts: List[ApiConflictVariant] = Field(default_factory=list)


def _group_of(graph: DependencyGraph, node_id: str) -> Optional[EffectiveDependency]:
    for dep in build_effective_dependencies(graph):
        if node_id in dep.group_node_ids:
            return dep
    return None


def _echo_path(graph: DependencyGraph, index: int, path: List[str]) -> None:
    click.echo(f" Path {index}: ({len(path) - 1} hops)")
    for j, node_id in enumerate(path):
        connector = "└─" if j == len(path) - 1 else "├─"
        node = graph.get_node(node_id)
        name = node.label if node else node_id
        color = "green" if j == len(path) - 1 else ("cyan" if j == 0 else "white")
        click.echo(f"    {connector} {click.style(name, fg=color)}")


@click.command()
@click.argument("report", type=click.Path())
@click.argument("node")
@click.option("--max-paths", type=int, default=None, help="Maximum paths per node (default from config, 10)")
@click.option("--conflicts", "with_conflicts", is_flag=True,
              help="Also show paths of the other versions of this artifact")
@click.option("--related-only", is_flag=True,
              help="Only conflict paths sharing an ancestor with the shortest path")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def paths(
    ctx: click.Context,
    report: str,
    node: str,
    max_paths: Optional[int],
    with_conflicts: bool,
    related_only: bool,
    as_json: bool,
) -> None:
    """
    Enumerate root-to-dependency paths for NODE.

    NODE is a full coordinate id or any unique part of one, e.g. an
    artifactId. Paths are listed shortest first.
    """
    renderer = JsonRenderer("paths")
    try:
        config = config_from_context(ctx)
        graph = load_report(report).graph
        node_id = resolve_node(graph, node)
    except PomtraceError as e:
        if as_json:
            renderer.render_error(e)
        else:
            echo_error(str(e))
        sys.exit(1)

    limit = max_paths if max_paths is not None else config.max_paths
    found = enumerate_paths(graph, node_id, limit)

    variants = []
    if with_conflicts:
        group = _group_of(graph, node_id)
        if group is not None:
            variants = conflict_paths(graph, group, max_paths=limit, related_only=related_only)

    if as_json:
        renderer.render_success(PathsResponse(
            node_id=node_id,
            paths=found,
            conflicts=[
                ApiConflictVariant(
                    id=v.node.id,
                    version=v.node.version,
                    omitted=v.node.omitted_reason,
                    paths=v.paths,
                )
                for v in variants
            ],
        ))
        return

    click.echo()
    click.echo(f"🔗 {click.style('Dependency Paths', bold=True)}")
    click.echo("═" * 60)
    click.echo(f"Node: {click.style(node_id, fg='green')}")
    click.echo()
    click.echo(f"{len(found)} path(s) found:")
    click.echo()
    for i, path in enumerate(found, 1):
        _echo_path(graph, i, path)
        click.echo()

    if not with_conflicts:
        return
    if not variants:
        click.echo("No other versions of this artifact in the tree.")
        return

    for variant in variants:
        title = variant.node.label
        if variant.node.omitted_reason:
            title += f" ({variant.node.omitted_reason})"
        click.echo(click.style(f"Conflict: {title}", fg="yellow", bold=True))
        if not variant.paths:
            echo_warning("No related conflict paths." if related_only else "No paths.")
            continue
        for i, path in enumerate(variant.paths, 1):
            _echo_path(graph, i, path)
        click.echo()
