"""
Tree Command - Render the parsed dependency tree.

Usage:
    pomtrace tree tree.txt
    pomtrace tree tree.txt --max-depth 2
"""

import sys
from typing import Optional, Set

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from ...core.exceptions import PomtraceError
from ...core.graph import DependencyGraph
from ...core.types import DependencyNode
from ..utils import echo_error, load_report

console = Console()


def _node_label(node: DependencyNode) -> str:
    label = escape(node.label)
    if node.scope:
        label += f" [dim]({node.scope})[/dim]"
    if node.managed_from_version:
        label += f" [cyan]managed from {escape(node.managed_from_version)}[/cyan]"
    if node.is_omitted:
        return f"[dim strike]{label}[/dim strike] [yellow]omitted for {escape(node.omitted_reason or '')}[/yellow]"
    return label


def _add_children(
    branch: Tree,
    graph: DependencyGraph,
    node: DependencyNode,
    depth: int,
    max_depth: Optional[int],
    ancestry: Set[str],
) -> None:
    if max_depth is not None and depth >= max_depth:
        hidden = graph.get_descendants(node.id) - ancestry
        if hidden:
            branch.add(f"[dim]… {len(hidden)} more[/dim]")
        return
    for child_id in node.children:
        child = graph.get_node(child_id)
        if child is None or child_id in ancestry:
            continue
        child_branch = branch.add(_node_label(child))
        _add_children(child_branch, graph, child, depth + 1, max_depth, ancestry | {child_id})


@click.command()
@click.argument("report", type=click.Path())
@click.option("--max-depth", type=int, default=None, help="Limit rendered depth")
def tree(report: str, max_depth: Optional[int]) -> None:
    """
    Show the dependency tree from a saved report.

    Omitted entries are struck through with Maven's reason; managed
    versions show the version they were managed from.
    """
    try:
        result = load_report(report)
    except PomtraceError as e:
        echo_error(str(e))
        sys.exit(1)

    graph = result.graph
    if not graph.roots:
        echo_error(f"No dependencies found in {report}")
        sys.exit(1)

    for root_id in graph.roots:
        root = graph.get_node(root_id)
        if root is None:
            continue
        rendered = Tree(f"📦 [bold]{escape(root.label)}[/bold]")
        _add_children(rendered, graph, root, 0, max_depth, {root_id})
        console.print(rendered)

    stats = graph.get_stats()
    console.print(
        f"\n[dim]{stats['total_nodes']} nodes, {stats['total_edges']} edges, "
        f"{stats['conflicting_artifacts']} conflicting artifact(s), "
        f"{stats['omitted_nodes']} omitted[/dim]"
    )
