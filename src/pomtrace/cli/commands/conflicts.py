"""
Conflicts Command - Flattened view of resolved dependencies.

Collapses every artifact to the version Maven selected and lists the
artifacts for which the tree holds more than one version.

Usage:
    pomtrace conflicts tree.txt
    pomtrace conflicts tree.txt --all --json
"""

import sys
from typing import List, Optional

import click
from pydantic import BaseModel, Field
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...analysis.conflicts import build_effective_dependencies
from ...core.exceptions import PomtraceError
from ...core.types import EffectiveDependency
from ..renderers import JsonRenderer
from ..utils import echo_error, echo_success, load_report

console = Console()


# --- API Models ---
class ApiEffectiveDependency(BaseModel):
    id: str
    group_id: str
    artifact_id: str
    version: str
    classifier: Optional[str] = None
    depth: Optional[int] = None
    conflict_count: int = 0
    managed_from: str = ""
    omitted: str = ""
    conflicts_with: List[str] = Field(default_factory=list)
    variants: List[str] = Field(default_factory=list)

    @classmethod
    def from_effective(cls, dep: EffectiveDependency) -> "ApiEffectiveDependency":
        return cls(
            id=dep.node.id,
            group_id=dep.node.group_id,
            artifact_id=dep.node.artifact_id,
            version=dep.node.version,
            classifier=dep.node.classifier,
            depth=dep.depth,
            conflict_count=dep.conflict_count,
            managed_from=dep.managed_from,
            omitted=dep.omitted,
            conflicts_with=dep.conflicts_with,
            variants=dep.variant_ids,
        )


class ConflictsResponse(BaseModel):
    total: int
    conflicting: int
    dependencies: List[ApiEffectiveDependency] = Field(default_factory=list)


def _sort_key(dep: EffectiveDependency) -> str:
    return f"{dep.node.group_id}{dep.node.artifact_id}"


@click.command()
@click.argument("report", type=click.Path())
@click.option("--all", "show_all", is_flag=True, help="List every dependency, not only conflicts")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def conflicts(report: str, show_all: bool, as_json: bool) -> None:
    """
    List dependencies with conflicting versions.

    Each row shows the version Maven selected (the shallowest one), how
    many other versions appear in the tree and what they conflicted with.
    """
    renderer = JsonRenderer("conflicts")
    try:
        graph = load_report(report).graph
    except PomtraceError as e:
        if as_json:
            renderer.render_error(e)
        else:
            echo_error(str(e))
        sys.exit(1)

    effective = sorted(build_effective_dependencies(graph), key=_sort_key)
    conflicting = [d for d in effective if d.has_conflict]
    selected = effective if show_all else conflicting

    if as_json:
        renderer.render_success(ConflictsResponse(
            total=len(effective),
            conflicting=len(conflicting),
            dependencies=[ApiEffectiveDependency.from_effective(d) for d in selected],
        ))
        return

    if not selected:
        echo_success(f"No version conflicts among {len(effective)} dependencies")
        return

    table = Table(title=f"{len(conflicting)} of {len(effective)} dependencies have conflicts")
    table.add_column("Dependency", style="cyan")
    table.add_column("Version")
    table.add_column("Depth", justify="right")
    table.add_column("Conflicts", justify="right")
    table.add_column("Managed from")
    table.add_column("Conflicts with")

    for dep in selected:
        name = f"{dep.node.group_id}:{dep.node.artifact_id}"
        if dep.node.classifier:
            name += f":{dep.node.classifier}"
        table.add_row(
            escape(name),
            escape(dep.node.version),
            "-" if dep.depth is None else str(dep.depth),
            str(dep.conflict_count) if dep.conflict_count else "-",
            escape(dep.managed_from) or "-",
            escape(", ".join(dep.conflicts_with)) or "-",
        )

    console.print(table)
