"""
Origin Command - Explain where a dependency's version is declared.

Usage:
    pomtrace origin tree.txt jackson-databind --pom pom.xml
    pomtrace origin tree.txt guava --pom app/pom.xml -P dev --effective-pom target/effective-pom.xml
"""

import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click
from pydantic import BaseModel, Field

from ...core.exceptions import PomtraceError
from ...core.types import Location, ManagementInfo, PathTarget
from ...parsing.profiles import parse_active_profiles
from ...resolution.origin import OriginResolver
from ...resolution.repository import discover_local_repositories
from ...resolution.workspace import WorkspaceIndex
from ..renderers import JsonRenderer
from ..utils import (
    config_from_context,
    echo_error,
    echo_info,
    echo_warning,
    load_report,
    resolve_node,
)


# --- API Models ---
class OriginResponse(BaseModel):
    node_id: str
    version: str
    locations: List[Location] = Field(default_factory=list)
    management: Optional[ManagementInfo] = None
    target: Optional[PathTarget] = None


def _active_profiles(cli_profiles: Tuple[str, ...], profiles_file: Optional[str], configured: List[str]) -> List[str]:
    """-P ids and --profiles-file entries; config profiles only when neither is given."""
    profiles: List[str] = list(cli_profiles)
    if profiles_file:
        text = Path(profiles_file).read_text(encoding="utf-8", errors="replace")
        profiles.extend(p for p in parse_active_profiles(text) if p not in profiles)
    return profiles if (cli_profiles or profiles_file) else list(configured)


def _describe(location: Location, cwd: Path) -> str:
    try:
        shown = Path(location.file).relative_to(cwd)
    except ValueError:
        shown = Path(location.file)
    return f"{shown}:{location.line}:{location.column} ({location.kind.value})"


@click.command()
@click.argument("report", type=click.Path())
@click.argument("node")
@click.option("--pom", "pom_file", required=True, type=click.Path(dir_okay=False),
              help="Module pom.xml the report was generated from")
@click.option("-P", "--profile", "profiles", multiple=True, help="Active profile id (repeatable)")
@click.option("--profiles-file", type=click.Path(exists=True, dir_okay=False),
              help="Saved output of mvn help:active-profiles")
@click.option("--effective-pom", type=click.Path(dir_okay=False),
              help="Saved output of mvn help:effective-pom, used as fallback")
@click.option("--repo", "repos", multiple=True, help="Local repository root searched first (repeatable)")
@click.option("--workspace", type=click.Path(file_okay=False),
              help="Workspace root holding module POMs (default: the POM's directory)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def origin(
    ctx: click.Context,
    report: str,
    node: str,
    pom_file: str,
    profiles: Tuple[str, ...],
    profiles_file: Optional[str],
    effective_pom: Optional[str],
    repos: Tuple[str, ...],
    workspace: Optional[str],
    as_json: bool,
) -> None:
    """
    Resolve where NODE's version comes from.

    Checks dependencyManagement, direct dependencies, imported BOMs and
    properties along the parent chain of --pom, then the effective POM.
    The first location is the primary origin; the rest are alternates.
    """
    renderer = JsonRenderer("origin")
    try:
        config = config_from_context(ctx)
        graph = load_report(report).graph
        node_id = resolve_node(graph, node)
        pom = Path(pom_file)
        if not pom.is_file():
            raise PomtraceError(f"POM not found: {pom_file}")
    except PomtraceError as e:
        if as_json:
            renderer.render_error(e)
        else:
            echo_error(str(e))
        sys.exit(1)

    flattened = Path(effective_pom) if effective_pom else config.resolve_path(config.effective_pom)
    workspace_root = Path(workspace) if workspace else config.resolve_path(config.workspace)
    resolver = OriginResolver(
        pom,
        active_profiles=_active_profiles(profiles, profiles_file, config.profiles),
        effective_pom=flattened,
        repositories=discover_local_repositories(list(repos) + config.repository_paths),
        workspace=WorkspaceIndex(workspace_root) if workspace_root else None,
    )

    dependency = graph.get_node(node_id)
    locations = resolver.resolve_for_node(graph, node_id)
    management = resolver.management_info(graph, node_id)
    target = resolver.locate(graph, node_id, include_remote=False)

    if as_json:
        renderer.render_success(OriginResponse(
            node_id=node_id,
            version=dependency.version if dependency else "",
            locations=locations,
            management=management,
            target=target,
        ))
        return

    cwd = Path.cwd()
    click.echo()
    click.echo(f"🎯 {click.style('Version Origin', bold=True)}")
    click.echo("═" * 60)
    click.echo(f"Node: {click.style(node_id, fg='green')}")
    if management is not None and management.managed_from:
        click.echo(f"Managed: {management.managed_from} → {management.managed_to}")
    click.echo()

    if not locations:
        label = dependency.ga if dependency else node_id
        echo_warning(f"No version origin found for {label}")
    else:
        click.echo(f"Primary:  {click.style(_describe(locations[0], cwd), fg='cyan')}")
        if len(locations) > 1:
            click.echo("Alternates:")
            for location in locations[1:]:
                click.echo(f"  - {_describe(location, cwd)}")

    if management is not None and management.import_location is not None:
        click.echo(f"Imported via: {_describe(management.import_location, cwd)}")

    if target is not None:
        where = _describe(target.location, cwd) if target.location else target.file
        suffix = " [read-only]" if target.readonly else ""
        click.echo(f"Navigate:  {where}{suffix}")
        if target.source_hint:
            echo_info(target.source_hint)
