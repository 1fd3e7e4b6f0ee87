"""
CLI Utilities - Shared helper functions for command line operations.

Formatted printing, report and config loading, and node resolution used
across the pomtrace commands.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from ..config import TraceConfig
from ..core.exceptions import NodeNotFoundError, ReportNotFoundError
from ..core.graph import DependencyGraph
from ..parsing.tree import TreeParseResult, TreeReportParser

logger = logging.getLogger(__name__)


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    click.echo(click.style(f"   {message}", dim=True))


def load_report(report_file: str) -> TreeParseResult:
    """
    Parse a saved ``mvn dependency:tree -Dverbose`` report.

    Raises:
        ReportNotFoundError: If the file does not exist.
    """
    path = Path(report_file)
    if not path.is_file():
        raise ReportNotFoundError(path)
    text = path.read_text(encoding="utf-8", errors="replace")
    result = TreeReportParser().parse(text)
    logger.debug(
        f"Loaded {result.graph.node_count} nodes from {path} "
        f"({result.lines_skipped} non-dependency lines)"
    )
    return result


def load_config(config_file: Optional[str]) -> TraceConfig:
    """
    Load pomtrace.toml from an explicit path or the working directory.

    Raises:
        ConfigError: If the file is malformed.
    """
    if config_file:
        return TraceConfig.load(Path(config_file))
    return TraceConfig.discover()


def config_from_context(ctx: click.Context) -> TraceConfig:
    """Config for a command, honouring the group's --config option when present."""
    obj = ctx.find_root().obj or {}
    return load_config(obj.get("config_file"))


def resolve_node(graph: DependencyGraph, query: str) -> str:
    """
    Resolve a full id or a partial name to a node id.

    Exact ids win; otherwise the first case-insensitive substring match is
    used and the ambiguity is reported.

    Raises:
        NodeNotFoundError: If nothing matches.
    """
    if graph.has_node(query):
        return query

    matches = graph.find_nodes(query)
    if not matches:
        raise NodeNotFoundError(query)

    if len(matches) > 1:
        click.echo(
            click.style(f"Ambiguous '{query}' ({len(matches)} matches). Using first match: {matches[0]}", dim=True),
            err=True,
        )
    return matches[0]
