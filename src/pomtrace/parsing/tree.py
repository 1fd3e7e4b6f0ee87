"""
Dependency Tree Report Parser.

Turns the text output of ``mvn dependency:tree -Dverbose`` into a
DependencyGraph:

    com.acme:app:jar:1.0.0
    +- org.slf4j:slf4j-api:jar:2.0.9:compile
    |  \\- (org.slf4j:slf4j-api:jar:1.7.36:compile - omitted for conflict with 2.0.9)
    \\- com.google.guava:guava:jar:33.0.0-jre:compile (version managed from 31.1-jre)

Each line is classified as a root line (depth 0), a branch line
(``+- `` / ``\\- `` glyph, depth from indentation) or non-data. A single
depth stack tracks the current ancestry. Bad lines are skipped, never fatal.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from ..core.coordinates import clean_coordinate
from ..core.graph import DependencyGraph, GraphBuilder

logger = logging.getLogger(__name__)

# "[INFO] " style prefix when the report was captured from console output.
# Only one following space is consumed; the rest is tree indentation.
_LOG_PREFIX = re.compile(r"^\[[A-Z]+\] ?")
_BRANCH_LINE = re.compile(r"^([|\s]*)(?:\+- |\\- )(.+)$")

_MANAGED_FROM = re.compile(r"(?<!scope )managed from ([^ );]+)")
_CONFLICT_WITH = re.compile(r"omitted for conflict with ([^ )]+)")
_OMITTED_FOR = re.compile(r"omitted for ([^)]+)\)")
_ANNOTATION = re.compile(r"\s+\(.*\)$")


@dataclass
class TreeLine:
    """A classified data line of the report."""

    depth: int
    coord: str
    managed_from_version: Optional[str] = None
    omitted_reason: Optional[str] = None
    conflict_with_version: Optional[str] = None


@dataclass
class TreeParseResult:
    """
    Result of parsing a tree report.

    Attributes:
        graph: The finished, immutable graph.
        lines_parsed: Data lines that produced or augmented a node.
        lines_skipped: Non-empty lines that were not dependency data.
        warnings: Structured notes about lines that looked like data but
            could not be placed (e.g. a depth with no parent on the stack).
    """

    graph: DependencyGraph
    lines_parsed: int = 0
    lines_skipped: int = 0
    warnings: List[str] = field(default_factory=list)


def strip_log_prefix(raw: str) -> str:
    return _LOG_PREFIX.sub("", raw, count=1).rstrip()


def parse_tree_line(line: str) -> Optional[TreeLine]:
    """
    Classify one prefix-stripped line.

    Returns:
        TreeLine for root and branch lines, None for anything else.
    """
    if line.startswith("+- ") or line.startswith("\\- "):
        return _parse_payload(line[3:], 1)

    match = _BRANCH_LINE.match(line)
    if match:
        depth = len(match.group(1)) // 3 + 1
        return _parse_payload(match.group(2), depth)

    if not line.startswith("(") and ":" in line and not line[:1].isspace():
        return _parse_payload(line, 0)

    return None


def _parse_payload(text: str, depth: int) -> TreeLine:
    managed = _MANAGED_FROM.search(text)
    conflict = _CONFLICT_WITH.search(text)
    omitted = _OMITTED_FOR.search(text)
    coord = _ANNOTATION.sub("", text).strip()
    return TreeLine(
        depth=depth,
        coord=coord,
        managed_from_version=managed.group(1) if managed else None,
        omitted_reason=omitted.group(1) if omitted else None,
        conflict_with_version=conflict.group(1) if conflict else None,
    )


class TreeReportParser:
    """
    Stateful single-pass parser for one report.

    Example:
        ```python
        result = TreeReportParser().parse(report_text)
        for root_id in result.graph.roots:
            print(root_id)
        ```
    """

    def __init__(self):
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def parse(self, text: str) -> TreeParseResult:
        builder = GraphBuilder()
        stack: List[Optional[str]] = []
        parsed = 0
        skipped = 0
        warnings: List[str] = []

        for line_no, raw in enumerate(text.splitlines(), start=1):
            line = strip_log_prefix(raw)
            if not line:
                continue
            if ":" not in line:
                skipped += 1
                continue

            tree_line = parse_tree_line(line)
            if tree_line is None:
                skipped += 1
                self._logger.debug(f"Skipping line {line_no}: {line!r}")
                continue

            node_id = clean_coordinate(tree_line.coord)
            if ":" not in node_id or any(ch.isspace() for ch in node_id):
                skipped += 1
                self._logger.debug(f"Skipping non-coordinate line {line_no}: {line!r}")
                continue

            builder.add_node(
                node_id,
                managed_from_version=tree_line.managed_from_version,
                omitted_reason=tree_line.omitted_reason,
                conflict_with_version=tree_line.conflict_with_version,
            )
            parsed += 1

            depth = tree_line.depth
            if depth == 0:
                builder.declare_root(node_id)
                stack = [node_id]
                continue

            del stack[depth:]
            parent_id = stack[depth - 1] if len(stack) >= depth else None
            if parent_id is not None:
                builder.add_edge(parent_id, node_id)
            else:
                warnings.append(f"line {line_no}: no parent at depth {depth - 1} for {node_id}")
                self._logger.debug(warnings[-1])
            stack.extend([None] * (depth - len(stack)))
            stack.append(node_id)

        graph = builder.build()
        self._logger.debug(
            f"Parsed {graph.node_count} nodes ({parsed} lines, {skipped} skipped), "
            f"{len(graph.roots)} root(s)"
        )
        return TreeParseResult(
            graph=graph,
            lines_parsed=parsed,
            lines_skipped=skipped,
            warnings=warnings,
        )


def parse_tree_report(text: str) -> DependencyGraph:
    """Convenience function: parse report text straight to a graph."""
    return TreeReportParser().parse(text).graph
