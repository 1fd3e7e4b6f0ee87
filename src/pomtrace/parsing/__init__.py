"""
Parsing package for pomtrace.

- tree: dependency:tree report text to DependencyGraph
- pom: pom.xml to ConfigurationDocument
- profiles: help:active-profiles output to profile ids
"""

from .pom import (
    ConfigurationDocument,
    DependencyEntry,
    ProfileBlock,
    Section,
    parse_document,
    read_document,
)
from .profiles import parse_active_profiles
from .tree import TreeParseResult, TreeReportParser, parse_tree_report

__all__ = [
    "ConfigurationDocument",
    "DependencyEntry",
    "ProfileBlock",
    "Section",
    "parse_document",
    "read_document",
    "parse_active_profiles",
    "TreeParseResult",
    "TreeReportParser",
    "parse_tree_report",
]
