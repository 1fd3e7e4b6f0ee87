"""
Core type definitions for pomtrace.

Nodes and locations are pydantic models: nodes are frozen once the graph is
finalised, locations are frozen from birth and compare structurally so they
can be deduplicated with a plain set.
"""

from enum import StrEnum
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class LocationKind(StrEnum):
    """Where in the POM hierarchy a version (or part of it) is declared."""
    VERSION_MANAGEMENT = "version-management"
    DIRECT_DEPENDENCY = "direct-dependency"
    PROPERTY = "property"
    FLATTENED_FALLBACK = "flattened-fallback"
    MANIFEST_DEFINE = "manifest-define"
    MANIFEST_IMPORT = "manifest-import"


# Kinds that describe dependency management rather than a plain declaration
MANAGEMENT_KINDS = frozenset({
    LocationKind.VERSION_MANAGEMENT,
    LocationKind.MANIFEST_IMPORT,
    LocationKind.MANIFEST_DEFINE,
    LocationKind.PROPERTY,
})


class DependencyNode(BaseModel):
    """
    One distinct artifact version in the dependency tree.

    Identity is the canonical id
    ``groupId:artifactId[:packaging][:classifier]:version[:scope]``; two
    conflicting versions of the same artifact are two nodes.
    """
    id: str
    group_id: str
    artifact_id: str
    version: str
    classifier: Optional[str] = None
    packaging: Optional[str] = None
    scope: Optional[str] = None
    managed_from_version: Optional[str] = None
    omitted_reason: Optional[str] = None
    conflict_with_version: Optional[str] = None
    children: Tuple[str, ...] = ()
    parents: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def ga(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    @property
    def conflict_key(self) -> str:
        """Grouping key for the flattened view: group, artifact, classifier."""
        return f"{self.group_id}:{self.artifact_id}:{self.classifier or ''}"

    @property
    def is_omitted(self) -> bool:
        return bool(self.omitted_reason and self.omitted_reason.strip())

    @property
    def label(self) -> str:
        classifier = f":{self.classifier}" if self.classifier else ""
        return f"{self.group_id}:{self.artifact_id}:{self.version}{classifier}"


class Location(BaseModel):
    """A 1-indexed position in a POM file, tagged with what was found there."""
    file: str
    line: int
    column: int
    kind: LocationKind

    model_config = ConfigDict(frozen=True)

    @property
    def dedupe_key(self) -> Tuple[str, str, int, int]:
        return (self.kind.value, self.file, self.line, self.column)

    def describe(self) -> str:
        return f"{self.file}:{self.line}:{self.column} ({self.kind.value})"


def dedupe_locations(locations: Iterable[Location]) -> List[Location]:
    """Drop repeated (kind, file, line, column) entries, keeping first-seen order."""
    seen = set()
    unique: List[Location] = []
    for location in locations:
        if location.dedupe_key in seen:
            continue
        seen.add(location.dedupe_key)
        unique.append(location)
    return unique


class EffectiveDependency(BaseModel):
    """
    A conflict group collapsed to its representative node.

    Display values are looked up across the whole group because Maven may
    record the informative annotation on a sibling rather than on the
    node that won.
    """
    node: DependencyNode
    depth: Optional[int] = None
    conflict_count: int = 0
    group_node_ids: List[str] = Field(default_factory=list)
    managed_from: str = ""
    omitted: str = ""
    conflicts_with: List[str] = Field(default_factory=list)

    @property
    def has_conflict(self) -> bool:
        return self.conflict_count > 0

    @property
    def variant_ids(self) -> List[str]:
        """Group members other than the representative."""
        return [nid for nid in self.group_node_ids if nid != self.node.id]


class ManagementInfo(BaseModel):
    """Why a managed dependency ended up at its version."""
    managed_from: str = ""
    managed_to: Optional[str] = None
    location: Optional[Location] = None
    import_location: Optional[Location] = None
    chain: List[Location] = Field(default_factory=list)

    @property
    def kind(self) -> Optional[LocationKind]:
        return self.location.kind if self.location else None


class PathTarget(BaseModel):
    """The POM file (and optional position) a path node navigates to."""
    file: str
    location: Optional[Location] = None
    readonly: bool = False
    source_hint: Optional[str] = None
