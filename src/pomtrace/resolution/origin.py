"""
Version-origin resolution.

Answers "where does this dependency's version come from?" by running an
ordered strategy over the POM chain. The first strategy that yields
anything wins:

1. Managed-from hint present: dependencyManagement in the chain (document,
   then its active profiles), else BOM imports, per document in chain order.
2. A direct <dependency> with an explicit version, nearest document first.
3. dependencyManagement / BOM imports again, for nodes that lost their
   managed-from annotation.
4. The flattened effective POM, management entries preferred.

The first returned Location is the primary navigation target; the rest are
alternates. An empty list means no origin was found.
"""

import logging
from pathlib import Path
from typing import Collection, List, Optional, Protocol, Sequence

from ..analysis.conflicts import collect_managed_from_version
from ..analysis.traversal import collect_ancestor_ids, shortest_path_to_root
from ..core.cache import DocumentCache, ResolutionCache
from ..core.coordinates import parse_coordinate
from ..core.exceptions import DocumentParseError
from ..core.graph import DependencyGraph
from ..core.types import (
    MANAGEMENT_KINDS,
    DependencyNode,
    Location,
    LocationKind,
    ManagementInfo,
    PathTarget,
    dedupe_locations,
)
from ..parsing.pom import ConfigurationDocument, Section, read_document
from .chain import build_chain
from .imports import ManifestImportResolver
from .locator import find_block_position, find_version_position
from .properties import PropertyResolver
from .repository import find_manifest
from .workspace import WorkspaceIndex

logger = logging.getLogger(__name__)

# Kinds preferred as the navigation target for a managed dependency
PREFERRED_KINDS = frozenset({
    LocationKind.VERSION_MANAGEMENT,
    LocationKind.MANIFEST_DEFINE,
    LocationKind.PROPERTY,
})

LOCAL_REPOSITORY_HINT = "Opened local Maven repository POM (read-only)."
REMOTE_HINT = "Opened remote POM snapshot (read-only)."
EXTERNAL_HINT = "Opened external POM (read-only)."


class PomFetcher(Protocol):
    """Retrieves a POM that is not in any local repository."""

    def fetch(self, group_id: str, artifact_id: str, version: str) -> Optional[Path]:
        """Return a local path to the fetched POM, or None."""
        ...


def _declared_location(
    document: ConfigurationDocument,
    group_id: str,
    artifact_id: str,
    section: Section,
    kind: LocationKind,
) -> Location:
    line, column = find_version_position(document.text, group_id, artifact_id, section)
    return Location(file=str(document.file), line=line, column=column, kind=kind)


def _management_origin(
    chain: List[ConfigurationDocument],
    node: DependencyNode,
    active_profiles: Collection[str],
    properties: PropertyResolver,
    imports: ManifestImportResolver,
) -> List[Location]:
    # An explicit management entry anywhere in the chain outranks every import.
    for document in chain:
        entry = document.find_entry(node.group_id, node.artifact_id, active_profiles, Section.MANAGEMENT)
        if entry is not None and entry.version:
            managed = _declared_location(
                document, entry.group_id, entry.artifact_id,
                Section.MANAGEMENT, LocationKind.VERSION_MANAGEMENT,
            )
            return [managed] + properties.locations_for(entry.version)

    for document in chain:
        from_imports = imports.resolve(chain, node.group_id, node.artifact_id, documents=[document])
        if from_imports:
            return from_imports
    return []


def _direct_origin(
    chain: List[ConfigurationDocument],
    node: DependencyNode,
    active_profiles: Collection[str],
    properties: PropertyResolver,
) -> List[Location]:
    for document in chain:
        entry = document.find_entry(node.group_id, node.artifact_id, active_profiles, Section.DIRECT)
        if entry is not None and entry.version:
            direct = _declared_location(
                document, entry.group_id, entry.artifact_id,
                Section.DIRECT, LocationKind.DIRECT_DEPENDENCY,
            )
            return [direct] + properties.locations_for(entry.version)
    return []


def _flattened_origin(effective_pom: Path, node: DependencyNode) -> List[Location]:
    try:
        document = read_document(effective_pom)
    except DocumentParseError as e:
        logger.warning(f"Ignoring effective POM {e.path}: {e.message}")
        return []

    for section in (Section.MANAGEMENT, Section.DIRECT):
        entry = document.find_entry(node.group_id, node.artifact_id, (), section)
        if entry is not None:
            return [_declared_location(
                document, entry.group_id, entry.artifact_id,
                section, LocationKind.FLATTENED_FALLBACK,
            )]
    return []


def resolve_version_origin(
    pom: Path,
    node: DependencyNode,
    active_profiles: Collection[str] = (),
    effective_pom: Optional[Path] = None,
    repositories: Sequence[Path] = (),
    managed_from: Optional[str] = None,
    cache: Optional[DocumentCache[ConfigurationDocument]] = None,
) -> List[Location]:
    """
    Ordered origin locations for a node's version.

    Args:
        pom: The module pom.xml the chain starts from.
        node: The dependency to explain.
        active_profiles: Profile ids whose blocks are consulted.
        effective_pom: Optional help:effective-pom output for the fallback.
        repositories: Local repository roots for BOM lookups.
        managed_from: Overrides the node's own managed-from hint.
        cache: Optional document memo.

    Returns:
        Locations deduplicated on (kind, file, line, column), primary first.
    """
    hint = managed_from or node.managed_from_version
    chain = build_chain(pom, cache)
    properties = PropertyResolver(chain, active_profiles)
    imports = ManifestImportResolver(repositories, active_profiles, cache)

    if hint:
        locations = _management_origin(chain, node, active_profiles, properties, imports)
        if locations:
            return dedupe_locations(locations)

    locations = _direct_origin(chain, node, active_profiles, properties)
    if locations:
        return dedupe_locations(locations)

    locations = _management_origin(chain, node, active_profiles, properties, imports)
    if locations:
        return dedupe_locations(locations)

    if effective_pom is not None:
        return _flattened_origin(effective_pom, node)

    logger.debug(f"No version origin found for {node.id} from {pom}")
    return []


def find_dependency_declaration(pom: Path, group_id: str, artifact_id: str) -> Optional[Location]:
    """
    Start of the <dependency> block declaring group:artifact in a POM.

    Direct dependencies are preferred over dependencyManagement entries.
    Unreadable files yield None.
    """
    try:
        text = pom.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug(f"Cannot read {pom}: {e}")
        return None

    for section, kind in (
        (Section.DIRECT, LocationKind.DIRECT_DEPENDENCY),
        (Section.MANAGEMENT, LocationKind.VERSION_MANAGEMENT),
    ):
        position = find_block_position(text, group_id, artifact_id, section)
        if position is not None:
            line, column = position
            return Location(file=str(pom), line=line, column=column, kind=kind)
    return None


class OriginResolver:
    """
    Resolution orchestrator bound to one module POM and one graph.

    Owns the document cache, the workspace index and the path-target memo.
    Binding a different graph instance clears the memo and the workspace
    index; documents stay cached by file signature.

    Example:
        ```python
        resolver = OriginResolver(Path("pom.xml"), active_profiles=["dev"])
        locations = resolver.resolve_for_node(graph, node_id)
        target = resolver.locate(graph, node_id)
        ```
    """

    def __init__(
        self,
        pom: Path,
        active_profiles: Collection[str] = (),
        effective_pom: Optional[Path] = None,
        repositories: Sequence[Path] = (),
        workspace: Optional[WorkspaceIndex] = None,
        fetcher: Optional[PomFetcher] = None,
    ):
        self.pom = pom.resolve()
        self.active_profiles = list(active_profiles)
        self.effective_pom = effective_pom
        self.repositories = list(repositories)
        self.workspace = workspace if workspace is not None else WorkspaceIndex(self.pom.parent)
        self.fetcher = fetcher
        self.documents: DocumentCache[ConfigurationDocument] = DocumentCache()
        self.targets: ResolutionCache[PathTarget] = ResolutionCache()
        self._graph: Optional[DependencyGraph] = None

    def bind(self, graph: DependencyGraph) -> None:
        """Adopt a graph; a new graph instance invalidates derived state."""
        if graph is self._graph:
            return
        if self._graph is not None:
            logger.debug("Dependency graph replaced, clearing resolution state")
        self._graph = graph
        self.targets.clear()
        self.workspace.invalidate()

    def _origin(self, pom: Path, node: DependencyNode, managed_from: Optional[str] = None) -> List[Location]:
        return resolve_version_origin(
            pom,
            node,
            active_profiles=self.active_profiles,
            effective_pom=self.effective_pom,
            repositories=self.repositories,
            managed_from=managed_from,
            cache=self.documents,
        )

    def candidate_poms(self, graph: DependencyGraph, node_id: str) -> List[Path]:
        """The module POM, then workspace POMs of the node's ancestors."""
        self.bind(graph)
        candidates = [self.pom]
        for ancestor_id in collect_ancestor_ids(graph, node_id):
            workspace_pom = self.workspace.lookup(ancestor_id)
            if workspace_pom is not None and workspace_pom not in candidates:
                candidates.append(workspace_pom)
        return candidates

    def resolve_for_node(self, graph: DependencyGraph, node_id: str) -> List[Location]:
        """Origin locations from the first candidate POM that yields any."""
        node = graph.get_node(node_id)
        if node is None:
            return []
        for candidate in self.candidate_poms(graph, node_id):
            locations = self._origin(candidate, node)
            if locations:
                return locations
        return []

    def management_info(self, graph: DependencyGraph, node_id: str) -> Optional[ManagementInfo]:
        """
        Explain a managed dependency.

        The managed-from version is collected from the node or any sibling
        version of the same artifact. Returns None when the node shows no
        sign of management.
        """
        self.bind(graph)
        node = graph.get_node(node_id)
        if node is None:
            return None

        managed_from = collect_managed_from_version(graph, node)
        locations = self._origin(self.pom, node, managed_from=managed_from)
        location = next((loc for loc in locations if loc.kind in PREFERRED_KINDS), None)
        import_location = next((loc for loc in locations if loc.kind == LocationKind.MANIFEST_IMPORT), None)
        chain = [loc for loc in locations if loc.kind in MANAGEMENT_KINDS]

        if not managed_from and location is None and import_location is None and not chain:
            return None
        return ManagementInfo(
            managed_from=managed_from,
            managed_to=node.version,
            location=location,
            import_location=import_location,
            chain=chain,
        )

    def locate(
        self,
        graph: DependencyGraph,
        node_id: str,
        include_remote: bool = True,
    ) -> Optional[PathTarget]:
        """
        Best navigation target for a node.

        The preferred management location (or first origin location) when
        one exists, else the declaration along the node's shortest path.
        """
        self.bind(graph)
        node = graph.get_node(node_id)
        if node is None:
            return None

        managed_from = collect_managed_from_version(graph, node)
        locations = self._origin(self.pom, node, managed_from=managed_from)
        preferred = next((loc for loc in locations if loc.kind in PREFERRED_KINDS), None)
        if preferred is None and locations:
            preferred = locations[0]
        if preferred is not None:
            editable = self.workspace.contains(Path(preferred.file))
            return PathTarget(
                file=preferred.file,
                location=preferred,
                readonly=not editable,
                source_hint=None if editable else EXTERNAL_HINT,
            )

        path = shortest_path_to_root(graph, node_id)
        prev_id = path[1] if len(path) >= 2 else None
        return self.path_node_target(graph, node_id, prev_id, include_remote)

    def path_node_target(
        self,
        graph: DependencyGraph,
        node_id: str,
        prev_id: Optional[str] = None,
        include_remote: bool = False,
    ) -> Optional[PathTarget]:
        """
        Where a node on a dependency path navigates to.

        With a previous node, this is the node's declaration inside the
        previous node's POM. Results, including misses, are memoised per
        (node, previous node, remote flag) until the graph changes.
        """
        self.bind(graph)
        key = ResolutionCache.key(node_id, prev_id, include_remote)
        hit, cached = self.targets.lookup(key)
        if hit:
            return cached
        target = self._resolve_path_node_target(node_id, prev_id, include_remote)
        self.targets.store(key, target)
        return target

    def _resolve_path_node_target(
        self,
        node_id: str,
        prev_id: Optional[str],
        include_remote: bool,
    ) -> Optional[PathTarget]:
        if not node_id:
            return None
        coord = parse_coordinate(node_id)

        if prev_id:
            parent_target = self._pom_target(prev_id, include_remote)
            if parent_target is not None:
                declaration = find_dependency_declaration(
                    Path(parent_target.file), coord.group_id, coord.artifact_id
                )
                if declaration is not None:
                    return parent_target.model_copy(update={"location": declaration})
                return parent_target

        self_target = self._pom_target(node_id, include_remote)
        if self_target is not None:
            return self_target

        declaration = find_dependency_declaration(self.pom, coord.group_id, coord.artifact_id)
        if declaration is not None:
            return PathTarget(file=str(self.pom), location=declaration, readonly=False)
        return None

    def _pom_target(self, node_id: str, include_remote: bool) -> Optional[PathTarget]:
        """The POM file describing a node: workspace, local repository, then remote."""
        workspace_pom = self.workspace.lookup(node_id)
        if workspace_pom is not None:
            return PathTarget(file=str(workspace_pom), readonly=False)

        coord = parse_coordinate(node_id)
        local = find_manifest(self.repositories, coord.group_id, coord.artifact_id, coord.version)
        if local is not None:
            return PathTarget(file=str(local), readonly=True, source_hint=LOCAL_REPOSITORY_HINT)

        if include_remote and self.fetcher is not None:
            remote = self.fetcher.fetch(coord.group_id, coord.artifact_id, coord.version)
            if remote is not None:
                return PathTarget(file=str(remote), readonly=True, source_hint=REMOTE_HINT)
        return None
