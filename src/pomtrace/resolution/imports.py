"""
Manifest (BOM) import resolver.

A manifest import is a dependencyManagement entry with type ``pom`` and
scope ``import``. Resolution searches imported manifests depth-first for a
management entry of the target artifact. The search runs on an explicit
stack of frames with one visited set shared by the whole search, so cyclic
imports terminate without a depth limit.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Collection, Iterator, List, Optional, Sequence, Tuple

from ..core.cache import DocumentCache
from ..core.exceptions import DocumentParseError
from ..core.types import Location, LocationKind, dedupe_locations
from ..parsing.pom import ConfigurationDocument, DependencyEntry, Section
from .chain import load_document
from .locator import find_block_position, find_version_position
from .properties import PropertyResolver, has_unresolved_refs
from .repository import find_manifest

logger = logging.getLogger(__name__)

ImportDeclaration = Tuple[DependencyEntry, ConfigurationDocument]


def collect_imports(
    documents: Sequence[ConfigurationDocument],
    active_profiles: Collection[str],
) -> List[ImportDeclaration]:
    """Import entries of each document and its active profiles, in chain order."""
    declarations: List[ImportDeclaration] = []
    for document in documents:
        for entry in document.import_entries(active_profiles):
            declarations.append((entry, document))
    return declarations


def import_location(declaration: ImportDeclaration) -> Optional[Location]:
    """Where the import is declared, or None if the block cannot be found."""
    entry, source = declaration
    position = find_block_position(source.text, entry.group_id, entry.artifact_id, Section.MANAGEMENT)
    if position is None:
        return None
    line, column = position
    return Location(file=str(source.file), line=line, column=column, kind=LocationKind.MANIFEST_IMPORT)


@dataclass
class _Frame:
    chain: List[ConfigurationDocument]
    imports: Iterator[ImportDeclaration]
    trail: List[Location] = field(default_factory=list)


class ManifestImportResolver:
    """
    Searches imported manifests in local repositories.

    Example:
        ```python
        resolver = ManifestImportResolver(repositories, active_profiles=[])
        locations = resolver.resolve(chain, "com.fasterxml.jackson.core", "jackson-databind")
        ```
    """

    def __init__(
        self,
        repositories: Sequence[Path],
        active_profiles: Collection[str] = (),
        cache: Optional[DocumentCache[ConfigurationDocument]] = None,
    ):
        self.repositories = list(repositories)
        self.active_profiles = list(active_profiles)
        self.cache = cache
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def resolve(
        self,
        chain: Sequence[ConfigurationDocument],
        group_id: str,
        artifact_id: str,
        documents: Optional[Sequence[ConfigurationDocument]] = None,
    ) -> List[Location]:
        """
        Find the manifest that manages group:artifact.

        Args:
            chain: The configuration chain used for property resolution.
            group_id: Target group.
            artifact_id: Target artifact.
            documents: Documents whose imports start the search; the whole
                chain when omitted.

        Returns:
            [manifest-import locations from the outermost declaration inwards,
            manifest-define, property locations], or [] when no manifest
            manages the artifact.
        """
        roots = list(documents) if documents is not None else list(chain)
        visited: set = set()
        stack = [_Frame(chain=list(chain), imports=iter(collect_imports(roots, self.active_profiles)))]

        while stack:
            frame = stack[-1]
            declaration = next(frame.imports, None)
            if declaration is None:
                stack.pop()
                continue

            path = self._manifest_path(frame.chain, declaration)
            if path is None:
                continue
            key = str(path.resolve())
            if key in visited:
                continue
            visited.add(key)

            try:
                manifest = load_document(path, self.cache)
            except DocumentParseError as e:
                self._logger.warning(f"Skipping unreadable manifest {e.path}: {e.message}")
                continue

            nested_chain = [manifest] + frame.chain
            trail = list(frame.trail)
            declared_at = import_location(declaration)
            if declared_at is not None:
                trail.append(declared_at)

            match = manifest.find_entry(group_id, artifact_id, self.active_profiles, Section.MANAGEMENT)
            if match is not None and match.version:
                line, column = find_version_position(
                    manifest.text, match.group_id, match.artifact_id, Section.MANAGEMENT
                )
                define = Location(
                    file=str(manifest.file), line=line, column=column, kind=LocationKind.MANIFEST_DEFINE
                )
                properties = PropertyResolver(nested_chain, self.active_profiles)
                self._logger.debug(f"{group_id}:{artifact_id} managed by manifest {manifest.file}")
                return dedupe_locations(trail + [define] + properties.locations_for(match.version))

            nested = collect_imports([manifest], self.active_profiles)
            if nested:
                stack.append(_Frame(chain=nested_chain, imports=iter(nested), trail=trail))

        return []

    def _manifest_path(
        self,
        chain: List[ConfigurationDocument],
        declaration: ImportDeclaration,
    ) -> Optional[Path]:
        entry, source = declaration
        if not entry.version:
            return None
        properties = PropertyResolver(chain, self.active_profiles)
        version = properties.interpolate(source, entry.version) or ""
        group_id = properties.interpolate(source, entry.group_id) or ""
        artifact_id = properties.interpolate(source, entry.artifact_id) or ""
        if any(has_unresolved_refs(v) for v in (version, group_id, artifact_id)):
            self._logger.debug(f"Unresolved import {entry.group_id}:{entry.artifact_id}:{entry.version}")
            return None

        path = find_manifest(self.repositories, group_id, artifact_id, version)
        if path is None:
            self._logger.debug(f"Manifest {group_id}:{artifact_id}:{version} not in local repositories")
        return path
