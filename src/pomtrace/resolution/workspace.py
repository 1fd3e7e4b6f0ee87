"""
Workspace POM index.

Maps ``group:artifact`` to the module pom.xml files found under a workspace
root, so path nodes that belong to the reactor open the editable module POM
rather than a repository copy.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from ..config import is_ignored_directory
from ..core.coordinates import UNKNOWN_VERSION, parse_coordinate
from ..core.exceptions import DocumentParseError
from ..parsing.pom import POM_FILE_NAME, read_document
from .properties import PropertyResolver

logger = logging.getLogger(__name__)


@dataclass
class WorkspacePom:
    """One indexed module POM."""

    path: Path
    group_id: str
    artifact_id: str
    version: Optional[str] = None


class WorkspaceIndex:
    """
    Lazily built g:a index over a workspace tree.

    The index is built on first lookup and kept until invalidate() is called
    or the root changes.
    """

    def __init__(self, root: Optional[Path] = None):
        self._root = root.resolve() if root is not None else None
        self._entries: Optional[Dict[str, List[WorkspacePom]]] = None

    @property
    def root(self) -> Optional[Path]:
        return self._root

    @root.setter
    def root(self, value: Optional[Path]) -> None:
        resolved = value.resolve() if value is not None else None
        if resolved != self._root:
            self._root = resolved
            self.invalidate()

    def invalidate(self) -> None:
        if self._entries is not None:
            logger.debug(f"Invalidating workspace POM index for {self._root}")
        self._entries = None

    def contains(self, path: Path) -> bool:
        """Whether a file lives under the workspace root."""
        if self._root is None:
            return False
        return path.resolve().is_relative_to(self._root)

    def scan(self) -> Dict[str, List[WorkspacePom]]:
        entries: Dict[str, List[WorkspacePom]] = {}
        if self._root is None or not self._root.is_dir():
            self._entries = entries
            return entries

        for dirpath, dirnames, filenames in os.walk(self._root):
            dirnames[:] = sorted(d for d in dirnames if not is_ignored_directory(d))
            if POM_FILE_NAME not in filenames:
                continue
            pom = self._read(Path(dirpath) / POM_FILE_NAME)
            if pom is not None:
                entries.setdefault(f"{pom.group_id}:{pom.artifact_id}", []).append(pom)

        self._entries = entries
        logger.debug(f"Indexed {sum(len(v) for v in entries.values())} workspace POM(s) under {self._root}")
        return entries

    def _read(self, path: Path) -> Optional[WorkspacePom]:
        try:
            document = read_document(path)
        except DocumentParseError as e:
            logger.debug(f"Skipping workspace POM {e.path}: {e.message}")
            return None

        properties = PropertyResolver([document])
        group_id = properties.interpolate(document, document.group_id)
        artifact_id = properties.interpolate(document, document.artifact_id)
        if not group_id or not artifact_id:
            return None
        return WorkspacePom(
            path=path,
            group_id=group_id,
            artifact_id=artifact_id,
            version=properties.interpolate(document, document.version),
        )

    def lookup(self, node_id: str) -> Optional[Path]:
        """
        Workspace pom.xml for a coordinate id.

        Prefers the module whose version matches exactly, else the first
        module found for the group and artifact.
        """
        entries = self._entries if self._entries is not None else self.scan()
        coord = parse_coordinate(node_id)
        candidates = entries.get(coord.ga, [])
        if not candidates:
            return None
        if coord.version and coord.version != UNKNOWN_VERSION:
            for candidate in candidates:
                if candidate.version == coord.version:
                    return candidate.path
        return candidates[0].path
