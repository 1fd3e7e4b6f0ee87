"""
POM document reader.

Parses a pom.xml into a ConfigurationDocument: the project's own
coordinates, its parent pointer, properties, dependencyManagement entries,
direct dependencies and profiles. The raw text is kept alongside so the
text locator can map semantic matches back to line/column positions, which
ElementTree does not preserve.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Collection, Dict, List, Optional

from ..core.exceptions import DocumentParseError

logger = logging.getLogger(__name__)

DEFAULT_PARENT_RELATIVE_PATH = "../pom.xml"
POM_FILE_NAME = "pom.xml"


class Section(StrEnum):
    """Which dependency list of a document to search."""
    MANAGEMENT = "dependencyManagement"
    DIRECT = "dependencies"


@dataclass
class DependencyEntry:
    """
    A <dependency> element from either dependencyManagement or dependencies.

    Attributes:
        group_id: groupId, as written (may contain ${...}).
        artifact_id: artifactId, as written.
        version: Version or property reference; None when inherited/managed.
        type: Packaging type (``pom`` for BOM imports).
        scope: Maven scope (``import`` for BOM imports).
        classifier: Optional classifier.
    """

    group_id: str
    artifact_id: str
    version: Optional[str] = None
    type: Optional[str] = None
    scope: Optional[str] = None
    classifier: Optional[str] = None

    @property
    def is_import(self) -> bool:
        """True for a Bill-of-Materials import."""
        return self.type == "pom" and self.scope == "import"

    def matches(self, group_id: str, artifact_id: str) -> bool:
        return self.group_id == group_id and self.artifact_id == artifact_id


@dataclass
class ProfileBlock:
    """A <profile>; only consulted when its id is in the active set."""

    id: Optional[str] = None
    properties: Dict[str, str] = field(default_factory=dict)
    dependency_management: List[DependencyEntry] = field(default_factory=list)
    dependencies: List[DependencyEntry] = field(default_factory=list)

    def entries(self, section: Section) -> List[DependencyEntry]:
        if section == Section.MANAGEMENT:
            return self.dependency_management
        return self.dependencies


@dataclass
class ConfigurationDocument:
    """
    One parsed pom.xml.

    group_id and version fall back to the <parent> element, as Maven does.
    parent_path is the resolved local path of the parent POM, or None when
    the document has no parent (or opts out with an empty relativePath).
    """

    file: Path
    text: str
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None
    parent_path: Optional[Path] = None
    properties: Dict[str, str] = field(default_factory=dict)
    dependency_management: List[DependencyEntry] = field(default_factory=list)
    dependencies: List[DependencyEntry] = field(default_factory=list)
    profiles: List[ProfileBlock] = field(default_factory=list)

    def entries(self, section: Section) -> List[DependencyEntry]:
        if section == Section.MANAGEMENT:
            return self.dependency_management
        return self.dependencies

    def active_profiles(self, active: Collection[str]) -> List[ProfileBlock]:
        if not active:
            return []
        return [p for p in self.profiles if p.id and p.id in active]

    def find_entry(
        self,
        group_id: str,
        artifact_id: str,
        active: Collection[str],
        section: Section,
    ) -> Optional[DependencyEntry]:
        """First (group, artifact) match in the document, then in active profiles."""
        for entry in self.entries(section):
            if entry.matches(group_id, artifact_id):
                return entry
        for profile in self.active_profiles(active):
            for entry in profile.entries(section):
                if entry.matches(group_id, artifact_id):
                    return entry
        return None

    def import_entries(self, active: Collection[str]) -> List[DependencyEntry]:
        """BOM imports declared by the document and its active profiles."""
        imports = [e for e in self.dependency_management if e.is_import]
        for profile in self.active_profiles(active):
            imports.extend(e for e in profile.dependency_management if e.is_import)
        return imports


def _local_name(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _child(element: Optional[ET.Element], name: str) -> Optional[ET.Element]:
    if element is None:
        return None
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _children(element: Optional[ET.Element], name: str) -> List[ET.Element]:
    if element is None:
        return []
    return [child for child in element if _local_name(child.tag) == name]


def _text(element: Optional[ET.Element], name: str) -> Optional[str]:
    child = _child(element, name)
    if child is None:
        return None
    return (child.text or "").strip()


def _properties(element: Optional[ET.Element]) -> Dict[str, str]:
    props: Dict[str, str] = {}
    for child in element if element is not None else []:
        name = _local_name(child.tag)
        if name:
            props[name] = (child.text or "").strip()
    return props


def _dependency_list(container: Optional[ET.Element]) -> List[DependencyEntry]:
    entries = []
    for dep in _children(_child(container, "dependencies"), "dependency"):
        group_id = _text(dep, "groupId")
        artifact_id = _text(dep, "artifactId")
        if not group_id or not artifact_id:
            continue
        entries.append(
            DependencyEntry(
                group_id=group_id,
                artifact_id=artifact_id,
                version=_text(dep, "version"),
                type=_text(dep, "type"),
                scope=_text(dep, "scope"),
                classifier=_text(dep, "classifier"),
            )
        )
    return entries


def _profile(element: ET.Element) -> ProfileBlock:
    return ProfileBlock(
        id=_text(element, "id") or None,
        properties=_properties(_child(element, "properties")),
        dependency_management=_dependency_list(_child(element, "dependencyManagement")),
        dependencies=_dependency_list(element),
    )


def resolve_parent_path(parent: Optional[ET.Element], current_file: Path) -> Optional[Path]:
    """
    Locate the parent POM on disk.

    The default relative location is ../pom.xml; an empty <relativePath/>
    disables local lookup; a relativePath naming a directory means the
    pom.xml inside it.
    """
    if parent is None:
        return None
    relative = _text(parent, "relativePath")
    if relative is None:
        relative = DEFAULT_PARENT_RELATIVE_PATH
    elif relative == "":
        return None

    candidate = (current_file.parent / relative).resolve()
    if candidate.is_dir():
        candidate = candidate / POM_FILE_NAME
    return candidate


def parse_document(text: str, file: Path) -> ConfigurationDocument:
    """
    Parse POM text.

    Raises:
        DocumentParseError: If the text is not well-formed XML.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise DocumentParseError(file, f"malformed XML ({e})")

    # help:effective-pom on a reactor wraps several projects in <projects>
    if _local_name(root.tag) == "projects":
        first = _child(root, "project")
        if first is not None:
            root = first

    parent = _child(root, "parent")
    return ConfigurationDocument(
        file=file,
        text=text,
        group_id=_text(root, "groupId") or _text(parent, "groupId"),
        artifact_id=_text(root, "artifactId"),
        version=_text(root, "version") or _text(parent, "version"),
        parent_path=resolve_parent_path(parent, file),
        properties=_properties(_child(root, "properties")),
        dependency_management=_dependency_list(_child(root, "dependencyManagement")),
        dependencies=_dependency_list(root),
        profiles=[_profile(p) for p in _children(_child(root, "profiles"), "profile")],
    )


def read_document(path: Path) -> ConfigurationDocument:
    """
    Read and parse a pom.xml from disk.

    Raises:
        DocumentParseError: If the file cannot be read or parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        text = path.read_bytes().decode("latin-1", errors="ignore")
    except OSError as e:
        raise DocumentParseError(path, f"cannot read file ({e})")
    return parse_document(text, path)
