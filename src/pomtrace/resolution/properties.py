"""
Property resolver.

Performs one substitution pass over ``${name}`` references. A property whose
own value contains a reference is not expanded further. Reserved project
names resolve from the document being interpolated and are never searched
for elsewhere in the chain.
"""

import re
from typing import Collection, Dict, List, Optional, Sequence

from ..core.types import Location, LocationKind
from ..parsing.pom import ConfigurationDocument
from .locator import find_property_position

_PROPERTY_REF = re.compile(r"\$\{([^}]+)\}")

RESERVED_PROPERTIES: Dict[str, str] = {
    "project.version": "version",
    "pom.version": "version",
    "project.groupId": "group_id",
    "pom.groupId": "group_id",
    "project.artifactId": "artifact_id",
    "pom.artifactId": "artifact_id",
}


def get_property_refs(value: Optional[str]) -> List[str]:
    """Names referenced by ``${...}`` in value, in order, without duplicates."""
    if not value:
        return []
    names: List[str] = []
    for name in _PROPERTY_REF.findall(value):
        if name not in names:
            names.append(name)
    return names


def is_reserved(name: str) -> bool:
    return name in RESERVED_PROPERTIES


def has_unresolved_refs(value: str) -> bool:
    return "${" in value


class PropertyResolver:
    """
    Resolves property references against a configuration chain.

    Example:
        ```python
        resolver = PropertyResolver(chain, active_profiles=["dev"])
        resolver.interpolate(chain[0], "${jackson.version}")  # "2.17.0"
        ```
    """

    def __init__(
        self,
        chain: Sequence[ConfigurationDocument],
        active_profiles: Collection[str] = (),
    ):
        self.chain = list(chain)
        self.active_profiles = list(active_profiles)

    def lookup(self, name: str) -> Optional[str]:
        """Raw value of a non-reserved property: first definition in chain order."""
        document = self._defining_document(name)
        if document is None:
            return None
        if name in document.properties:
            return document.properties[name]
        for profile in document.active_profiles(self.active_profiles):
            if name in profile.properties:
                return profile.properties[name]
        return None

    def interpolate(self, document: ConfigurationDocument, value: Optional[str]) -> Optional[str]:
        """Substitute every ``${name}`` once; unknown names stay literal."""
        if not value:
            return value

        def replace(match: re.Match) -> str:
            name = match.group(1)
            if is_reserved(name):
                resolved = getattr(document, RESERVED_PROPERTIES[name])
                return resolved if resolved else match.group(0)
            resolved = self.lookup(name)
            return resolved if resolved is not None else match.group(0)

        return _PROPERTY_REF.sub(replace, value)

    def locate(self, name: str) -> Optional[Location]:
        """Location of the defining tag for a non-reserved property."""
        document = self._defining_document(name)
        if document is None:
            return None
        line, column = find_property_position(document.text, name)
        return Location(
            file=str(document.file),
            line=line,
            column=column,
            kind=LocationKind.PROPERTY,
        )

    def locations_for(self, value: Optional[str]) -> List[Location]:
        """Property locations for every non-reserved reference in value."""
        locations: List[Location] = []
        for name in get_property_refs(value):
            if is_reserved(name):
                continue
            location = self.locate(name)
            if location is not None and location not in locations:
                locations.append(location)
        return locations

    def _defining_document(self, name: str) -> Optional[ConfigurationDocument]:
        for document in self.chain:
            if name in document.properties:
                return document
            for profile in document.active_profiles(self.active_profiles):
                if name in profile.properties:
                    return document
        return None
