"""
Maven coordinate parsing and formatting.

Tree reports print artifacts as
``groupId:artifactId[:packaging[:classifier]]:version[:scope]``. Parsing is
tolerant: anything with fewer than three segments degrades to a node whose
group and artifact are the raw text and whose version is ``unknown``, so a
single odd line never makes the graph unusable.
"""

import re
from dataclasses import dataclass
from typing import Optional

UNKNOWN_VERSION = "unknown"

SCOPES = ("compile", "provided", "runtime", "test", "system", "import")

_SCOPE_SUFFIX = re.compile(
    r":(" + "|".join(SCOPES) + r")\s+-\s+.*$", re.IGNORECASE
)
_TRAILING_ANNOTATION = re.compile(r"\s+\(.*\)$")
_TREE_PREFIX = re.compile(r"^[|\s]*(?:\+- |\\- )?")


@dataclass(frozen=True)
class Coordinate:
    """Typed fields of a coordinate string."""
    group_id: str
    artifact_id: str
    version: str
    packaging: Optional[str] = None
    classifier: Optional[str] = None
    scope: Optional[str] = None

    @property
    def ga(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    def format(self) -> str:
        return format_coordinate(self)


def parse_coordinate(coord: str) -> Coordinate:
    """
    Split a coordinate string into its fields.

    Args:
        coord: The raw coordinate, e.g. ``org.slf4j:slf4j-api:jar:2.0.9:compile``.

    Returns:
        Coordinate. Malformed input yields a degraded coordinate rather
        than an exception.
    """
    parts = coord.split(":")
    if len(parts) < 3:
        return Coordinate(group_id=coord, artifact_id=coord, version=UNKNOWN_VERSION)

    scope = None
    if len(parts) >= 5:
        scope = parts.pop()

    version = parts.pop() or UNKNOWN_VERSION

    # group:artifact[:packaging[:classifier]]
    packaging = None
    classifier = None
    if len(parts) >= 4:
        classifier = parts.pop()
    if len(parts) >= 3:
        packaging = parts.pop()

    artifact_id = parts.pop() or UNKNOWN_VERSION
    group_id = ":".join(parts) or UNKNOWN_VERSION

    return Coordinate(
        group_id=group_id,
        artifact_id=artifact_id,
        version=version,
        packaging=packaging,
        classifier=classifier,
        scope=scope,
    )


def format_coordinate(coord: Coordinate) -> str:
    """Inverse of parse_coordinate for the fields that are present."""
    segments = [coord.group_id, coord.artifact_id]
    if coord.packaging is not None:
        segments.append(coord.packaging)
    if coord.classifier is not None:
        segments.append(coord.classifier)
    segments.append(coord.version)
    if coord.scope is not None:
        segments.append(coord.scope)
    return ":".join(segments)


def clean_coordinate(raw: str) -> str:
    """
    Normalise the coordinate part of a tree line payload.

    Handles verbose-mode entries such as
    ``(org.foo:bar:jar:1.0:compile - omitted for duplicate)``.
    """
    cleaned = _TREE_PREFIX.sub("", raw)
    cleaned = _TRAILING_ANNOTATION.sub("", cleaned.strip())
    if cleaned.startswith("("):
        cleaned = cleaned[1:]
    if cleaned.endswith(")"):
        cleaned = cleaned[:-1]
    cleaned = _SCOPE_SUFFIX.sub(r":\1", cleaned)
    return cleaned.strip()
