"""
Text locator.

ElementTree drops source positions, so semantic matches are mapped back to
line/column by re-scanning the raw POM text. This is a best-effort scan:
identical <dependency> blocks, or a property name that collides with an
unrelated tag, resolve to the first textual occurrence.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..parsing.pom import Section

_DEPENDENCY_BLOCK = re.compile(r"<dependency>[\s\S]*?</dependency>")
_VERSION_TAG = "<version>"

Range = Tuple[int, int]

FALLBACK_POSITION = (1, 1)


@dataclass
class TextBlock:
    """A matched tag pair: absolute start offset and the block's text."""

    start: int
    text: str


def find_tag_ranges(text: str, tag: str) -> List[Range]:
    """Non-overlapping (start, end) ranges of every <tag>...</tag> pair, left to right."""
    name = re.escape(tag)
    pattern = re.compile(rf"<{name}>[\s\S]*?</{name}>")
    return [(m.start(), m.end()) for m in pattern.finditer(text)]


def _in_ranges(offset: int, ranges: List[Range]) -> bool:
    return any(start <= offset <= end for start, end in ranges)


def find_dependency_block(
    text: str,
    group_id: str,
    artifact_id: str,
    section: Section,
) -> Optional[TextBlock]:
    """
    First <dependency> block in the requested section naming group and artifact.

    A block belongs to the management section when its start offset falls
    inside any <dependencyManagement> range. Values are compared literally,
    without property interpolation.
    """
    management = find_tag_ranges(text, Section.MANAGEMENT.value)
    group_tag = f"<groupId>{group_id}</groupId>"
    artifact_tag = f"<artifactId>{artifact_id}</artifactId>"

    for match in _DEPENDENCY_BLOCK.finditer(text):
        managed = _in_ranges(match.start(), management)
        if (section == Section.MANAGEMENT) != managed:
            continue
        block = match.group(0)
        if group_tag in block and artifact_tag in block:
            return TextBlock(start=match.start(), text=block)
    return None


def offset_to_line_col(text: str, offset: int) -> Tuple[int, int]:
    """
    Convert a character offset to a 1-indexed (line, column).

    Example:
        ```python
        offset_to_line_col("a\\n<b>", 2)  # (2, 1)
        ```
    """
    prefix = text[:offset]
    line = prefix.count("\n") + 1
    column = offset - prefix.rfind("\n")
    return line, column


def find_version_position(
    text: str,
    group_id: str,
    artifact_id: str,
    section: Section,
) -> Tuple[int, int]:
    """
    Position of the <version> tag of a matched dependency.

    Falls back to the block start when the block has no version tag, and to
    1:1 when no block matches.
    """
    block = find_dependency_block(text, group_id, artifact_id, section)
    if block is None:
        return FALLBACK_POSITION
    index = block.text.find(_VERSION_TAG)
    if index >= 0:
        return offset_to_line_col(text, block.start + index)
    return offset_to_line_col(text, block.start)


def find_block_position(
    text: str,
    group_id: str,
    artifact_id: str,
    section: Section,
) -> Optional[Tuple[int, int]]:
    """Position of a matched dependency block's opening tag, or None."""
    block = find_dependency_block(text, group_id, artifact_id, section)
    if block is None:
        return None
    return offset_to_line_col(text, block.start)


def find_property_position(text: str, name: str) -> Tuple[int, int]:
    """First <name>...</name> occurrence, or 1:1 when absent."""
    ranges = find_tag_ranges(text, name)
    if not ranges:
        return FALLBACK_POSITION
    return offset_to_line_col(text, ranges[0][0])
