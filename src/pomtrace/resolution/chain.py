"""
Configuration chain builder.

Follows <parent> pointers from a starting pom.xml and returns the documents
nearest first. The chain ends at the first parent that is missing or cannot
be parsed; neither is an error. A self-referencing parent file is not
guarded against.
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..core.cache import DocumentCache
from ..core.exceptions import DocumentParseError
from ..parsing.pom import ConfigurationDocument, read_document

logger = logging.getLogger(__name__)


def load_document(
    path: Path,
    cache: Optional[DocumentCache[ConfigurationDocument]] = None,
) -> ConfigurationDocument:
    """Read a POM through the cache when one is supplied."""
    if cache is None:
        return read_document(path)
    return cache.get(path, read_document)


def build_chain(
    start: Path,
    cache: Optional[DocumentCache[ConfigurationDocument]] = None,
) -> List[ConfigurationDocument]:
    """
    Walk the inheritance chain starting at a POM file.

    Args:
        start: The module's pom.xml.
        cache: Optional document memo shared across calls.

    Returns:
        Documents nearest first. Empty if the starting file itself cannot be
        read or parsed.
    """
    chain: List[ConfigurationDocument] = []
    current: Optional[Path] = start

    while current is not None:
        try:
            document = load_document(current, cache)
        except DocumentParseError as e:
            if chain:
                logger.warning(f"Stopping parent chain at unreadable POM {e.path}: {e.message}")
            else:
                logger.warning(f"Cannot read POM {e.path}: {e.message}")
            break

        chain.append(document)
        parent = document.parent_path
        if parent is None or not parent.is_file():
            break
        current = parent

    logger.debug(f"Built chain of {len(chain)} POM(s) from {start}")
    return chain
