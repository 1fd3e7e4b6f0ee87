"""
Process-scoped caches.

Both caches are plain owned objects: the orchestrator creates them, holds
them, and clears them explicitly. There is no module-level state.

- DocumentCache: parsed POM documents keyed by path and file signature
  (mtime, size), so an edited file is re-read on the next lookup.
- ResolutionCache: navigation targets keyed by
  (node id, previous node id, remote lookup permitted). Cleared wholesale
  whenever a new dependency graph is bound.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


@dataclass(frozen=True)
class FileSignature:
    """Identity of a file's content as seen by the filesystem."""

    path: str
    mtime_ns: int
    size: int

    @classmethod
    def of(cls, path: Path) -> Optional["FileSignature"]:
        try:
            stat = path.stat()
        except OSError:
            return None
        return cls(path=str(path.resolve()), mtime_ns=stat.st_mtime_ns, size=stat.st_size)


class DocumentCache(Generic[T]):
    """
    Memoises file parses by file signature.

    Example:
        ```python
        cache = DocumentCache()
        doc = cache.get(Path("pom.xml"), read_document)
        ```
    """

    def __init__(self):
        self._entries: Dict[str, Tuple[FileSignature, T]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, path: Path, loader: Callable[[Path], T]) -> T:
        """
        Return the cached parse of path, loading it when missing or stale.

        Loader exceptions propagate and nothing is cached for that path.
        """
        signature = FileSignature.of(path)
        if signature is not None:
            entry = self._entries.get(signature.path)
            if entry is not None and entry[0] == signature:
                self.hits += 1
                return entry[1]

        self.misses += 1
        value = loader(path)
        if signature is not None:
            self._entries[signature.path] = (signature, value)
        return value

    def invalidate(self, path: Optional[Path] = None) -> None:
        """Drop one entry, or everything when no path is given."""
        if path is None:
            self._entries.clear()
            return
        self._entries.pop(str(path.resolve()), None)

    def __len__(self) -> int:
        return len(self._entries)


ResolutionKey = Tuple[str, Optional[str], bool]


class ResolutionCache(Generic[T]):
    """
    Memo for per-node resolution results.

    None is a valid cached value ("nothing found"), distinct from a miss.
    """

    def __init__(self):
        self._entries: Dict[Hashable, Optional[T]] = {}

    @staticmethod
    def key(node_id: str, prev_id: Optional[str], include_remote: bool) -> ResolutionKey:
        return (node_id, prev_id, include_remote)

    def lookup(self, key: ResolutionKey) -> Tuple[bool, Optional[T]]:
        """Return (hit, value)."""
        value = self._entries.get(key, _MISSING)
        if value is _MISSING:
            return False, None
        return True, value  # type: ignore[return-value]

    def store(self, key: ResolutionKey, value: Optional[T]) -> None:
        self._entries[key] = value

    def clear(self) -> None:
        if self._entries:
            logger.debug(f"Clearing {len(self._entries)} cached resolution(s)")
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
