"""
Local Maven repository discovery.

Repository roots are consulted in priority order:

1. Explicitly configured roots (pomtrace.toml or --repo)
2. <localRepository> from ~/.m2/settings.xml
3. $MAVEN_USER_HOME/repository
4. ~/.m2/repository
"""

import logging
import os
import re
from pathlib import Path
from typing import Iterable, List, Mapping, Optional

from ..core.coordinates import UNKNOWN_VERSION

logger = logging.getLogger(__name__)

_LOCAL_REPOSITORY = re.compile(r"<localRepository>([^<]+)</localRepository>")

SETTINGS_FILE = "settings.xml"
M2_DIR = ".m2"
REPOSITORY_DIR = "repository"


def read_settings_repository(settings: Path, home: Path) -> Optional[Path]:
    """The <localRepository> of a settings.xml, with ${user.home} expanded."""
    if not settings.is_file():
        return None
    try:
        text = settings.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Ignoring unreadable Maven settings {settings}: {e}")
        return None

    match = _LOCAL_REPOSITORY.search(text)
    if not match:
        return None
    value = match.group(1).strip().replace("${user.home}", str(home))
    return Path(value).expanduser() if value else None


def discover_local_repositories(
    explicit: Iterable[str] = (),
    home: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> List[Path]:
    """
    Candidate repository roots, unique and in priority order.

    Roots are returned whether or not they exist; lookups check existence.
    """
    home = home if home is not None else Path.home()
    env = env if env is not None else os.environ

    candidates: List[Path] = [Path(p.strip()).expanduser() for p in explicit if p and p.strip()]

    from_settings = read_settings_repository(home / M2_DIR / SETTINGS_FILE, home)
    if from_settings is not None:
        candidates.append(from_settings)

    maven_user_home = env.get("MAVEN_USER_HOME", "").strip()
    if maven_user_home:
        candidates.append(Path(maven_user_home) / REPOSITORY_DIR)

    candidates.append(home / M2_DIR / REPOSITORY_DIR)

    unique: List[Path] = []
    for candidate in candidates:
        if candidate not in unique:
            unique.append(candidate)
    return unique


def manifest_relative_path(group_id: str, artifact_id: str, version: str) -> Path:
    """<group as dirs>/<artifact>/<version>/<artifact>-<version>.pom"""
    return Path(*group_id.split("."), artifact_id, version, f"{artifact_id}-{version}.pom")


def find_manifest(
    roots: Iterable[Path],
    group_id: str,
    artifact_id: str,
    version: Optional[str],
) -> Optional[Path]:
    """First existing POM for the coordinate across roots."""
    if not group_id or not artifact_id or not version or version == UNKNOWN_VERSION:
        return None
    relative = manifest_relative_path(group_id, artifact_id, version)
    for root in roots:
        candidate = root / relative
        if candidate.is_file():
            return candidate
    return None
