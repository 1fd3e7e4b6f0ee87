"""
Configuration loading for pomtrace.toml.

Example file:

    [resolution]
    profiles = ["dev"]
    local_repositories = ["/opt/m2"]
    effective_pom = "target/effective-pom.xml"
    workspace = "."

    [analysis]
    max_paths = 10

Relative paths are resolved against the directory holding the file.
"""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from .core.exceptions import ConfigError

CONFIG_FILE_NAME = "pomtrace.toml"
DEFAULT_MAX_PATHS = 10

# Directories skipped when scanning a workspace for pom.xml files
IGNORE_DIRECTORIES: Set[str] = {
    # Version Control
    ".git",
    ".svn",
    ".hg",
    # Build output
    "target",
    "build",
    "out",
    "bin",
    # Tooling
    "node_modules",
    ".idea",
    ".vscode",
    ".mvn",
    "__pycache__",
    ".venv",
    "venv",
}


def is_ignored_directory(dir_name: str) -> bool:
    """Check if directory name is in the blocklist."""
    return dir_name in IGNORE_DIRECTORIES


def _string_list(section: Dict[str, Any], key: str, path: Path) -> List[str]:
    value = section.get(key, [])
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"Invalid '{key}' in {path}: expected a list of strings")
    return value


@dataclass
class TraceConfig:
    """
    Settings from pomtrace.toml.

    Attributes:
        profiles: Active Maven profile ids.
        local_repositories: Extra repository roots, searched before defaults.
        effective_pom: Flattened help:effective-pom output used as fallback.
        workspace: Root scanned for module pom.xml files.
        max_paths: Upper bound for path enumeration.
        base_dir: Directory relative paths are resolved against.
    """

    profiles: List[str] = field(default_factory=list)
    local_repositories: List[str] = field(default_factory=list)
    effective_pom: Optional[str] = None
    workspace: Optional[str] = None
    max_paths: int = DEFAULT_MAX_PATHS
    base_dir: Path = field(default_factory=Path.cwd)

    @classmethod
    def load(cls, path: Path) -> "TraceConfig":
        """
        Load and parse a pomtrace.toml file.

        Returns:
            TraceConfig: Defaults when the file does not exist.

        Raises:
            ConfigError: If the TOML is malformed or has wrong value types.
        """
        base_dir = path.parent.resolve()
        if not path.exists():
            return cls(base_dir=base_dir)

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to parse {path}: {e}")

        resolution = data.get("resolution", {})
        analysis = data.get("analysis", {})

        max_paths = analysis.get("max_paths", DEFAULT_MAX_PATHS)
        if not isinstance(max_paths, int) or isinstance(max_paths, bool) or max_paths < 1:
            raise ConfigError(f"Invalid 'max_paths' in {path}: expected a positive integer")

        for key in ("effective_pom", "workspace"):
            if key in resolution and not isinstance(resolution[key], str):
                raise ConfigError(f"Invalid '{key}' in {path}: expected a string")

        return cls(
            profiles=_string_list(resolution, "profiles", path),
            local_repositories=_string_list(resolution, "local_repositories", path),
            effective_pom=resolution.get("effective_pom"),
            workspace=resolution.get("workspace"),
            max_paths=max_paths,
            base_dir=base_dir,
        )

    @classmethod
    def discover(cls, start: Optional[Path] = None) -> "TraceConfig":
        """Load pomtrace.toml from the given directory (default: cwd)."""
        directory = start if start is not None else Path.cwd()
        return cls.load(directory / CONFIG_FILE_NAME)

    def resolve_path(self, value: Optional[str]) -> Optional[Path]:
        if not value:
            return None
        candidate = Path(value).expanduser()
        if not candidate.is_absolute():
            candidate = self.base_dir / candidate
        return candidate

    @property
    def repository_paths(self) -> List[str]:
        return [str(self.resolve_path(p)) for p in self.local_repositories]
