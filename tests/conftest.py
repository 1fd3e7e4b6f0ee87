"""Shared fixtures for pomtrace tests."""

import textwrap
from pathlib import Path
from typing import Callable, Tuple

import pytest

from pomtrace.core.graph import DependencyGraph, GraphBuilder


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write dedented text to a path relative to tmp_path, creating parents."""

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return path

    return _write


def _position_of(path: Path, needle: str, occurrence: int = 1) -> Tuple[int, int]:
    seen = 0
    for number, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        if needle in line:
            seen += 1
            if seen == occurrence:
                return number, line.index(needle) + 1
    raise AssertionError(f"{needle!r} not found in {path}")


@pytest.fixture
def position_of() -> Callable[..., Tuple[int, int]]:
    """1-indexed (line, column) of the n-th line of a file containing a needle."""
    return _position_of


@pytest.fixture
def diamond_graph() -> DependencyGraph:
    """R -> A, R -> B, A -> C, B -> C."""
    builder = GraphBuilder()
    builder.declare_root("com.acme:root:jar:1.0")
    builder.add_edge("com.acme:root:jar:1.0", "com.acme:a:jar:1.0:compile")
    builder.add_edge("com.acme:root:jar:1.0", "com.acme:b:jar:1.0:compile")
    builder.add_edge("com.acme:a:jar:1.0:compile", "com.acme:c:jar:1.0:compile")
    builder.add_edge("com.acme:b:jar:1.0:compile", "com.acme:c:jar:1.0:compile")
    return builder.build()
