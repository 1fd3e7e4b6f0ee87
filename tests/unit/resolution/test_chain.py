"""Unit tests for walking the <parent> chain."""

import logging

from pomtrace.core.cache import DocumentCache
from pomtrace.resolution.chain import build_chain, load_document

PARENT = """
    <project>
      <groupId>com.acme</groupId>
      <artifactId>parent</artifactId>
      <version>1.0</version>
      <packaging>pom</packaging>
    </project>
"""

CHILD = """
    <project>
      <parent>
        <groupId>com.acme</groupId>
        <artifactId>parent</artifactId>
        <version>1.0</version>
        {relative}
      </parent>
      <artifactId>app</artifactId>
    </project>
"""


class TestBuildChain:
    def test_default_relative_path(self, tmp_path, write_file):
        write_file("pom.xml", PARENT)
        child = write_file("app/pom.xml", CHILD.format(relative=""))

        chain = build_chain(child)
        assert [d.artifact_id for d in chain] == ["app", "parent"]
        assert chain[0].file == child
        assert chain[1].file == (tmp_path / "pom.xml").resolve()

    def test_relative_path_to_directory(self, write_file):
        write_file("build/parent/pom.xml", PARENT)
        child = write_file(
            "app/pom.xml",
            CHILD.format(relative="<relativePath>../build/parent</relativePath>"),
        )

        assert [d.artifact_id for d in build_chain(child)] == ["app", "parent"]

    def test_empty_relative_path_stops(self, write_file):
        write_file("pom.xml", PARENT)
        child = write_file("app/pom.xml", CHILD.format(relative="<relativePath/>"))

        assert [d.artifact_id for d in build_chain(child)] == ["app"]

    def test_missing_parent_stops(self, write_file):
        child = write_file("app/pom.xml", CHILD.format(relative=""))

        assert [d.artifact_id for d in build_chain(child)] == ["app"]

    def test_malformed_parent_stops_with_warning(self, write_file, caplog):
        write_file("pom.xml", "<project><broken></project>")
        child = write_file("app/pom.xml", CHILD.format(relative=""))

        with caplog.at_level(logging.WARNING, logger="pomtrace.resolution.chain"):
            chain = build_chain(child)

        assert [d.artifact_id for d in chain] == ["app"]
        assert "Stopping parent chain" in caplog.text

    def test_unreadable_start_is_empty(self, tmp_path):
        assert build_chain(tmp_path / "missing" / "pom.xml") == []

    def test_cache_is_reused(self, write_file):
        write_file("pom.xml", PARENT)
        child = write_file("app/pom.xml", CHILD.format(relative=""))
        cache = DocumentCache()

        build_chain(child, cache)
        build_chain(child, cache)
        assert cache.misses == 2
        assert cache.hits == 2


class TestLoadDocument:
    def test_without_cache(self, write_file):
        path = write_file("pom.xml", PARENT)
        assert load_document(path).artifact_id == "parent"

    def test_with_cache(self, write_file):
        path = write_file("pom.xml", PARENT)
        cache = DocumentCache()

        assert load_document(path, cache) is load_document(path, cache)
