"""Unit tests for DocumentCache and ResolutionCache."""

import os

from pomtrace.core.cache import DocumentCache, FileSignature, ResolutionCache


class TestDocumentCache:
    def test_second_lookup_hits(self, tmp_path):
        path = tmp_path / "pom.xml"
        path.write_text("<project/>")
        calls = []

        def loader(p):
            calls.append(p)
            return p.read_text()

        cache = DocumentCache()
        assert cache.get(path, loader) == "<project/>"
        assert cache.get(path, loader) == "<project/>"
        assert len(calls) == 1
        assert cache.hits == 1
        assert cache.misses == 1

    def test_modified_file_is_reloaded(self, tmp_path):
        path = tmp_path / "pom.xml"
        path.write_text("<project/>")
        cache = DocumentCache()
        cache.get(path, lambda p: p.read_text())

        path.write_text("<project><version>2</version></project>")
        stat = path.stat()
        os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))

        assert cache.get(path, lambda p: p.read_text()).endswith("</project>")
        assert "<version>2</version>" in cache.get(path, lambda p: p.read_text())
        assert cache.misses == 2

    def test_invalidate(self, tmp_path):
        path = tmp_path / "pom.xml"
        path.write_text("<project/>")
        cache = DocumentCache()
        cache.get(path, lambda p: p.read_text())
        assert len(cache) == 1

        cache.invalidate(path)
        assert len(cache) == 0

        cache.get(path, lambda p: p.read_text())
        cache.invalidate()
        assert len(cache) == 0

    def test_missing_file_is_not_cached(self, tmp_path):
        cache = DocumentCache()
        missing = tmp_path / "missing.xml"

        assert cache.get(missing, lambda p: None) is None
        assert len(cache) == 0

    def test_signature_of_missing_file(self, tmp_path):
        assert FileSignature.of(tmp_path / "nope") is None


class TestResolutionCache:
    def test_miss_then_hit(self):
        cache = ResolutionCache()
        key = ResolutionCache.key("g:a:jar:1.0", None, False)

        assert cache.lookup(key) == (False, None)
        cache.store(key, "target")
        assert cache.lookup(key) == (True, "target")

    def test_none_is_a_cached_value(self):
        cache = ResolutionCache()
        key = ResolutionCache.key("g:a:jar:1.0", "r:r:jar:1", True)
        cache.store(key, None)

        assert cache.lookup(key) == (True, None)
        assert key in cache

    def test_keys_distinguish_remote_flag(self):
        cache = ResolutionCache()
        cache.store(ResolutionCache.key("n", "p", False), "local")

        hit, _ = cache.lookup(ResolutionCache.key("n", "p", True))
        assert not hit

    def test_clear(self):
        cache = ResolutionCache()
        cache.store(ResolutionCache.key("n", None, False), "x")
        cache.clear()
        assert len(cache) == 0
