"""Unit tests for coordinate parsing and formatting."""

import pytest

from pomtrace.core.coordinates import (
    UNKNOWN_VERSION,
    clean_coordinate,
    format_coordinate,
    parse_coordinate,
)


class TestParseCoordinate:
    def test_three_segments(self):
        coord = parse_coordinate("org.slf4j:slf4j-api:2.0.9")
        assert coord.group_id == "org.slf4j"
        assert coord.artifact_id == "slf4j-api"
        assert coord.version == "2.0.9"
        assert coord.packaging is None
        assert coord.scope is None

    def test_four_segments_has_packaging(self):
        coord = parse_coordinate("com.acme:app:jar:1.0.0")
        assert coord.packaging == "jar"
        assert coord.version == "1.0.0"
        assert coord.scope is None

    def test_five_segments_has_scope(self):
        coord = parse_coordinate("org.slf4j:slf4j-api:jar:2.0.9:compile")
        assert coord.packaging == "jar"
        assert coord.version == "2.0.9"
        assert coord.scope == "compile"
        assert coord.classifier is None

    def test_six_segments_has_classifier_before_version(self):
        coord = parse_coordinate("io.netty:netty-transport-native-epoll:jar:linux-x86_64:4.1.100:runtime")
        assert coord.group_id == "io.netty"
        assert coord.artifact_id == "netty-transport-native-epoll"
        assert coord.packaging == "jar"
        assert coord.classifier == "linux-x86_64"
        assert coord.version == "4.1.100"
        assert coord.scope == "runtime"

    @pytest.mark.parametrize("raw", ["junk", "only:two"])
    def test_malformed_degrades(self, raw):
        coord = parse_coordinate(raw)
        assert coord.group_id == raw
        assert coord.artifact_id == raw
        assert coord.version == UNKNOWN_VERSION

    @pytest.mark.parametrize("raw", [
        "g:a:1.0",
        "g:a:jar:1.0",
        "g:a:jar:1.0:compile",
        "g:a:jar:tests:1.0:test",
    ])
    def test_format_reproduces_id(self, raw):
        assert format_coordinate(parse_coordinate(raw)) == raw
        assert parse_coordinate(raw).format() == raw

    def test_ga(self):
        assert parse_coordinate("g:a:jar:1.0").ga == "g:a"


class TestCleanCoordinate:
    def test_strips_omitted_wrapper(self):
        raw = "(org.foo:bar:jar:1.0:compile - omitted for duplicate)"
        assert clean_coordinate(raw) == "org.foo:bar:jar:1.0:compile"

    def test_strips_trailing_annotation(self):
        raw = "org.foo:bar:jar:1.0:compile (version managed from 0.9)"
        assert clean_coordinate(raw) == "org.foo:bar:jar:1.0:compile"

    def test_strips_tree_glyphs(self):
        assert clean_coordinate("|  +- org.foo:bar:jar:1.0:test") == "org.foo:bar:jar:1.0:test"
        assert clean_coordinate("\\- org.foo:bar:jar:1.0:test") == "org.foo:bar:jar:1.0:test"

    def test_plain_coordinate_unchanged(self):
        assert clean_coordinate("com.acme:app:jar:1.0.0") == "com.acme:app:jar:1.0.0"
