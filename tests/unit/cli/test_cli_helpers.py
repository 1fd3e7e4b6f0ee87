"""Unit tests for shared CLI helpers and the JSON envelope."""

import json

import pytest
from pydantic import BaseModel

from pomtrace.cli.renderers import JsonRenderer
from pomtrace.cli.utils import load_config, load_report, resolve_node
from pomtrace.core.exceptions import NodeNotFoundError, ReportNotFoundError


class _Payload(BaseModel):
    name: str
    count: int


class TestResolveNode:
    def test_exact_id(self, diamond_graph):
        assert resolve_node(diamond_graph, "com.acme:a:jar:1.0:compile") == "com.acme:a:jar:1.0:compile"

    def test_unique_substring(self, diamond_graph):
        assert resolve_node(diamond_graph, "acme:c") == "com.acme:c:jar:1.0:compile"

    def test_ambiguous_uses_first_match(self, diamond_graph, capsys):
        assert resolve_node(diamond_graph, "jar:1.0:compile") == "com.acme:a:jar:1.0:compile"
        assert "Ambiguous" in capsys.readouterr().err

    def test_not_found(self, diamond_graph):
        with pytest.raises(NodeNotFoundError, match="nothing"):
            resolve_node(diamond_graph, "nothing")


class TestLoaders:
    def test_load_report(self, tmp_path):
        report = tmp_path / "tree.txt"
        report.write_text("com.acme:app:jar:1.0\n+- g:a:jar:1.0:compile\n")

        result = load_report(str(report))
        assert result.graph.roots == ["com.acme:app:jar:1.0"]
        assert result.lines_parsed == 2

    def test_load_report_missing(self, tmp_path):
        with pytest.raises(ReportNotFoundError):
            load_report(str(tmp_path / "absent.txt"))

    def test_load_config_explicit(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text("[analysis]\nmax_paths = 2\n")
        assert load_config(str(path)).max_paths == 2

    def test_load_config_from_cwd(self, tmp_path, monkeypatch):
        (tmp_path / "pomtrace.toml").write_text('[resolution]\nprofiles = ["dev"]\n')
        monkeypatch.chdir(tmp_path)
        assert load_config(None).profiles == ["dev"]


class TestJsonRenderer:
    def test_success_envelope(self, capsys):
        JsonRenderer("conflicts").render_success(_Payload(name="x", count=2))

        payload = json.loads(capsys.readouterr().out)
        assert payload == {"command": "conflicts", "status": "success", "data": {"name": "x", "count": 2}}

    def test_error_envelope(self, capsys):
        JsonRenderer("paths").render_error(NodeNotFoundError("foo"))

        payload = json.loads(capsys.readouterr().out)
        assert payload["status"] == "error"
        assert payload["error"]["type"] == "NodeNotFoundError"
        assert "foo" in payload["error"]["message"]
