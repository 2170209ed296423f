"""Tests for the `workflow-graph analyze` command."""

import json

import pytest
from typer.testing import CliRunner

from workflow_graph import __version__
from workflow_graph.cli import app

runner = CliRunner()

DOCUMENT = {
    "files": [
        {"path": "index.ts", "imports": [{"source": "./App", "specifiers": ["App"]}]},
        {
            "path": "App.tsx",
            "functions": [{"name": "App"}],
            "imports": [{"source": "./Button", "specifiers": ["Button"]}],
            "exports": [
                {"name": name} for name in ("App", "AppProps", "useApp", "Layout", "Nav", "theme")
            ],
        },
        {"path": "Button.tsx", "functions": [{"name": "Button"}], "exports": [{"name": "Button"}]},
    ]
}


@pytest.fixture
def summaries_file(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "summaries.json"
    path.write_text(json.dumps(DOCUMENT))
    return path


class TestAnalyzeCommand:
    def test_json_output(self, summaries_file):
        result = runner.invoke(app, ["analyze", str(summaries_file), "--format", "json", "-q"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [n["id"] for n in data["nodes"]] == ["index.ts", "App.tsx", "Button.tsx"]
        assert len(data["edges"]) == 3
        assert data["metrics"]["dependencyDepth"] == 2

    def test_detailed_mode(self, summaries_file):
        result = runner.invoke(
            app, ["analyze", str(summaries_file), "-m", "detailed", "-f", "json", "-q"]
        )
        assert result.exit_code == 0
        labels = {e["label"] for e in json.loads(result.stdout)["edges"]}
        assert "imports" in labels

    def test_canvas_options(self, summaries_file):
        result = runner.invoke(
            app,
            ["analyze", str(summaries_file), "-f", "json", "-q", "--width", "800", "--height", "600"],
        )
        assert result.exit_code == 0
        for node in json.loads(result.stdout)["nodes"]:
            assert 100 <= node["position"]["x"] <= 700
            assert 80 <= node["position"]["y"] <= 520

    def test_rich_output(self, summaries_file):
        result = runner.invoke(app, ["analyze", str(summaries_file), "-q"])
        assert result.exit_code == 0
        assert "3 files" in result.stdout
        assert "Key files" in result.stdout
        assert "Critical paths" in result.stdout

    def test_invalid_document(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "broken.json"
        path.write_text("{nope")
        result = runner.invoke(app, ["analyze", str(path), "-q"])
        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_malformed_record_skipped(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "partial.json"
        document = {"files": DOCUMENT["files"] + [{"path": "bad.ts", "imports": [{}]}]}
        path.write_text(json.dumps(document))
        result = runner.invoke(app, ["analyze", str(path), "-f", "json", "-q"])
        assert result.exit_code == 0
        ids = [n["id"] for n in json.loads(result.stdout)["nodes"]]
        assert ids == ["index.ts", "App.tsx", "Button.tsx"]

    def test_invalid_mode(self, summaries_file):
        result = runner.invoke(app, ["analyze", str(summaries_file), "--mode", "everything", "-q"])
        assert result.exit_code == 1

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "missing.json")])
        assert result.exit_code != 0


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout
