"""Tests for the public analyze() entry point."""

import pytest

from workflow_graph import CancellationToken, RepositoryWorkflow, analyze
from workflow_graph.exceptions import ConfigFileError, InvalidConfigError
from workflow_graph.scanning import FileSummary, ImportDecl


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def summaries():
    return [
        FileSummary(path="src/main.ts", imports=[ImportDecl(source="./store", specifiers=["s"])]),
        FileSummary(path="src/store.ts"),
    ]


class TestAnalyze:
    def test_returns_workflow(self, summaries):
        workflow = analyze(summaries, quiet=True)
        assert isinstance(workflow, RepositoryWorkflow)
        assert [n.id for n in workflow.nodes] == ["src/main.ts", "src/store.ts"]
        assert "src/main.ts-imports-src/store.ts" in {e.id for e in workflow.edges}

    def test_overrides(self, summaries):
        workflow = analyze(summaries, quiet=True, mode="detailed", canvas_width=800)
        assert all(n.position.x <= 700 for n in workflow.nodes)

    def test_config_file(self, summaries, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text('mode = "detailed"\n')
        workflow = analyze(summaries, config_file=path, quiet=True)
        assert len(workflow.nodes) == 2

    def test_missing_config_file(self, summaries, tmp_path):
        with pytest.raises(ConfigFileError):
            analyze(summaries, config_file=tmp_path / "none.toml", quiet=True)

    def test_invalid_override(self, summaries):
        with pytest.raises(InvalidConfigError):
            analyze(summaries, quiet=True, mode="all")

    def test_cancelled_token(self, summaries):
        token = CancellationToken()
        token.cancel()
        assert analyze(summaries, token=token, quiet=True).nodes == []
