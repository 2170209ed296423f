"""Tests for configuration loading."""

import pytest

from workflow_graph.config import EngineConfig, ThresholdConfig, load_config
from workflow_graph.exceptions import ConfigFileError, ConfigurationError, InvalidConfigError


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user and project config files out of the tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for name in ("MODE", "CANVAS_WIDTH", "VERBOSE", "WORKERS"):
        monkeypatch.delenv(f"WORKFLOW_GRAPH_{name}", raising=False)


class TestEngineConfig:
    def test_defaults(self):
        config = EngineConfig()
        assert config.mode == "essential"
        assert config.max_files_for_analysis == 200
        assert config.canvas_width == 1400.0
        assert config.canvas_height == 1000.0
        assert config.alias_prefixes == {"@/": "src/"}

    def test_invalid_mode(self):
        with pytest.raises(InvalidConfigError):
            EngineConfig(mode="everything")

    def test_invalid_workers(self):
        with pytest.raises(InvalidConfigError):
            EngineConfig(workers=0)

    def test_invalid_canvas(self):
        with pytest.raises(InvalidConfigError):
            EngineConfig(canvas_width=0)


class TestThresholdConfig:
    def test_medium_above_high_rejected(self):
        with pytest.raises(InvalidConfigError):
            ThresholdConfig(medium_export_threshold=9, high_export_threshold=5)

    def test_negative_cap_rejected(self):
        with pytest.raises(InvalidConfigError):
            ThresholdConfig(similar_link_cap=-1)

    def test_importance_out_of_range(self):
        with pytest.raises(InvalidConfigError):
            ThresholdConfig(critical_path_importance=1.5)

    def test_entry_extensions_default(self):
        assert ThresholdConfig().entry_extensions == (".js", ".ts")

    def test_entry_extensions_normalised(self):
        config = ThresholdConfig(entry_extensions=[".TSX", ".py"])
        assert config.entry_extensions == (".tsx", ".py")

    def test_entry_extension_without_dot_rejected(self):
        with pytest.raises(InvalidConfigError):
            ThresholdConfig(entry_extensions=("ts",))


class TestLoadConfig:
    def test_overrides(self):
        config = load_config(mode="detailed", canvas_width=1800)
        assert config.mode == "detailed"
        assert config.canvas_width == 1800

    def test_none_overrides_ignored(self):
        assert load_config(mode=None).mode == "essential"

    def test_project_file(self, tmp_path):
        (tmp_path / "workflow-graph.toml").write_text(
            'mode = "detailed"\n\n[thresholds]\nsimilar_link_cap = 4\n'
        )
        config = load_config()
        assert config.mode == "detailed"
        assert config.thresholds.similar_link_cap == 4

    def test_entry_extensions_from_file(self, tmp_path):
        (tmp_path / "workflow-graph.toml").write_text(
            '[thresholds]\nentry_extensions = [".ts", ".tsx"]\n'
        )
        assert load_config().thresholds.entry_extensions == (".ts", ".tsx")

    def test_explicit_file_missing(self, tmp_path):
        with pytest.raises(ConfigFileError):
            load_config(tmp_path / "nope.toml")

    def test_explicit_file_malformed(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("mode = ")
        with pytest.raises(ConfigFileError):
            load_config(path)

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("WORKFLOW_GRAPH_CANVAS_WIDTH", "2000")
        monkeypatch.setenv("WORKFLOW_GRAPH_VERBOSE", "yes")
        monkeypatch.setenv("WORKFLOW_GRAPH_WORKERS", "4")
        config = load_config()
        assert config.canvas_width == 2000.0
        assert config.verbose is True
        assert config.workers == 4

    def test_env_bad_bool(self, monkeypatch):
        monkeypatch.setenv("WORKFLOW_GRAPH_VERBOSE", "maybe")
        with pytest.raises(InvalidConfigError):
            load_config()

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError):
            load_config(colour="blue")

    def test_unknown_threshold(self):
        with pytest.raises(ConfigurationError):
            load_config(thresholds={"nonsense": 1})
