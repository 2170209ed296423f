"""Configuration loading and management for workflow-graph.

Configuration sources are merged in priority order:
    1. Defaults (defined in EngineConfig)
    2. Global config (~/.workflow-graph.toml)
    3. Project config (./workflow-graph.toml)
    4. Explicit config file
    5. Environment variables (WORKFLOW_GRAPH_* prefix)
    6. Overrides (passed as kwargs)

Example:
    >>> config = load_config(mode="detailed", canvas_width=1800)
    >>> config.mode
    'detailed'
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigFileError, ConfigurationError, InvalidConfigError

EdgeMode = Literal["essential", "detailed"]

_ENV_PREFIX = "WORKFLOW_GRAPH_"


@dataclass(frozen=True)
class ThresholdConfig:
    """Classification thresholds and edge-builder caps.

    The importance and role thresholds are product choices rather than
    derived invariants; they are exposed here so they can be tuned per
    project without touching the classifier.

    Attributes:
        Classification:
            entry_extensions: extensions that make index/main/app an entry point

        Importance:
            high_export_threshold: exports above this make a file high importance
            high_function_threshold: functions above this make a file high importance
            medium_export_threshold: exports above this make a file medium importance
            medium_function_threshold: functions above this make a file medium importance

        Role:
            role_balance_margin: imports/exports difference needed for Consumer/Provider

        Essential graph:
            spine_component_cap: components reached from entry points
            spine_service_cap: services considered for the component -> service link
            spine_fallback_chain: high-importance nodes chained when no spine exists
            critical_import_cap: import edges kept from high-importance importers
            isolated_link_cap: untouched important nodes joined to the hub
            fallback_fanout: targets of the first node in the empty-graph fallback
            fallback_chain_length: nodes chained in the empty-graph fallback

        Detailed graph:
            hierarchy_child_cap: child-directory files linked from each parent file
            sibling_link_cap: siblings linked when a directory has no index file
            config_link_cap: targets per configuration file
            chain_component_cap: components reached from each entry point
            chain_entry_service_cap: services reached from each entry point
            chain_utility_cap: utilities reached from each component
            chain_component_service_cap: services reached from each component
            similar_link_cap: "similar" links per node

        Analytics:
            critical_path_cap: maximum critical paths reported
            critical_path_importance: weight attached to every critical path
    """

    # === Classification ===
    entry_extensions: tuple[str, ...] = (".js", ".ts")

    # === Importance ===
    high_export_threshold: int = 5
    high_function_threshold: int = 10
    medium_export_threshold: int = 2
    medium_function_threshold: int = 3

    # === Role ===
    role_balance_margin: int = 2

    # === Essential graph ===
    spine_component_cap: int = 3
    spine_service_cap: int = 2
    spine_fallback_chain: int = 4
    critical_import_cap: int = 8
    isolated_link_cap: int = 3
    fallback_fanout: int = 5
    fallback_chain_length: int = 4

    # === Detailed graph ===
    hierarchy_child_cap: int = 2
    sibling_link_cap: int = 3
    config_link_cap: int = 5
    chain_component_cap: int = 4
    chain_entry_service_cap: int = 2
    chain_utility_cap: int = 2
    chain_component_service_cap: int = 1
    similar_link_cap: int = 2

    # === Analytics ===
    critical_path_cap: int = 10
    critical_path_importance: float = 0.8

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        extensions = tuple(self.entry_extensions)
        if not all(isinstance(ext, str) and ext.startswith(".") for ext in extensions):
            raise InvalidConfigError(
                "entry_extensions", self.entry_extensions, "extensions must start with '.'"
            )
        object.__setattr__(self, "entry_extensions", tuple(ext.lower() for ext in extensions))

        if self.medium_export_threshold > self.high_export_threshold:
            raise InvalidConfigError(
                "medium_export_threshold",
                self.medium_export_threshold,
                "must not exceed high_export_threshold",
            )
        if self.medium_function_threshold > self.high_function_threshold:
            raise InvalidConfigError(
                "medium_function_threshold",
                self.medium_function_threshold,
                "must not exceed high_function_threshold",
            )
        if not 0.0 <= self.critical_path_importance <= 1.0:
            raise InvalidConfigError(
                "critical_path_importance",
                self.critical_path_importance,
                "must be between 0.0 and 1.0",
            )

        for name, value in self.__dict__.items():
            if isinstance(value, int) and value < 0:
                raise InvalidConfigError(name, value, "must be non-negative")


DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for a workflow analysis run.

    Attributes:
        Edge construction:
            mode: "essential" (pruned, default view) or "detailed" (exhaustive)
            edge_timeout_seconds: budget for edge construction before the
                simplified fallback graph is substituted

        Input handling:
            max_files_for_analysis: above this, only the highest-scoring files are analysed
            workers: classification worker threads (None or 1 = sequential)
            alias_prefixes: scoped import prefixes and the source roots they map to

        Layout:
            canvas_width / canvas_height: layout canvas in pixels
            min_node_distance: minimum distance between node centres
            max_layout_passes: overlap resolution pass limit
            max_layout_levels: BFS level cap

        Logging:
            verbose: Enable debug output
    """

    # Edge construction
    mode: EdgeMode = "essential"
    edge_timeout_seconds: float = 30.0

    # Input handling
    max_files_for_analysis: int = 200
    workers: Optional[int] = None
    alias_prefixes: dict[str, str] = field(default_factory=lambda: {"@/": "src/"})

    # Layout
    canvas_width: float = 1400.0
    canvas_height: float = 1000.0
    min_node_distance: float = 180.0
    max_layout_passes: int = 50
    max_layout_levels: int = 10

    # Logging
    verbose: bool = False

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.mode not in ("essential", "detailed"):
            raise InvalidConfigError("mode", self.mode, "must be 'essential' or 'detailed'")
        if self.edge_timeout_seconds <= 0:
            raise InvalidConfigError(
                "edge_timeout_seconds", self.edge_timeout_seconds, "must be positive"
            )
        if self.max_files_for_analysis < 1:
            raise InvalidConfigError(
                "max_files_for_analysis", self.max_files_for_analysis, "must be at least 1"
            )
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise InvalidConfigError(
                "canvas", f"{self.canvas_width}x{self.canvas_height}", "must be positive"
            )
        if self.min_node_distance <= 0:
            raise InvalidConfigError(
                "min_node_distance", self.min_node_distance, "must be positive"
            )
        if self.max_layout_passes < 1:
            raise InvalidConfigError(
                "max_layout_passes", self.max_layout_passes, "must be at least 1"
            )
        if self.max_layout_levels < 1:
            raise InvalidConfigError(
                "max_layout_levels", self.max_layout_levels, "must be at least 1"
            )


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> EngineConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated EngineConfig instance

    Raises:
        ConfigurationError: If a config file or value is invalid
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".workflow-graph.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "workflow-graph.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigFileError(config_file, "file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    merged.update({k: v for k, v in overrides.items() if v is not None})

    thresholds = merged.pop("thresholds", None)
    if isinstance(thresholds, dict):
        try:
            merged["thresholds"] = ThresholdConfig(**thresholds)
        except TypeError as e:
            raise ConfigurationError(f"Invalid [thresholds] config: {e}")
    elif isinstance(thresholds, ThresholdConfig):
        merged["thresholds"] = thresholds

    try:
        return EngineConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from WORKFLOW_GRAPH_* environment variables.

    Scalar fields only (mode, timeouts, limits, canvas size, verbose).
    """
    type_hints = get_type_hints(EngineConfig)
    result: dict[str, Any] = {}

    for field_name in EngineConfig.__dataclass_fields__:
        env_key = f"{_ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the field's type.

    Returns None for types that cannot come from the environment (dicts,
    nested configs).
    """
    origin = getattr(type_hint, "__origin__", None)

    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none = [t for t in args if t is not type(None)]
        if non_none:
            type_hint = non_none[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is dict or type_hint is ThresholdConfig:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file, wrapping parse failures in ConfigFileError."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigFileError(path, str(e))
