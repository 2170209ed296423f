"""Public API for workflow-graph.

Callers should use analyze() rather than constructing an engine by hand.

Example:
    >>> from workflow_graph import analyze
    >>>
    >>> # Simple usage
    >>> workflow = analyze(summaries)
    >>>
    >>> # With customization
    >>> workflow = analyze(summaries, mode="detailed", canvas_width=1800)
    >>> workflow.to_json()
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from .config import load_config
from .deadline import CancellationToken
from .engine import WorkflowEngine
from .graph.models import RepositoryWorkflow
from .logging_config import get_logger, setup_logging
from .scanning import FileSummary, FileTree

logger = get_logger(__name__)


def analyze(
    summaries: Sequence[FileSummary],
    tree: Optional[FileTree] = None,
    config_file: Optional[Path] = None,
    token: Optional[CancellationToken] = None,
    **overrides,
) -> RepositoryWorkflow:
    """Build a workflow graph from per-file symbol summaries.

    Orchestrates the full pipeline:
    1. Load configuration (auto-discover TOML + apply overrides)
    2. Run the engine (classify, build edges, analyse, lay out)

    Args:
        summaries: One FileSummary per analysed file
        tree: Optional file tree; when given, summaries without a tree entry are skipped
        config_file: Optional explicit config file path
        token: Optional cancellation token checked between stages
        **overrides: Configuration overrides (e.g., mode="detailed", verbose=True)

    Returns:
        RepositoryWorkflow (possibly partial if ``token`` was cancelled)

    Raises:
        ConfigurationError: If configuration is invalid
    """
    quiet = overrides.pop("quiet", False)
    setup_logging(verbose=bool(overrides.get("verbose")), quiet=bool(quiet))

    config = load_config(config_file=config_file, **overrides)
    logger.debug(f"Configuration loaded: mode={config.mode}")

    logger.info(f"Starting workflow analysis of {len(summaries)} files")
    return WorkflowEngine(config).run(summaries, tree=tree, token=token)
