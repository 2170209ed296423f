"""
Workflow Graph - repository workflow graphs from symbol summaries

Turns per-file symbol summaries of a codebase into a classified,
connected dependency graph with analytics and a deterministic 2-D layout.
"""

__version__ = "0.1.0"

from .api import analyze
from .config import EngineConfig, load_config
from .deadline import CancellationToken
from .engine import WorkflowEngine
from .graph.models import RepositoryWorkflow

__all__ = [
    "analyze",  # Main entry point
    "WorkflowEngine",  # Advanced usage (direct engine access)
    "EngineConfig",
    "load_config",
    "CancellationToken",
    "RepositoryWorkflow",
]
