"""Exception hierarchy for workflow-graph."""

from .base import WorkflowGraphError
from .config import ConfigFileError, ConfigurationError, InvalidConfigError
from .input import SummaryDocumentError
from .taxonomy import (
    AnalysisCancelled,
    ClassificationError,
    DeadlineExceeded,
    EngineError,
    ErrorCode,
    GraphError,
)

__all__ = [
    "WorkflowGraphError",
    "ConfigurationError",
    "ConfigFileError",
    "InvalidConfigError",
    "SummaryDocumentError",
    "ErrorCode",
    "EngineError",
    "ClassificationError",
    "GraphError",
    "DeadlineExceeded",
    "AnalysisCancelled",
]
