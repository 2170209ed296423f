"""Engine error taxonomy with error codes and recovery semantics.

Error Code Convention:
    WG1xx - Classification errors
    WG2xx - Import resolution errors
    WG3xx - Edge construction errors
    WG4xx - Scheduling errors (deadlines, cancellation)
    WG5xx - Layout errors

None of these escape ``WorkflowEngine.run``: each is caught at the stage
boundary that owns it and converted into a degraded but valid result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Structured error codes for log context."""

    # Classification errors (WG1xx)
    WG100 = "WG100"  # Malformed or missing summary field
    WG101 = "WG101"  # File metadata not found for summary
    WG102 = "WG102"  # Duplicate node id

    # Resolution errors (WG2xx)
    WG200 = "WG200"  # Import specifier unresolved

    # Edge errors (WG3xx)
    WG300 = "WG300"  # Edge endpoint not in node set
    WG301 = "WG301"  # Self-referencing edge
    WG302 = "WG302"  # Edge builder failed

    # Scheduling errors (WG4xx)
    WG400 = "WG400"  # Edge construction deadline exceeded
    WG401 = "WG401"  # Analysis cancelled by caller

    # Layout errors (WG5xx)
    WG500 = "WG500"  # Layout did not settle within pass limit


@dataclass
class EngineError(Exception):
    """Base exception with structured context for logging.

    Attributes:
        message: Human-readable error description
        code: Structured error code for categorization
        context: Additional context (file path, stage, etc.)
        recoverable: Whether the engine can continue past it
        recovery_hint: What the engine does instead
    """

    message: str
    code: ErrorCode
    context: dict[str, Any] = field(default_factory=dict)
    recoverable: bool = True
    recovery_hint: str | None = None

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def to_json(self) -> dict[str, Any]:
        """Structured logging format."""
        return {
            "error_code": self.code.value,
            "message": self.message,
            "context": self.context,
            "recoverable": self.recoverable,
            "recovery_hint": self.recovery_hint,
        }


class ClassificationError(EngineError):
    """A file summary could not be turned into a node (WG1xx)."""

    pass


class GraphError(EngineError):
    """Edge construction failed (WG3xx)."""

    pass


class DeadlineExceeded(EngineError):
    """A cooperative deadline elapsed (WG400)."""

    pass


class AnalysisCancelled(EngineError):
    """The caller cancelled the run (WG401)."""

    pass
