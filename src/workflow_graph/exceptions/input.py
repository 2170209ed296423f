"""Input exceptions: summary documents supplied by the extractor."""

from typing import Optional

from .base import WorkflowGraphError


class SummaryDocumentError(WorkflowGraphError):
    """Raised when a summaries document cannot be read or has the wrong shape."""

    def __init__(self, reason: str, path: Optional[str] = None):
        details = {"reason": reason}
        if path is not None:
            details["path"] = path
        super().__init__("Invalid summaries document", details=details)
        self.reason = reason
        self.path = path
