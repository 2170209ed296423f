"""Cooperative deadlines and cancellation.

Work is never pre-empted: long stages call ``check()`` between steps and
the current step always finishes before the stage gives up.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Optional

from .exceptions import AnalysisCancelled, DeadlineExceeded, ErrorCode


@dataclass
class Deadline:
    """Wall-clock budget measured from construction."""

    seconds: float
    start_time: float = field(default_factory=time.perf_counter)

    @classmethod
    def start(cls, seconds: float) -> Deadline:
        return cls(seconds=seconds)

    def elapsed(self) -> float:
        return time.perf_counter() - self.start_time

    def remaining(self) -> float:
        return max(0.0, self.seconds - self.elapsed())

    def expired(self) -> bool:
        return self.elapsed() >= self.seconds

    def check(self, stage: str) -> None:
        """Raise DeadlineExceeded if the budget is spent."""
        if self.expired():
            raise DeadlineExceeded(
                message=f"Deadline of {self.seconds:.1f}s exceeded during {stage}",
                code=ErrorCode.WG400,
                context={"stage": stage, "elapsed": round(self.elapsed(), 3)},
                recovery_hint="Simplified graph substituted",
            )


class CancellationToken:
    """Caller-held handle to stop a run between stages.

    A token is cancelled either explicitly via ``cancel()`` or implicitly
    once its optional deadline expires. It can be shared across threads.
    """

    def __init__(self, timeout_seconds: Optional[float] = None) -> None:
        self._event = threading.Event()
        self._deadline = Deadline.start(timeout_seconds) if timeout_seconds is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and self._deadline.expired()

    def check(self, stage: str) -> None:
        if self.cancelled:
            raise AnalysisCancelled(
                message=f"Analysis cancelled before {stage}",
                code=ErrorCode.WG401,
                context={"stage": stage},
                recovery_hint="Partial result returned",
            )
