"""Tests for cooperative deadlines and cancellation tokens."""

import threading
import time

import pytest

from workflow_graph.deadline import CancellationToken, Deadline
from workflow_graph.exceptions import AnalysisCancelled, DeadlineExceeded, ErrorCode


class TestDeadline:
    def test_fresh_deadline_not_expired(self):
        deadline = Deadline.start(60.0)
        assert not deadline.expired()
        assert deadline.remaining() > 0
        deadline.check("edges")

    def test_zero_budget_expires_immediately(self):
        deadline = Deadline.start(0.0)
        assert deadline.expired()
        assert deadline.remaining() == 0.0

    def test_check_raises_with_stage(self):
        deadline = Deadline(seconds=1.0, start_time=time.perf_counter() - 5.0)
        with pytest.raises(DeadlineExceeded) as exc_info:
            deadline.check("spine")
        assert exc_info.value.code is ErrorCode.WG400
        assert exc_info.value.context["stage"] == "spine"


class TestCancellationToken:
    def test_not_cancelled_by_default(self):
        token = CancellationToken()
        assert not token.cancelled
        token.check("classify")

    def test_cancel(self):
        token = CancellationToken()
        token.cancel()
        assert token.cancelled
        with pytest.raises(AnalysisCancelled) as exc_info:
            token.check("layout")
        assert exc_info.value.code is ErrorCode.WG401

    def test_timeout_cancels(self):
        assert CancellationToken(timeout_seconds=0.0).cancelled

    def test_cancel_from_another_thread(self):
        token = CancellationToken()
        thread = threading.Thread(target=token.cancel)
        thread.start()
        thread.join()
        assert token.cancelled
