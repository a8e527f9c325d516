"""Unit tests for progress statuses and the tracker."""

import pytest

from heavyAgent.orchestrator import AgentStatus, ProgressState, ProgressTracker
from heavyAgent.orchestrator.results import AgentOutcome, AgentResult


class TestAgentStatus:
    @pytest.mark.parametrize(
        "status, rendered",
        [
            (AgentStatus.queued(), "QUEUED"),
            (AgentStatus.initializing(), "INITIALIZING..."),
            (AgentStatus.processing(), "PROCESSING..."),
            (AgentStatus.completed(), "COMPLETED"),
            (AgentStatus.failed("timeout"), "FAILED: timeout"),
        ],
    )
    def test_render(self, status, rendered):
        assert status.render() == rendered
        assert str(status) == rendered

    def test_failed_without_reason(self):
        assert AgentStatus(ProgressState.FAILED).render() == "FAILED"

    def test_parse_known_states(self):
        for state in ProgressState:
            assert AgentStatus.parse(state.value).state is state

    def test_parse_failed_reason(self):
        status = AgentStatus.parse("FAILED: connection reset")
        assert status == AgentStatus.failed("connection reset")

    def test_parse_unknown_is_in_progress(self):
        assert AgentStatus.parse("something else") == AgentStatus.initializing()

    def test_terminal_states(self):
        assert AgentStatus.completed().is_terminal
        assert AgentStatus.failed("x").is_terminal
        assert not AgentStatus.processing().is_terminal
        assert not AgentStatus.queued().is_terminal


class TestProgressTracker:
    def test_initialize_queues_every_agent(self):
        tracker = ProgressTracker()
        tracker.initialize(3)

        assert tracker.get_progress_status() == {0: "QUEUED", 1: "QUEUED", 2: "QUEUED"}

    def test_update_and_results(self):
        tracker = ProgressTracker()
        tracker.initialize(2)
        tracker.update(1, AgentStatus.completed(), "answer")

        assert tracker.get(1) == AgentStatus.completed()
        assert tracker.results() == {1: "answer"}

    def test_snapshot_is_independent(self):
        tracker = ProgressTracker()
        tracker.initialize(1)

        snapshot = tracker.snapshot()
        snapshot[0] = AgentStatus.completed()

        assert tracker.get(0) == AgentStatus.queued()

    def test_reset(self):
        tracker = ProgressTracker()
        tracker.initialize(2)
        tracker.update(0, AgentStatus.completed(), "answer")
        tracker.reset()

        assert tracker.get_progress_status() == {}
        assert tracker.results() == {}
        assert tracker.get(0) is None


class TestAgentResult:
    def test_succeeded(self):
        assert AgentResult(0, AgentOutcome.SUCCESS, "ok", 1.5).succeeded
        assert not AgentResult(0, AgentOutcome.ERROR, "Error: x", 0).succeeded
        assert not AgentResult(0, AgentOutcome.TIMEOUT, "late", 300).succeeded

    def test_immutable(self):
        result = AgentResult(0, AgentOutcome.SUCCESS, "ok", 1.0)
        with pytest.raises(AttributeError):
            result.response = "changed"
