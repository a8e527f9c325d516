"""Per-agent progress tracking for the orchestrator.

Each parallel agent owns exactly one entry (its index), so entries have a
single writer. Observers such as the CLI display only ever receive copies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from heavyAgent.utils.logging_utils import log_progress_change

LOGGER = logging.getLogger(__name__)


class ProgressState(str, Enum):
    QUEUED = "QUEUED"
    INITIALIZING = "INITIALIZING..."
    PROCESSING = "PROCESSING..."
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class AgentStatus:
    """Status of one agent: a fixed state plus an optional failure reason."""

    state: ProgressState
    reason: Optional[str] = None

    @classmethod
    def queued(cls) -> "AgentStatus":
        return cls(ProgressState.QUEUED)

    @classmethod
    def initializing(cls) -> "AgentStatus":
        return cls(ProgressState.INITIALIZING)

    @classmethod
    def processing(cls) -> "AgentStatus":
        return cls(ProgressState.PROCESSING)

    @classmethod
    def completed(cls) -> "AgentStatus":
        return cls(ProgressState.COMPLETED)

    @classmethod
    def failed(cls, reason: str) -> "AgentStatus":
        return cls(ProgressState.FAILED, reason)

    @classmethod
    def parse(cls, text: str) -> "AgentStatus":
        """Parse a rendered status string.

        Strings that match no known state are treated as in progress
        (``INITIALIZING``), the placeholder display layers fall back to.
        """
        if text.startswith(ProgressState.FAILED.value):
            reason = text[len(ProgressState.FAILED.value):].lstrip(":").strip()
            return cls.failed(reason)
        for state in ProgressState:
            if text == state.value:
                return cls(state)
        return cls.initializing()

    @property
    def is_terminal(self) -> bool:
        return self.state in (ProgressState.COMPLETED, ProgressState.FAILED)

    def render(self) -> str:
        if self.state is ProgressState.FAILED:
            return f"FAILED: {self.reason}" if self.reason else "FAILED"
        return self.state.value

    def __str__(self) -> str:
        return self.render()


class ProgressTracker:
    """Mapping of agent index -> AgentStatus, plus each agent's final response."""

    def __init__(self) -> None:
        self._progress: Dict[int, AgentStatus] = {}
        self._results: Dict[int, str] = {}

    def reset(self) -> None:
        """Forget all entries (start of a new orchestration)."""
        self._progress.clear()
        self._results.clear()

    def initialize(self, num_agents: int) -> None:
        for agent_id in range(num_agents):
            self.update(agent_id, AgentStatus.queued())

    def update(self, agent_id: int, status: AgentStatus, result: Optional[str] = None) -> None:
        self._progress[agent_id] = status
        if result is not None:
            self._results[agent_id] = result
        log_progress_change(LOGGER, agent_id, status.render())

    def get(self, agent_id: int) -> Optional[AgentStatus]:
        return self._progress.get(agent_id)

    def snapshot(self) -> Dict[int, AgentStatus]:
        """Copy of the typed status mapping."""
        return dict(self._progress)

    def get_progress_status(self) -> Dict[int, str]:
        """Copy of the mapping with statuses rendered as display strings."""
        return {agent_id: status.render() for agent_id, status in self._progress.items()}

    def results(self) -> Dict[int, str]:
        return dict(self._results)


__all__ = ["ProgressState", "AgentStatus", "ProgressTracker"]
