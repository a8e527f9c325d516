"""Outcome records of parallel agent runs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AgentOutcome(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class AgentResult:
    """Immutable result of one sub-agent.

    Attributes:
        agent_id: Zero-based index of the sub-task
        status: How the run settled
        response: Agent output, or an error description
        execution_time: Wall time in seconds (0 for errors, the configured
            timeout for timeouts)
    """

    agent_id: int
    status: AgentOutcome
    response: str
    execution_time: float

    @property
    def succeeded(self) -> bool:
        return self.status is AgentOutcome.SUCCESS


__all__ = ["AgentOutcome", "AgentResult"]
