"""Multi-agent orchestration: decomposition, parallel dispatch, synthesis."""

from .orchestrator import TaskOrchestrator
from .progress import AgentStatus, ProgressState, ProgressTracker
from .results import AgentOutcome, AgentResult

__all__ = [
    "TaskOrchestrator",
    "AgentStatus",
    "ProgressState",
    "ProgressTracker",
    "AgentOutcome",
    "AgentResult",
]
