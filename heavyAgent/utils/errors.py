"""Exception hierarchy for HeavyAgent."""

from __future__ import annotations


class HeavyAgentError(Exception):
    """Base exception for HeavyAgent errors."""

    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message


class ConfigError(HeavyAgentError):
    """Configuration could not be loaded or is incomplete."""
    pass


class ModelInvocationError(HeavyAgentError):
    """Error during model invocation."""
    pass


class ToolExecutionError(HeavyAgentError):
    """Error during tool execution."""
    pass


class DecompositionError(HeavyAgentError):
    """The planner reply could not be turned into sub-tasks.

    Always recovered by the orchestrator's fallback sub-task set.
    """
    pass


__all__ = [
    "HeavyAgentError",
    "ConfigError",
    "ModelInvocationError",
    "ToolExecutionError",
    "DecompositionError",
]
