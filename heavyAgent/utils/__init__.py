"""Utility helpers for HeavyAgent."""

from .errors import (
    ConfigError,
    DecompositionError,
    HeavyAgentError,
    ModelInvocationError,
    ToolExecutionError,
)
from .message_utils import message_text

__all__ = [
    "ConfigError",
    "DecompositionError",
    "HeavyAgentError",
    "ModelInvocationError",
    "ToolExecutionError",
    "message_text",
]
