"""mark_task_complete - Signal tool for task completion.

This is a "signal tool": it performs no work. The agent loop watches for
calls to it and stops as soon as one is dispatched, returning everything the
model has written so far.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Dict

from langchain_core.tools import tool

COMPLETION_TOOL_NAME = "mark_task_complete"

__all__ = ["COMPLETION_TOOL_NAME", "mark_task_complete"]


@tool
def mark_task_complete(
    task_summary: Annotated[str, "Brief summary of what was accomplished"],
    completion_message: Annotated[str, "Message to show the user indicating the task is complete"],
) -> Dict[str, Any]:
    """REQUIRED: Call this tool when the user's original request has been fully satisfied and you have provided a complete answer. This signals task completion and exits the agent loop."""
    return {
        "status": "completed",
        "task_summary": task_summary,
        "completion_message": completion_message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
