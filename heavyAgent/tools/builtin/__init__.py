"""Built-in tools."""

from .calculator import calculate
from .file_ops import read_file, write_file
from .task_done import COMPLETION_TOOL_NAME, mark_task_complete
from .web_search import create_search_tool

__all__ = [
    "COMPLETION_TOOL_NAME",
    "calculate",
    "create_search_tool",
    "mark_task_complete",
    "read_file",
    "write_file",
]
