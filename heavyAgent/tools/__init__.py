"""Tool registry and built-in tools."""

from .builtin import COMPLETION_TOOL_NAME
from .registry import ToolRegistry, build_tool_registry

__all__ = ["COMPLETION_TOOL_NAME", "ToolRegistry", "build_tool_registry"]
