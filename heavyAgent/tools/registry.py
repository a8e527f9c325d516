"""Tool registration and role-specific tool sets."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from langchain_core.tools import BaseTool

from heavyAgent.config.settings import Settings
from heavyAgent.tools.builtin.calculator import calculate
from heavyAgent.tools.builtin.file_ops import read_file, write_file
from heavyAgent.tools.builtin.task_done import COMPLETION_TOOL_NAME, mark_task_complete
from heavyAgent.tools.builtin.web_search import create_search_tool

LOGGER = logging.getLogger(__name__)


class ToolRegistry:
    """Ordered, name-keyed collection of tools handed to an agent.

    A registry is never mutated after construction. Role-specific subsets
    (planner without the completion signal, synthesizer without any tool)
    are new registries derived with ``without`` / ``only``.
    """

    def __init__(self, tools: Optional[Iterable[BaseTool]] = None) -> None:
        self._tools: Dict[str, BaseTool] = {}
        for tool in tools or ():
            if tool.name in self._tools:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            self._tools[tool.name] = tool

    def get_tool(self, name: str) -> BaseTool:
        if name not in self._tools:
            raise KeyError(f"Unknown tool: {name}")
        return self._tools[name]

    def has_tool(self, name: str) -> bool:
        return name in self._tools

    def list_tools(self) -> List[BaseTool]:
        return list(self._tools.values())

    def names(self) -> List[str]:
        return list(self._tools.keys())

    def without(self, *names: str) -> "ToolRegistry":
        """Return a new registry lacking the given tools."""
        excluded = set(names)
        return ToolRegistry(t for n, t in self._tools.items() if n not in excluded)

    def only(self, *names: str) -> "ToolRegistry":
        """Return a new registry restricted to the given tools (unknown names are ignored)."""
        return ToolRegistry(self._tools[n] for n in names if n in self._tools)

    def planner_tools(self) -> "ToolRegistry":
        """Tools for the decomposition agent: everything but the completion signal."""
        return self.without(COMPLETION_TOOL_NAME)

    def synthesizer_tools(self) -> "ToolRegistry":
        """Tools for the synthesis agent: none, it must answer directly."""
        return ToolRegistry()

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __repr__(self) -> str:
        return f"ToolRegistry({self.names()!r})"


def build_tool_registry(settings: Settings) -> ToolRegistry:
    """Build the default registry from the static tool table.

    Args:
        settings: Application settings (the search tool reads its defaults)
    """
    tools = [
        calculate,
        read_file,
        create_search_tool(settings.search),
        mark_task_complete,
        write_file,
    ]
    registry = ToolRegistry(tools)
    for name in registry.names():
        LOGGER.info(f"[Tool Registry] Registered tool: {name}")
    return registry


__all__ = ["ToolRegistry", "build_tool_registry"]
