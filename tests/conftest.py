"""Pytest configuration and fixtures for all tests.

This file is automatically loaded by pytest and ensures proper test environment setup.
"""

import inspect
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest
from langchain_core.messages import AIMessage, BaseMessage

# Ensure project root is in PYTHONPATH for imports to work
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from heavyAgent.config.settings import build_settings  # noqa: E402
from heavyAgent.tools.builtin.task_done import COMPLETION_TOOL_NAME  # noqa: E402

TEST_QUESTION_PROMPT = "Create {num_agents} questions about: {user_input}"
TEST_SYNTHESIS_PROMPT = "Combine {num_responses} answers:\n{agent_responses}"


def completion_call(text: str = "", call_id: str = "call_done") -> AIMessage:
    """Assistant reply carrying ``text`` and a completion-signal tool call."""
    return AIMessage(
        content=text,
        tool_calls=[
            {
                "name": COMPLETION_TOOL_NAME,
                "args": {"task_summary": "done", "completion_message": "finished"},
                "id": call_id,
            }
        ],
    )


class ScriptedChatModel:
    """Stand-in chat model replaying scripted replies.

    Each item of ``responses`` is consumed by one ``ainvoke`` call; the last
    item repeats once the script runs out. Items may be a string (plain
    assistant text), an ``AIMessage``, or an exception (raised). A
    ``responder(messages)`` callable replaces the script; it may return any
    of the above or an awaitable producing one.
    """

    def __init__(self, responses=None, responder: Optional[Callable[[List[BaseMessage]], Any]] = None):
        self.responses = list(responses or ["Response"])
        self.responder = responder
        self.calls: List[List[BaseMessage]] = []
        self.bound_tools: Optional[List[str]] = None

    def bind_tools(self, tools):
        self.bound_tools = [tool.name for tool in tools]
        return self

    def _next_item(self, messages):
        if self.responder is not None:
            return self.responder(messages)
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]

    async def ainvoke(self, messages):
        self.calls.append(list(messages))
        item = self._next_item(messages)
        if inspect.isawaitable(item):
            item = await item
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, str):
            return AIMessage(content=item)
        return item


def make_settings(**sections: Dict[str, Any]):
    """Settings for tests: fake API key, no log files, short prompts."""
    data: Dict[str, Any] = {
        "openrouter": {"api_key": "test-key", "model": "moonshotai/kimi-k2"},
        "system_prompt": "You are a test assistant.",
        "agent": {"max_iterations": 5},
        "orchestrator": {
            "parallel_agents": 3,
            "task_timeout": 5,
            "question_generation_prompt": TEST_QUESTION_PROMPT,
            "synthesis_prompt": TEST_SYNTHESIS_PROMPT,
        },
        "logging": {"log_to_file": False},
    }
    for name, values in sections.items():
        if isinstance(values, dict) and isinstance(data.get(name), dict):
            data[name] = {**data[name], **values}
        else:
            data[name] = values
    return build_settings(data)


@pytest.fixture
def settings():
    return make_settings()

