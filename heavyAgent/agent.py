"""ToolAgent - Bounded tool-use conversation loop.

One agent answers one task string:

    THINKING -> (tool calls?) -> TOOL_DISPATCH -> THINKING ... -> DONE | EXHAUSTED

The loop ends when the model calls the completion-signal tool (DONE) or the
iteration budget runs out (EXHAUSTED). Replies without tool calls do not end
the loop; the model may think out loud for several turns.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage, ToolMessage

from heavyAgent.config.settings import Settings
from heavyAgent.models.resolver import build_chat_model
from heavyAgent.tools.builtin.task_done import COMPLETION_TOOL_NAME
from heavyAgent.tools.registry import ToolRegistry, build_tool_registry
from heavyAgent.utils.errors import ModelInvocationError, ToolExecutionError
from heavyAgent.utils.logging_utils import log_agent_iteration, log_error, log_tool_call, log_tool_result
from heavyAgent.utils.message_utils import message_text

LOGGER = logging.getLogger(__name__)

MAX_ITERATIONS_MESSAGE = "Maximum iterations reached. The agent may be stuck in a loop."
RESPONSE_SEPARATOR = "\n\n"


class ToolAgent:
    """Single agent driving the tool-use loop against a chat model.

    The conversation lives only for the duration of one ``run`` call; the
    agent keeps no history between calls.

    Examples:
        >>> agent = ToolAgent(settings)
        >>> answer = await agent.run("What is the population of Lisbon?")

        >>> # Planner role: same tools minus the completion signal
        >>> planner = ToolAgent(settings, tools=registry.planner_tools())
    """

    def __init__(
        self,
        settings: Settings,
        model: Optional[BaseChatModel] = None,
        tools: Optional[ToolRegistry] = None,
        max_iterations: Optional[int] = None,
    ):
        """Initialize the agent.

        Args:
            settings: Application settings (system prompt, loop limit, model)
            model: Chat model (built from settings if omitted)
            tools: Capability set for this agent (default registry if omitted)
            max_iterations: Overrides ``settings.agent.max_iterations``
        """
        self.settings = settings
        self.tools = tools if tools is not None else build_tool_registry(settings)
        self.model = model if model is not None else build_chat_model(settings)
        self.max_iterations = max_iterations or settings.agent.max_iterations

        # No tool schemas at all for a tool-less agent
        if len(self.tools):
            self._runnable = self.model.bind_tools(self.tools.list_tools())
        else:
            self._runnable = self.model

    async def call_llm(self, messages: List[BaseMessage]) -> AIMessage:
        """Send the conversation to the model.

        Raises:
            ModelInvocationError: If the model call fails for any reason
        """
        try:
            return await self._runnable.ainvoke(messages)
        except Exception as e:
            raise ModelInvocationError(f"LLM call failed: {e}") from e

    async def handle_tool_call(self, tool_call: Dict[str, Any]) -> ToolMessage:
        """Execute one tool call and wrap its payload in a ToolMessage.

        Unknown tools and tool exceptions become error payloads; this method
        never raises.
        """
        tool_name = tool_call["name"]
        tool_args = tool_call.get("args") or {}
        call_id = tool_call.get("id") or ""

        log_tool_call(LOGGER, tool_name, tool_args)

        if not self.tools.has_tool(tool_name):
            payload: Any = {"error": f"Unknown tool: {tool_name}"}
            log_tool_result(LOGGER, tool_name, payload, success=False)
        else:
            try:
                payload = await self.tools.get_tool(tool_name).ainvoke(tool_args)
                log_tool_result(LOGGER, tool_name, payload)
            except Exception as e:
                error = ToolExecutionError(f"Tool execution failed: {e}")
                log_error(LOGGER, error, context=f"tool {tool_name}")
                payload = {"error": str(error)}
                log_tool_result(LOGGER, tool_name, payload, success=False)

        return ToolMessage(
            content=json.dumps(payload, ensure_ascii=False, default=str),
            tool_call_id=call_id,
            name=tool_name,
        )

    def handle_invalid_tool_call(self, invalid_call: Dict[str, Any]) -> ToolMessage:
        """Answer a tool call whose arguments could not be parsed."""
        tool_name = invalid_call.get("name") or "unknown"
        payload = {"error": f"Tool execution failed: {invalid_call.get('error') or 'invalid arguments'}"}
        log_tool_result(LOGGER, tool_name, payload, success=False)
        return ToolMessage(
            content=json.dumps(payload, ensure_ascii=False),
            tool_call_id=invalid_call.get("id") or "",
            name=tool_name,
        )

    @staticmethod
    def ordered_tool_calls(response: AIMessage) -> List[Tuple[Dict[str, Any], bool]]:
        """Valid and invalid tool calls of one reply, in the order the model issued them.

        Returns:
            ``(call, is_valid)`` pairs. The raw provider list in
            ``additional_kwargs["tool_calls"]`` fixes the order when present;
            otherwise valid calls come first.
        """
        calls = [(call, True) for call in response.tool_calls or []]
        calls += [(call, False) for call in getattr(response, "invalid_tool_calls", None) or []]

        raw_calls = response.additional_kwargs.get("tool_calls") or []
        positions = {raw.get("id"): i for i, raw in enumerate(raw_calls) if isinstance(raw, dict)}
        if positions:
            calls.sort(key=lambda pair: positions.get(pair[0].get("id"), len(positions)))
        return calls

    async def run(self, user_input: str) -> str:
        """Run the tool-use loop for one task.

        Args:
            user_input: Task text, sent as the user message

        Returns:
            All non-empty assistant texts joined by blank lines, or a fixed
            message if the budget ran out before the model wrote anything

        Raises:
            ModelInvocationError: If a model call fails
        """
        messages: List[BaseMessage] = [
            SystemMessage(content=self.settings.system_prompt),
            HumanMessage(content=user_input),
        ]

        # Every assistant text is kept, not only the last one
        full_response_content: List[str] = []

        for iteration in range(1, self.max_iterations + 1):
            log_agent_iteration(LOGGER, iteration, self.max_iterations)

            response = await self.call_llm(messages)
            messages.append(response)

            text = message_text(response)
            if text:
                full_response_content.append(text)

            pending = self.ordered_tool_calls(response)

            if not pending:
                LOGGER.info("Agent responded without tool calls - continuing loop")
                continue

            LOGGER.info(f"Agent making {len(pending)} tool call(s)")
            for tool_call, is_valid in pending:
                if is_valid:
                    messages.append(await self.handle_tool_call(tool_call))
                else:
                    messages.append(self.handle_invalid_tool_call(tool_call))

                # Unparseable arguments still count as a completion signal
                if tool_call.get("name") == COMPLETION_TOOL_NAME:
                    LOGGER.info("Task completion tool called - exiting loop")
                    return RESPONSE_SEPARATOR.join(full_response_content)

        LOGGER.warning(f"Agent exhausted {self.max_iterations} iteration(s) without completion signal")
        if full_response_content:
            return RESPONSE_SEPARATOR.join(full_response_content)
        return MAX_ITERATIONS_MESSAGE


__all__ = ["ToolAgent", "MAX_ITERATIONS_MESSAGE"]
