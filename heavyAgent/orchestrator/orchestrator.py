"""TaskOrchestrator - Parallel multi-agent analysis of one request.

Flow of ``orchestrate``:
1. Reset progress tracking
2. Decompose the request into N questions (planner agent, deterministic fallback)
3. Run N agents concurrently, one per question
4. Collect every outcome (success / error / timeout), sorted by index
5. Aggregate: all failed -> fixed message, one success -> verbatim,
   otherwise consensus synthesis (plain concatenation if synthesis fails)

Sub-agent failures never propagate out of ``orchestrate``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Dict, List, Optional, Sequence

from langchain_core.language_models import BaseChatModel

from heavyAgent.agent import MAX_ITERATIONS_MESSAGE, ToolAgent
from heavyAgent.config.settings import Settings
from heavyAgent.models.resolver import build_model_factory
from heavyAgent.orchestrator.aggregation import (
    ALL_AGENTS_FAILED_MESSAGE,
    CONSENSUS_STRATEGY,
    KNOWN_STRATEGIES,
    build_synthesis_prompt,
    concatenate_responses,
)
from heavyAgent.orchestrator.decomposition import build_question_prompt, fallback_subtasks, parse_subtasks
from heavyAgent.orchestrator.progress import AgentStatus, ProgressTracker
from heavyAgent.orchestrator.results import AgentOutcome, AgentResult
from heavyAgent.tools.registry import ToolRegistry, build_tool_registry
from heavyAgent.utils.errors import DecompositionError
from heavyAgent.utils.logging_utils import log_error

LOGGER = logging.getLogger(__name__)

# A tool-less synthesizer has nothing to dispatch, so one turn is its whole answer
SYNTHESIS_MAX_ITERATIONS = 1


class TaskOrchestrator:
    """Fan a request out to parallel agents and fan their answers back in.

    Args:
        settings: Application settings
        model_factory: Zero-argument callable returning a chat model; called
            once per agent (default: ChatOpenAI built from settings)
        tool_registry: Full tool set of worker agents (default registry if omitted)
    """

    def __init__(
        self,
        settings: Settings,
        model_factory: Optional[Callable[[], BaseChatModel]] = None,
        tool_registry: Optional[ToolRegistry] = None,
    ):
        self.settings = settings
        self.num_agents = settings.orchestrator.parallel_agents
        self.task_timeout = settings.orchestrator.task_timeout
        self.enforce_timeout = settings.orchestrator.enforce_timeout
        self.aggregation_strategy = settings.orchestrator.aggregation_strategy

        self.model_factory = model_factory or build_model_factory(settings)
        self.tool_registry = tool_registry if tool_registry is not None else build_tool_registry(settings)

        # Role-specific capability sets, fixed at construction
        self.planner_tools = self.tool_registry.planner_tools()
        self.synthesizer_tools = self.tool_registry.synthesizer_tools()

        self.progress = ProgressTracker()
        self.last_results: List[AgentResult] = []

        if self.aggregation_strategy not in KNOWN_STRATEGIES:
            LOGGER.warning(
                f"Unknown aggregation strategy '{self.aggregation_strategy}', using '{CONSENSUS_STRATEGY}'"
            )

    def _create_agent(self, tools: ToolRegistry, max_iterations: Optional[int] = None) -> ToolAgent:
        return ToolAgent(
            self.settings,
            model=self.model_factory(),
            tools=tools,
            max_iterations=max_iterations,
        )

    # ========== Decomposition ==========

    async def decompose_task(self, user_input: str, num_agents: int) -> List[str]:
        """Split the request into ``num_agents`` questions.

        Falls back to a fixed template set if the planner fails, returns
        something unparseable or the wrong number of questions.
        """
        prompt = build_question_prompt(
            self.settings.orchestrator.question_generation_prompt, user_input, num_agents
        )

        try:
            question_agent = self._create_agent(self.planner_tools)
            response = await question_agent.run(prompt)
            questions = parse_subtasks(response, num_agents)
        except DecompositionError as e:
            LOGGER.warning(f"Decomposition reply rejected, using fallback questions: {e}")
            return fallback_subtasks(user_input, num_agents)
        except Exception as e:
            log_error(LOGGER, e, context="question generation")
            return fallback_subtasks(user_input, num_agents)

        LOGGER.info(f"Generated {len(questions)} questions")
        for i, question in enumerate(questions, start=1):
            LOGGER.debug(f"  Question {i}: {question}")
        return questions

    # ========== Dispatch ==========

    def update_agent_progress(self, agent_id: int, status: AgentStatus, result: Optional[str] = None) -> None:
        self.progress.update(agent_id, status, result)

    def get_progress_status(self) -> Dict[int, str]:
        """Snapshot of agent index -> display string."""
        return self.progress.get_progress_status()

    async def run_agent_parallel(self, agent_id: int, subtask: str) -> AgentResult:
        """Run one sub-agent; errors become an ``error`` result instead of raising."""
        try:
            self.update_agent_progress(agent_id, AgentStatus.initializing())
            agent = self._create_agent(self.tool_registry)

            self.update_agent_progress(agent_id, AgentStatus.processing())
            start_time = time.perf_counter()
            response = await agent.run(subtask)
            execution_time = time.perf_counter() - start_time

            self.update_agent_progress(agent_id, AgentStatus.completed(), response)
            return AgentResult(agent_id, AgentOutcome.SUCCESS, response, execution_time)
        except Exception as e:
            log_error(LOGGER, e, context=f"agent {agent_id + 1}")
            self.update_agent_progress(agent_id, AgentStatus.failed(str(e)))
            return AgentResult(agent_id, AgentOutcome.ERROR, f"Error: {e}", 0)

    async def _run_with_timeout(self, agent_id: int, subtask: str) -> AgentResult:
        if not self.enforce_timeout:
            return await self.run_agent_parallel(agent_id, subtask)

        try:
            return await asyncio.wait_for(self.run_agent_parallel(agent_id, subtask), self.task_timeout)
        except asyncio.TimeoutError:
            LOGGER.warning(f"Agent {agent_id + 1} timed out after {self.task_timeout}s")
            self.update_agent_progress(agent_id, AgentStatus.failed("timeout"))
            return self._timeout_result(agent_id, f"no result within {self.task_timeout}s")

    def _timeout_result(self, agent_id: int, reason: object) -> AgentResult:
        return AgentResult(
            agent_id,
            AgentOutcome.TIMEOUT,
            f"Agent {agent_id + 1} timed out or failed: {reason}",
            self.task_timeout,
        )

    async def _dispatch(self, subtasks: Sequence[str]) -> List[AgentResult]:
        outcomes = await asyncio.gather(
            *(self._run_with_timeout(i, subtask) for i, subtask in enumerate(subtasks)),
            return_exceptions=True,
        )

        results = []
        for i, outcome in enumerate(outcomes):
            if isinstance(outcome, AgentResult):
                results.append(outcome)
            else:
                # Escaped run_agent_parallel (e.g. cancellation)
                LOGGER.error(f"Agent {i + 1} did not settle normally: {outcome!r}")
                results.append(self._timeout_result(i, outcome))

        results.sort(key=lambda r: r.agent_id)
        return results

    # ========== Aggregation ==========

    async def aggregate_results(self, agent_results: Sequence[AgentResult]) -> str:
        """Combine the successful responses into one answer."""
        successful = [r for r in agent_results if r.succeeded]
        if not successful:
            return ALL_AGENTS_FAILED_MESSAGE

        responses = [r.response for r in successful]

        # Only consensus is defined; other names fall back to it
        return await self.aggregate_consensus(responses)

    async def aggregate_consensus(self, responses: Sequence[str]) -> str:
        """Synthesize several responses with a tool-less agent.

        A single response is returned verbatim. If the synthesis call fails or
        produces no answer the responses are concatenated under
        ``=== Agent i Response ===``.
        """
        if len(responses) == 1:
            return responses[0]

        prompt = build_synthesis_prompt(self.settings.orchestrator.synthesis_prompt, responses)

        try:
            synthesis_agent = self._create_agent(self.synthesizer_tools, max_iterations=SYNTHESIS_MAX_ITERATIONS)
            synthesis = await synthesis_agent.run(prompt)
        except Exception as e:
            log_error(LOGGER, e, context="synthesis failed, falling back to concatenated responses")
            return concatenate_responses(responses)

        if not synthesis.strip() or synthesis == MAX_ITERATIONS_MESSAGE:
            LOGGER.warning("Synthesis produced no answer, falling back to concatenated responses")
            return concatenate_responses(responses)
        return synthesis

    # ========== Entry Point ==========

    async def orchestrate(self, user_input: str) -> str:
        """Answer ``user_input`` with ``num_agents`` parallel agents.

        Returns:
            Final synthesized answer (always a string)
        """
        self.progress.reset()
        self.last_results = []

        LOGGER.info(f"Orchestrating with {self.num_agents} agent(s): {user_input[:100]}")
        subtasks = await self.decompose_task(user_input, self.num_agents)

        self.progress.initialize(len(subtasks))

        results = await self._dispatch(subtasks)
        self.last_results = results

        succeeded = sum(1 for r in results if r.succeeded)
        LOGGER.info(f"{succeeded}/{len(results)} agent(s) succeeded")

        return await self.aggregate_results(results)


__all__ = ["TaskOrchestrator", "SYNTHESIS_MAX_ITERATIONS"]
