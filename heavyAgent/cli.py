"""Command-line front ends for the single agent and the heavy orchestrator."""

from __future__ import annotations

import asyncio
import logging
import sys
import time
from typing import Optional

from heavyAgent.agent import ToolAgent
from heavyAgent.config.settings import Settings
from heavyAgent.orchestrator import AgentStatus, ProgressState, TaskOrchestrator
from heavyAgent.utils.logging_utils import log_error
from shared.cli.base_cli import BaseCLI

LOGGER = logging.getLogger(__name__)

ORANGE = "\x1b[38;5;208m"
RED = "\x1b[91m"
RESET = "\x1b[0m"

BAR_WIDTH = 70
PROCESSING_FILL = 10
RESULT_RULE = "=" * 80
SEPARATOR = "-" * 50

REFRESH_INTERVAL = 1.0


def format_time(seconds: float) -> str:
    """Render elapsed seconds as ``12S``, ``3M4S`` or ``1H2M``."""
    seconds = int(seconds)
    if seconds < 60:
        return f"{seconds}S"
    if seconds < 3600:
        return f"{seconds // 60}M{seconds % 60}S"
    return f"{seconds // 3600}H{(seconds % 3600) // 60}M"


def create_progress_bar(status: str) -> str:
    """Progress bar for one rendered agent status string."""
    state = AgentStatus.parse(status).state
    filled = f"{ORANGE}:{RESET}"

    if state is ProgressState.QUEUED:
        return "○ " + "·" * BAR_WIDTH
    if state is ProgressState.PROCESSING:
        return f"{ORANGE}●{RESET} " + filled * PROCESSING_FILL + "·" * (BAR_WIDTH - PROCESSING_FILL)
    if state is ProgressState.COMPLETED:
        return f"{ORANGE}●{RESET} " + filled * BAR_WIDTH
    if state is ProgressState.FAILED:
        return f"{RED}✗{RESET} " + f"{RED}×{RESET}" * BAR_WIDTH
    return f"{ORANGE}◐{RESET} " + "·" * BAR_WIDTH


def model_display_name(model_id: str) -> str:
    """``moonshotai/kimi-k2-instruct-0905`` -> ``KIMI-K2-INSTRUCT HEAVY``."""
    name = model_id.rsplit("/", 1)[-1]
    return "-".join(name.split("-")[:3]).upper() + " HEAVY"


class AgentCLI(BaseCLI):
    """REPL around one ToolAgent."""

    def __init__(self, settings: Settings, agent: Optional[ToolAgent] = None):
        super().__init__()
        self.settings = settings
        self.agent = agent or ToolAgent(settings)

    def print_welcome(self):
        print("OpenRouter Agent with DuckDuckGo Search")
        print("Type 'quit', 'exit', or 'bye' to exit")
        print(SEPARATOR)
        print(f"Using model: {self.settings.openrouter.model}")
        print(f"Tools: {', '.join(self.agent.tools.names())}")
        print(SEPARATOR)

    async def ask(self, message: str) -> Optional[str]:
        """Run the agent once; errors are printed, not raised."""
        print("Agent: Thinking...")
        try:
            response = await self.agent.run(message)
        except Exception as e:
            log_error(LOGGER, e, context="agent run")
            print(f"Error: {e}")
            print("Please try again or type 'quit' to exit.")
            return None

        print(f"Agent: {response}")
        return response

    async def handle_user_message(self, message: str):
        await self.ask(message)


class HeavyCLI(BaseCLI):
    """REPL around the TaskOrchestrator with a live per-agent progress display."""

    def __init__(self, settings: Settings, orchestrator: Optional[TaskOrchestrator] = None):
        super().__init__()
        self.settings = settings
        self.orchestrator = orchestrator or TaskOrchestrator(settings)
        self.model_display = model_display_name(settings.openrouter.model)

        self.start_time: Optional[float] = None
        self.running = False

    def clear_screen(self):
        sys.stdout.write("\x1b[2J\x1b[H")
        sys.stdout.flush()

    def render_display(self) -> str:
        """Current display frame: header, run state and one bar per agent."""
        elapsed = time.monotonic() - self.start_time if self.start_time is not None else 0
        state = "RUNNING" if self.running else "COMPLETED"
        progress = self.orchestrator.get_progress_status()

        lines = [self.model_display, f"● {state} • {format_time(elapsed)}", ""]
        for i in range(self.orchestrator.num_agents):
            status = progress.get(i, ProgressState.QUEUED.value)
            lines.append(f"AGENT {i + 1:02d}  {create_progress_bar(status)}")
        lines.append("")
        return "\n".join(lines)

    def update_display(self):
        self.clear_screen()
        print(self.render_display())

    async def progress_monitor(self):
        """Redraw the display every second until cancelled."""
        sys.stdout.write("\x1b[?25l")
        try:
            while self.running:
                self.update_display()
                await asyncio.sleep(REFRESH_INTERVAL)
        finally:
            sys.stdout.write("\x1b[?25h")
            sys.stdout.flush()

    def print_final_results(self, result: str):
        print(RESULT_RULE)
        print("FINAL RESULTS")
        print(RESULT_RULE)
        print()
        print(result)
        print()
        print(RESULT_RULE)

    async def run_task(self, user_input: str) -> Optional[str]:
        """Orchestrate one request while the progress monitor runs.

        Returns:
            The final answer, or None if orchestration raised
        """
        self.start_time = time.monotonic()
        self.running = True
        monitor = asyncio.create_task(self.progress_monitor())

        try:
            result = await self.orchestrator.orchestrate(user_input)
        except Exception as e:
            log_error(LOGGER, e, context="orchestration")
            result = None
            error = e
        else:
            error = None
        finally:
            self.running = False
            monitor.cancel()
            try:
                await monitor
            except asyncio.CancelledError:
                pass

        self.update_display()
        if error is not None:
            print(f"\nError during orchestration: {error}")
            return None

        self.print_final_results(result)
        return result

    def print_welcome(self):
        print("Multi-Agent Orchestrator")
        print(f"Configured for {self.orchestrator.num_agents} parallel agents")
        print("Type 'quit', 'exit', or 'bye' to exit")
        print(SEPARATOR)
        print(f"Using model: {self.settings.openrouter.model}")
        print("Orchestrator initialized successfully!")
        print(SEPARATOR)

    async def handle_user_message(self, message: str):
        print("\nOrchestrator: Starting multi-agent analysis...")
        print()
        result = await self.run_task(message)
        if result is None:
            print("Task failed. Please try again.")


__all__ = [
    "AgentCLI",
    "HeavyCLI",
    "create_progress_bar",
    "format_time",
    "model_display_name",
]
