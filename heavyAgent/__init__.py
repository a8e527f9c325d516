"""HeavyAgent - Multi-agent tool-use orchestration.

One request, several agents: the orchestrator decomposes a task into
sub-questions, runs one tool-using agent per sub-question concurrently and
synthesizes their answers into a single final response.
"""
from heavyAgent.agent import ToolAgent
from heavyAgent.orchestrator import TaskOrchestrator

__version__ = "0.1.0"
__all__ = ["ToolAgent", "TaskOrchestrator"]
