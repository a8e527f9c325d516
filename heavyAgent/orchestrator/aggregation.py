"""Result aggregation helpers for consensus synthesis."""

from __future__ import annotations

from typing import List, Sequence

ALL_AGENTS_FAILED_MESSAGE = "All agents failed to provide results. Please try again."
CONSENSUS_STRATEGY = "consensus"
KNOWN_STRATEGIES = {CONSENSUS_STRATEGY}


def format_agent_responses(responses: Sequence[str]) -> str:
    """Label each response for the synthesis prompt (1-indexed)."""
    return "".join(
        f"=== AGENT {i} RESPONSE ===\n{response}\n\n" for i, response in enumerate(responses, start=1)
    )


def build_synthesis_prompt(template: str, responses: Sequence[str]) -> str:
    return template.replace("{num_responses}", str(len(responses))).replace(
        "{agent_responses}", format_agent_responses(responses)
    )


def concatenate_responses(responses: Sequence[str]) -> str:
    """Plain fallback used when synthesis fails."""
    combined: List[str] = []
    for i, response in enumerate(responses, start=1):
        combined.append(f"=== Agent {i} Response ===")
        combined.append(response)
        combined.append("")
    return "\n".join(combined)


__all__ = [
    "ALL_AGENTS_FAILED_MESSAGE",
    "CONSENSUS_STRATEGY",
    "KNOWN_STRATEGIES",
    "format_agent_responses",
    "build_synthesis_prompt",
    "concatenate_responses",
]
