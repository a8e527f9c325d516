"""Task decomposition helpers: prompt building, reply parsing and fallback."""

from __future__ import annotations

import json
from typing import Any, List

from heavyAgent.utils.errors import DecompositionError

FALLBACK_TEMPLATES = (
    "Research comprehensive information about: {user_input}",
    "Analyze and provide insights about: {user_input}",
    "Find alternative perspectives on: {user_input}",
    "Verify and cross-check facts about: {user_input}",
)


def build_question_prompt(template: str, user_input: str, num_agents: int) -> str:
    """Fill the decomposition template.

    Plain replacement, templates usually contain literal JSON braces.
    """
    return template.replace("{num_agents}", str(num_agents)).replace("{user_input}", user_input)


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _find_string_arrays(text: str) -> List[List[str]]:
    """Return every JSON array of strings embedded in ``text``, in order."""
    decoder = json.JSONDecoder()
    found = []
    index = text.find("[")
    while index != -1:
        try:
            value, end = decoder.raw_decode(text, index)
        except json.JSONDecodeError:
            index = text.find("[", index + 1)
            continue
        if _is_string_list(value):
            found.append(value)
            index = text.find("[", end)
        else:
            index = text.find("[", index + 1)
    return found


def parse_subtasks(response: str, expected_count: int) -> List[str]:
    """Parse the planner's reply into exactly ``expected_count`` sub-tasks.

    Accepts a bare JSON array, a fenced one, or one embedded in prose. When
    the planner wrote several arrays over its iterations, the last one wins.

    Raises:
        DecompositionError: If no array of strings is found or the count differs
    """
    stripped = response.strip()
    try:
        parsed = json.loads(stripped)
    except json.JSONDecodeError:
        candidates = _find_string_arrays(stripped)
        if not candidates:
            raise DecompositionError(f"No JSON array of questions in planner reply: {stripped[:200]!r}")
        parsed = candidates[-1]

    if not _is_string_list(parsed):
        raise DecompositionError(f"Planner reply is not a list of strings: {type(parsed).__name__}")

    questions = [item.strip() for item in parsed]
    if len(questions) != expected_count:
        raise DecompositionError(f"Expected {expected_count} questions, got {len(questions)}")
    return questions


def fallback_subtasks(user_input: str, num_agents: int) -> List[str]:
    """Deterministic sub-tasks used when the planner cannot be parsed.

    The four templates are used in order; beyond four agents they repeat
    with a ``(perspective k)`` suffix so every agent gets a distinct task.
    """
    subtasks = []
    for i in range(num_agents):
        template = FALLBACK_TEMPLATES[i % len(FALLBACK_TEMPLATES)]
        subtask = template.format(user_input=user_input)
        if i >= len(FALLBACK_TEMPLATES):
            subtask = f"{subtask} (perspective {i + 1})"
        subtasks.append(subtask)
    return subtasks


__all__ = ["FALLBACK_TEMPLATES", "build_question_prompt", "parse_subtasks", "fallback_subtasks"]
