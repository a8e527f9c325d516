"""Application configuration.

Settings are read once at startup from a YAML file (``config.yaml`` by
default) into frozen Pydantic models and shared read-only by every agent and
the orchestrator. Credentials can also come from the environment / ``.env``.

Example:
    from heavyAgent.config.settings import load_settings

    settings = load_settings("config.yaml")
    max_iterations = settings.agent.max_iterations
    num_agents = settings.orchestrator.parallel_agents
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from heavyAgent.utils.errors import ConfigError

LOGGER = logging.getLogger(__name__)

load_dotenv()

DEFAULT_CONFIG_PATH = "config.yaml"

# Values shipped in sample configs that mean "no key configured"
API_KEY_PLACEHOLDERS = {"", "YOUR API KEY HERE", "YOUR_API_KEY", "YOUR_OPENROUTER_API_KEY", "sk-..."}

API_KEY_ENV_VAR = "OPENROUTER_API_KEY"

DEFAULT_SYSTEM_PROMPT = """You are a helpful research assistant. When users ask questions that require \
current information or web search, use the search tool and all other tools available to find relevant \
information and provide comprehensive answers based on the results.

IMPORTANT: When you have fully satisfied the user's request and provided a complete answer, you MUST call \
the mark_task_complete tool with a summary of what was accomplished and a final message for the user. \
This signals that the task is finished."""

DEFAULT_QUESTION_GENERATION_PROMPT = """You are an orchestrator that needs to create {num_agents} different \
questions to thoroughly analyze this topic from multiple angles.

Original user query: {user_input}

Generate exactly {num_agents} different, specific questions that will help gather comprehensive \
information about this topic. Each question should approach the topic from a different angle \
(research, analysis, verification, alternatives, etc.).

Return your response as a JSON array of strings, like this:
["question 1", "question 2", "question 3", "question 4"]

Only return the JSON array, nothing else."""

DEFAULT_SYNTHESIS_PROMPT = """You have {num_responses} different AI agents that analyzed the same query \
from different perspectives. Your job is to synthesize their responses into ONE comprehensive final answer.

Here are all the agent responses:

{agent_responses}

IMPORTANT: Just synthesize these into ONE final comprehensive answer that combines the best information \
from all agents. Do NOT call mark_task_complete or any other tools. Do NOT mention that you are \
synthesizing multiple responses. Simply provide the final synthesized answer directly as your response."""


class OpenRouterSettings(BaseSettings):
    """Model endpoint and credentials.

    ``api_key`` falls back to ``OPENROUTER_API_KEY`` / ``OPENAI_API_KEY`` when
    the YAML file leaves it out. ``base_url`` and ``model`` only read the
    namespaced ``OPENROUTER_BASE_URL`` / ``OPENROUTER_MODEL`` variables.
    """

    api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(API_KEY_ENV_VAR, "OPENAI_API_KEY"),
    )
    base_url: str = Field(default="https://openrouter.ai/api/v1")
    model: str = Field(default="moonshotai/kimi-k2")

    model_config = SettingsConfigDict(
        env_prefix="OPENROUTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key) and self.api_key not in API_KEY_PLACEHOLDERS


class AgentSettings(BaseModel):
    """Tool-use loop limits."""

    model_config = ConfigDict(frozen=True)

    max_iterations: int = Field(default=10, ge=1)


class OrchestratorSettings(BaseModel):
    """Fan-out / fan-in configuration for the heavy mode."""

    model_config = ConfigDict(frozen=True)

    parallel_agents: int = Field(default=4, ge=1)
    task_timeout: float = Field(default=300, gt=0)
    enforce_timeout: bool = True
    aggregation_strategy: str = "consensus"
    question_generation_prompt: str = DEFAULT_QUESTION_GENERATION_PROMPT
    synthesis_prompt: str = DEFAULT_SYNTHESIS_PROMPT

    @field_validator("question_generation_prompt")
    @classmethod
    def _check_question_placeholders(cls, value: str) -> str:
        return _require_placeholders(value, "question_generation_prompt", "{user_input}", "{num_agents}")

    @field_validator("synthesis_prompt")
    @classmethod
    def _check_synthesis_placeholders(cls, value: str) -> str:
        return _require_placeholders(value, "synthesis_prompt", "{num_responses}", "{agent_responses}")


class SearchSettings(BaseModel):
    """Web search tool defaults."""

    model_config = ConfigDict(frozen=True)

    max_results: int = Field(default=5, ge=1)
    user_agent: str = "Mozilla/5.0 (compatible; OpenRouter Agent)"


class LoggingSettings(BaseModel):
    """Log destinations and levels."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    console_level: str = "WARNING"
    log_dir: str = "logs"
    log_to_file: bool = True

    @field_validator("level", "console_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return value


class Settings(BaseSettings):
    """Root application settings.

    Hierarchical structure mirroring ``config.yaml``:
    - openrouter: Model endpoint and credentials
    - system_prompt: System message of every agent conversation
    - agent: Loop limits
    - orchestrator: Parallel agents, timeout, prompt templates
    - search: Web search defaults
    - logging: Log levels and destinations
    """

    openrouter: OpenRouterSettings = Field(default_factory=OpenRouterSettings)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    agent: AgentSettings = Field(default_factory=AgentSettings)
    orchestrator: OrchestratorSettings = Field(default_factory=OrchestratorSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix="HEAVY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        case_sensitive=False,
    )


def _require_placeholders(template: str, field_name: str, *placeholders: str) -> str:
    missing = [p for p in placeholders if p not in template]
    if missing:
        raise ValueError(f"{field_name} is missing placeholder(s): {', '.join(missing)}")
    return template


def build_settings(data: Optional[Dict[str, Any]] = None) -> Settings:
    """Build Settings from a raw mapping (the parsed YAML document).

    The ``openrouter`` section is instantiated on its own so that missing or
    placeholder credentials are filled in from the environment.

    Raises:
        pydantic.ValidationError: If a value is out of range or a template
            lacks its placeholders
    """
    data = dict(data or {})

    section = dict(data.pop("openrouter", None) or {})
    api_key = section.pop("api_key", None)
    # Passed under the env alias so a YAML key overrides the environment
    if api_key not in API_KEY_PLACEHOLDERS and api_key is not None:
        section[API_KEY_ENV_VAR] = api_key
    data["openrouter"] = OpenRouterSettings(**section)

    return Settings(**data)


def load_settings(config_path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> Settings:
    """Load settings from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Frozen Settings instance

    Raises:
        ConfigError: If the file is missing, is not valid YAML or fails validation
    """
    path = Path(config_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError("top-level YAML value must be a mapping")
        settings = build_settings(raw)
    except (OSError, yaml.YAMLError, ValueError, ValidationError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    LOGGER.info(f"Loaded configuration from {path}")
    return settings


__all__ = [
    "Settings",
    "OpenRouterSettings",
    "AgentSettings",
    "OrchestratorSettings",
    "SearchSettings",
    "LoggingSettings",
    "build_settings",
    "load_settings",
]
