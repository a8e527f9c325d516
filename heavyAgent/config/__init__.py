"""Configuration loading for HeavyAgent."""

from .settings import (
    AgentSettings,
    LoggingSettings,
    OpenRouterSettings,
    OrchestratorSettings,
    SearchSettings,
    Settings,
    build_settings,
    load_settings,
)

__all__ = [
    "AgentSettings",
    "LoggingSettings",
    "OpenRouterSettings",
    "OrchestratorSettings",
    "SearchSettings",
    "Settings",
    "build_settings",
    "load_settings",
]
