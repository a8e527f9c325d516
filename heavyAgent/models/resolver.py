"""Chat model construction from settings.

The agent loop only needs an object with ``bind_tools(tools)`` and an async
``ainvoke(messages)`` returning an ``AIMessage``. Production code gets a
``ChatOpenAI`` client pointed at the configured OpenAI-compatible endpoint;
tests inject scripted models through the same ``ModelFactory`` seam.
"""

from __future__ import annotations

from typing import Callable, Dict, Protocol

from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from heavyAgent.config.settings import OpenRouterSettings, Settings
from heavyAgent.utils.errors import ConfigError


class ModelFactory(Protocol):
    """Callable that returns a LangChain-compatible chat model."""

    def __call__(self) -> BaseChatModel:
        ...


def _chat_kwargs(settings: OpenRouterSettings) -> Dict[str, object]:
    if not settings.has_api_key:
        raise ConfigError(
            f"Missing API key for model {settings.model}",
            user_message="Set openrouter.api_key in config.yaml or OPENROUTER_API_KEY in the environment.",
        )
    kwargs: Dict[str, object] = {"model": settings.model, "api_key": settings.api_key}
    if settings.base_url:
        kwargs["base_url"] = settings.base_url
    return kwargs


def build_chat_model(settings: Settings) -> ChatOpenAI:
    """Create a ChatOpenAI client for the configured model.

    Raises:
        ConfigError: If no API key is configured
    """
    return ChatOpenAI(**_chat_kwargs(settings.openrouter))


def build_model_factory(settings: Settings) -> Callable[[], ChatOpenAI]:
    """Return a factory producing a fresh client per agent.

    The key check runs eagerly so a misconfigured process fails at startup
    instead of inside every parallel agent.
    """
    kwargs = _chat_kwargs(settings.openrouter)

    def factory() -> ChatOpenAI:
        return ChatOpenAI(**kwargs)

    return factory


__all__ = ["ModelFactory", "build_chat_model", "build_model_factory"]
