"""Model client construction."""

from .resolver import ModelFactory, build_chat_model, build_model_factory

__all__ = ["ModelFactory", "build_chat_model", "build_model_factory"]
