"""Logging utilities for HeavyAgent."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from heavyAgent.config.settings import LoggingSettings

ROOT_LOGGER_NAME = "heavyAgent"
RESULT_PREVIEW_CHARS = 500


def setup_logging(settings: Optional[LoggingSettings] = None) -> logging.Logger:
    """Setup logging configuration for HeavyAgent.

    The console only shows warnings by default so that the live progress
    display of the heavy CLI is not interleaved with log lines. Everything
    else goes to a timestamped file under ``settings.log_dir``.

    Args:
        settings: Logging section of the application settings

    Returns:
        Configured ``heavyAgent`` logger
    """
    settings = settings or LoggingSettings()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)  # Children decide what reaches the handlers
    logger.propagate = False

    # Clear existing handlers
    logger.handlers = []

    if settings.log_to_file:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"heavy_agent_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(settings.level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)
        logger.info(f"Log file: {log_file}")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(settings.console_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    return logger


def _truncate(text: str, limit: int = RESULT_PREVIEW_CHARS) -> str:
    if len(text) > limit:
        return text[:limit] + "... (truncated)"
    return text


def log_agent_iteration(logger: logging.Logger, iteration: int, max_iterations: int) -> None:
    """Log the start of one agent loop iteration."""
    logger.info(f"Agent iteration {iteration}/{max_iterations}")


def log_tool_call(logger: logging.Logger, tool_name: str, args: Dict[str, Any]) -> None:
    """Log tool invocation.

    Args:
        logger: Logger instance
        tool_name: Name of the tool being called
        args: Tool arguments
    """
    logger.info(f"Tool call: {tool_name}")
    logger.debug(f"  Arguments: {_truncate(json.dumps(args, ensure_ascii=False, default=str))}")


def log_tool_result(logger: logging.Logger, tool_name: str, result: Any, success: bool = True) -> None:
    """Log tool execution result.

    Args:
        logger: Logger instance
        tool_name: Name of the tool
        result: Tool execution result
        success: Whether the tool executed successfully
    """
    status = "success" if success else "failed"
    log = logger.info if success else logger.warning
    log(f"Tool result: {tool_name} - {status}")
    logger.debug(f"  Result: {_truncate(str(result))}")


def log_progress_change(logger: logging.Logger, agent_id: int, status: str) -> None:
    """Log a progress tracker update for one agent."""
    logger.info(f"Agent {agent_id + 1} progress: {status}")


def log_error(logger: logging.Logger, error: BaseException, context: str = "") -> None:
    """Log error with context.

    Args:
        logger: Logger instance
        error: Exception instance
        context: Additional context about where the error occurred
    """
    logger.error(f"Error occurred: {type(error).__name__}: {error}")
    if context:
        logger.error(f"  Context: {context}")
    logger.debug("Full traceback:", exc_info=error)


__all__ = [
    "setup_logging",
    "log_agent_iteration",
    "log_tool_call",
    "log_tool_result",
    "log_progress_change",
    "log_error",
]
