#!/usr/bin/env python3
"""HeavyAgent - Multi-agent ("heavy") entry point.

Usage:
    python heavy_main.py
    python heavy_main.py --message "Compare the energy policies of France and Germany"

Each request is split into several questions, answered by parallel agents
and synthesized into one final answer. A live display shows one progress
bar per agent while they run.
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to sys.path for imports
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from heavyAgent.cli import HeavyCLI
from heavyAgent.config.settings import DEFAULT_CONFIG_PATH, load_settings
from heavyAgent.utils.errors import HeavyAgentError
from heavyAgent.utils.logging_utils import setup_logging


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Multi-agent orchestrator with live progress")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to the YAML config file")
    parser.add_argument("--message", help="Orchestrate one request and exit")
    parser.add_argument("--verbose", action="store_true", help="Show debug logs on the console")
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    """Main entry point for the heavy CLI."""
    args = parse_args(argv)

    try:
        settings = load_settings(args.config)
        logging_settings = settings.logging
        if args.verbose:
            logging_settings = logging_settings.model_copy(update={"console_level": "DEBUG"})
        setup_logging(logging_settings)

        cli = HeavyCLI(settings)
    except HeavyAgentError as e:
        print(f"Error initializing orchestrator: {e}")
        print("Make sure you have:")
        print("1. Set your OpenRouter API key in config.yaml or OPENROUTER_API_KEY")
        print("2. Installed all dependencies with: pip install -e .")
        return 1

    if args.message:
        result = await cli.run_task(args.message)
        return 0 if result is not None else 1

    await cli.run()
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\n\nGoodbye!")
        sys.exit(0)
