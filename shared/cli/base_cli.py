"""Interactive read-eval loop shared by the single-agent and heavy front ends."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod

LOGGER = logging.getLogger(__name__)

HELP_TEXT = """
Available commands:
  /help                Show available commands
  /quit, /exit         Exit the program
  quit, exit, bye      Exit the program
"""


class BaseCLI(ABC):
    """Prompt loop: reads a line, ends on an exit word, else hands it to the subclass.

    Subclasses supply the banner (``print_welcome``) and what to do with a
    question (``handle_user_message``).
    """

    EXIT_WORDS = {"quit", "exit", "bye", "/quit", "/exit"}

    PROMPT = "\nUser: "

    def __init__(self):
        LOGGER.info(f"{self.__class__.__name__} initialized")

    async def run(self):
        self.print_welcome()

        while True:
            try:
                user_input = await self.get_input()

                if not user_input:
                    print("Please enter a question or command.")
                elif user_input.lower() in self.EXIT_WORDS:
                    print("Goodbye!")
                    break
                elif user_input.lower() == "/help":
                    print(HELP_TEXT)
                elif user_input.startswith("/"):
                    print(f"Unknown command: {user_input.split()[0]}")
                    print("   Type /help to list available commands")
                else:
                    await self.handle_user_message(user_input)

            except (KeyboardInterrupt, EOFError):
                print("\nGoodbye!")
                LOGGER.info("Session interrupted by user")
                break
            except Exception as e:
                LOGGER.error(f"Unexpected error in main loop: {e}", exc_info=True)
                print(f"Error: {e}")

        LOGGER.info("CLI shutting down")

    async def get_input(self) -> str:
        """Read one line from stdin without blocking the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: input(self.PROMPT).strip())

    @abstractmethod
    def print_welcome(self):
        """Print the banner shown before the first prompt."""

    @abstractmethod
    async def handle_user_message(self, message: str):
        """Answer one line of user input."""


__all__ = ["BaseCLI"]
