"""
Command router.

Dispatches "/name args..." lines typed on the host console to registered
handlers.
"""

import logging
from typing import Awaitable, Callable, Dict, List

logger = logging.getLogger(__name__)

CommandHandler = Callable[[List[str]], Awaitable[None]]


class CommandRouter:
    """Central command dispatcher"""

    def __init__(self, prefix: str = "/"):
        self.prefix = prefix
        self.commands: Dict[str, CommandHandler] = {}

    def register_command(self, name: str, handler: CommandHandler) -> None:
        """
        Register a command.

        Args:
            name: Command name (without prefix)
            handler: Async callable receiving the argument list
        """
        self.commands[name.lower()] = handler
        logger.info(f"Registered command: {self.prefix}{name}")

    def unregister_command(self, name: str) -> None:
        if self.commands.pop(name.lower(), None) is not None:
            logger.info(f"Unregistered command: {self.prefix}{name}")

    async def dispatch(self, line: str) -> bool:
        """
        Route one input line.

        Returns:
            True if a command handled it
        """
        line = line.strip()
        if not line.startswith(self.prefix):
            return False

        parts = line[len(self.prefix):].split()
        if not parts:
            return False
        command_name = parts[0].lower()

        handler = self.commands.get(command_name)
        if handler is None:
            logger.debug(f"No handler for command: {self.prefix}{command_name}")
            return False

        await handler(parts[1:])
        return True
