"""
🖥️ Surfaces - where messages end up

- status: persistent surface receiving online/offline notifications
- active: whatever the user is looking at (command output, warnings)
"""
import logging
import sys
from dataclasses import dataclass
from typing import List, TextIO, Tuple

LOGGER = logging.getLogger(__name__)


class Surface:
    """A text surface messages can be printed to"""

    name = "surface"

    def print(self, message: str, level: int = logging.INFO):
        raise NotImplementedError


class ConsoleSurface(Surface):
    """Writes to a stream (stdout by default) and mirrors to the log"""

    def __init__(self, name: str, stream: TextIO = None):
        self.name = name
        self.stream = stream or sys.stdout
        self._logger = logging.getLogger(f"surface.{name}")

    def print(self, message: str, level: int = logging.INFO):
        prefix = "!! " if level >= logging.ERROR else ""
        self.stream.write(f"[{self.name}] {prefix}{message}\n")
        self.stream.flush()
        self._logger.log(level, message)


class MemorySurface(Surface):
    """Keeps printed lines in memory"""

    def __init__(self, name: str = "memory"):
        self.name = name
        self.lines: List[Tuple[int, str]] = []

    def print(self, message: str, level: int = logging.INFO):
        self.lines.append((level, message))

    @property
    def messages(self) -> List[str]:
        return [message for _, message in self.lines]

    @property
    def errors(self) -> List[str]:
        return [message for level, message in self.lines if level >= logging.ERROR]


@dataclass
class Surfaces:
    """The two surfaces the notifier writes to"""
    status: Surface
    active: Surface

    def notify(self, message: str):
        self.status.print(message)

    def msg(self, message: str):
        self.active.print(message)

    def warn(self, message: str):
        self.active.print(message, logging.ERROR)

    @classmethod
    def console(cls, stream: TextIO = None) -> "Surfaces":
        return cls(status=ConsoleSurface("status", stream), active=ConsoleSurface("active", stream))
