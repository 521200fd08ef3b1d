"""Where user-facing failure messages go."""

import sys
from typing import Protocol
from typing import TextIO

from ilnav.logger import ILNAV_LOGGER

log = ILNAV_LOGGER.getChild(__name__)


class MessageSink(Protocol):
    """Shows a single informational message to the user (a message box in an IDE)."""

    def show_message(self, message: str) -> None:
        """Show message; returns once the user has seen it."""


class ConsoleMessageSink(MessageSink):
    """Print messages for command line use."""

    def __init__(self, stream: TextIO | None = None, title: str = "ilnav") -> None:
        self.stream = stream
        self.title = title

    def show_message(self, message: str) -> None:
        log.debug(f"Showing message: {message}")
        print(f"{self.title}: {message}", file=self.stream or sys.stderr)
