"""
Reporters: where a compile job sends its log messages and diagnostic lines.
"""

from typing import Iterable, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape

INDENT = "    "


def indent(level: int) -> str:
    return INDENT * level


class Reporter:
    """Sink for one compile job's messages and diagnostic report lines."""

    def debug(self, message: str) -> None:
        self.log("debug", message)

    def info(self, message: str) -> None:
        self.log("info", message)

    def warn(self, message: str) -> None:
        self.log("warn", message)

    def error(self, message: str) -> None:
        self.log("error", message)

    def log(self, level: str, message: str) -> None:
        raise NotImplementedError

    def report(self, lines: Iterable[str]) -> None:
        """Emit diagnostic lines in order, one output line each."""
        raise NotImplementedError


class ConsoleReporter(Reporter):
    """Reporter backed by rich consoles.

    Log messages go to ``log_console`` (stderr by default) and report lines
    to ``console`` (stdout by default). Debug output needs ``verbose``.
    """

    STYLES = {
        "debug": "dim",
        "info": "blue",
        "warn": "yellow",
        "error": "red",
    }

    LABELS = {
        "warn": "Warning: ",
        "error": "Error: ",
    }

    def __init__(
        self,
        console: Optional[Console] = None,
        log_console: Optional[Console] = None,
        verbose: bool = False,
    ):
        self.console = console or Console(highlight=False)
        self.log_console = log_console or Console(stderr=True, highlight=False)
        self.verbose = verbose

    def log(self, level: str, message: str) -> None:
        if level == "debug" and not self.verbose:
            return

        style = self.STYLES.get(level, "")
        text = f"{self.LABELS.get(level, '')}{escape(message)}"
        markup = f"[{style}]{text}[/{style}]" if style else text
        self.log_console.print(markup, soft_wrap=True, emoji=False)

    def report(self, lines: Iterable[str]) -> None:
        for line in lines:
            # Formatted diagnostics carry their own trailing newline
            self.console.print(
                line.rstrip("\n"), markup=False, highlight=False, soft_wrap=True, emoji=False
            )
            self.console.file.flush()


class MemoryReporter(Reporter):
    """Reporter that keeps everything in memory, in emission order."""

    def __init__(self) -> None:
        self.messages: List[Tuple[str, str]] = []
        self.lines: List[str] = []

    def log(self, level: str, message: str) -> None:
        self.messages.append((level, message))

    def report(self, lines: Iterable[str]) -> None:
        self.lines.extend(line.rstrip("\n") for line in lines)

    def messages_at(self, level: str) -> List[str]:
        return [message for msg_level, message in self.messages if msg_level == level]

    def clear(self) -> None:
        self.messages.clear()
        self.lines.clear()
