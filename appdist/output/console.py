"""Console output abstraction.

Services report progress through :class:`ConsoleProtocol` so they never
depend on Rich directly. Production code uses :class:`RichConsole`; tests
use :class:`MockConsole` and inspect what would have been printed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DEBUG = auto()
    DIM = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Interface for styled console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def debug(self, message: str) -> None:
        """Print a diagnostic line; dropped unless debug output is enabled."""
        ...

    def header(self, message: str) -> None: ...


class RichConsole:
    """Console implementation using the Rich library.

    Markup in messages is not interpreted: release notes and firebase output
    routinely contain square brackets.
    """

    def __init__(self, *, debug: bool = False) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console
        from rich.text import Text

        self._console = Console(highlight=False)
        self._text = Text
        self._debug = debug
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DEBUG: "dim",
            Style.DIM: "dim",
            Style.HEADER: "blue bold",
        }

    def _emit(self, prefix: str, prefix_style: str, message: str) -> None:
        line = self._text()
        if prefix:
            line.append(prefix, style=prefix_style)
            line.append(" ")
        line.append(message)
        self._console.print(line)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(self._text(message, style=self._style_map.get(style, "")))

    def success(self, message: str) -> None:
        self._emit("OK", "green", message)

    def error(self, message: str) -> None:
        self._emit("error:", "red bold", message)

    def warning(self, message: str) -> None:
        self._emit("warning:", "yellow", message)

    def info(self, message: str) -> None:
        self._emit("info:", "cyan", message)

    def debug(self, message: str) -> None:
        if self._debug:
            self._emit("debug:", "dim", message)

    def header(self, message: str) -> None:
        self._console.print()
        self._console.print(self._text(message, style="blue bold"))


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing.

    Debug lines are always captured so tests can assert on them.
    """

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def debug(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"debug: {message}", Style.DEBUG))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    # Test helpers

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_success(self) -> bool:
        return any(o.style == Style.SUCCESS for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]
