"""Step outputs and workflow commands for GitHub Actions.

Outputs are appended to the file named by ``GITHUB_OUTPUT`` using the
multi-line ``name<<DELIMITER`` form, which is safe for any value. Outside
Actions the outputs are echoed to the console instead.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from appdist.output.console import ConsoleProtocol

__all__ = [
    "OutputSink",
    "GithubOutputFile",
    "ConsoleOutputs",
    "MemoryOutputs",
    "error_command",
    "is_github_actions",
    "output_sink_for",
]


class OutputSink(Protocol):
    def set_output(self, name: str, value: str) -> None: ...


def is_github_actions(env: Mapping[str, str]) -> bool:
    return env.get("GITHUB_ACTIONS") == "true"


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def error_command(message: str) -> str:
    """Render an ``::error::`` workflow command for ``message``."""
    return f"::error::{_escape_data(message)}"


class GithubOutputFile:
    """Append outputs to the Actions ``GITHUB_OUTPUT`` file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def set_output(self, name: str, value: str) -> None:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        if delimiter in name or delimiter in value:
            raise ValueError(f"Unexpected input: output value contains the delimiter {delimiter}")
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


class ConsoleOutputs:
    """Print outputs when no ``GITHUB_OUTPUT`` file is available."""

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    def set_output(self, name: str, value: str) -> None:
        self._console.print(f"{name}={value}")


def _empty_values() -> dict[str, str]:
    return {}


def _empty_history() -> list[tuple[str, str]]:
    return []


@dataclass
class MemoryOutputs:
    """Captures outputs for testing; later values replace earlier ones."""

    values: dict[str, str] = field(default_factory=_empty_values)
    history: list[tuple[str, str]] = field(default_factory=_empty_history)

    def set_output(self, name: str, value: str) -> None:
        self.values[name] = value
        self.history.append((name, value))


def output_sink_for(env: Mapping[str, str], console: ConsoleProtocol) -> OutputSink:
    path = env.get("GITHUB_OUTPUT")
    if path:
        return GithubOutputFile(Path(path))
    return ConsoleOutputs(console)
