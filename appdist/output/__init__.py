"""Output abstraction layer."""

from .actions import GithubOutputFile, MemoryOutputs, OutputSink, output_sink_for
from .console import (
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
)

__all__ = [
    "ConsoleProtocol",
    "GithubOutputFile",
    "MemoryOutputs",
    "MockConsole",
    "OutputSink",
    "RichConsole",
    "Style",
    "output_sink_for",
]
