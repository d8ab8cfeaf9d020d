from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from appdist.output.actions import OutputSink, output_sink_for
from appdist.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    cwd: Path
    env: Mapping[str, str]
    console: ConsoleProtocol
    outputs: OutputSink


def build_context(*, debug: bool = False) -> CLIContext:
    env = dict(os.environ)
    console = RichConsole(debug=debug)
    return CLIContext(
        cwd=Path.cwd().resolve(),
        env=env,
        console=console,
        outputs=output_sink_for(env, console),
    )
