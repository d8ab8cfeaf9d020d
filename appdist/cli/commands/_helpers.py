"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from appdist.output.actions import error_command, is_github_actions
from appdist.output.errors import print_run_error, run_error_exit_code
from appdist.services.errors import RunError

if TYPE_CHECKING:
    from appdist.cli.context import CLIContext


def fail_run(error: RunError, ctx: CLIContext) -> NoReturn:
    """Report ``error`` and exit with its mapped code.

    Under GitHub Actions an ``::error::`` command is also emitted so the
    failure reason shows up as a workflow annotation.
    """
    print_run_error(error, ctx.console)
    if is_github_actions(ctx.env):
        typer.echo(error_command(error.message))
    raise typer.Exit(code=run_error_exit_code(error))
