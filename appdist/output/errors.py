"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from appdist.core.config import ConfigError
from appdist.core.errors import ErrorCode
from appdist.output.console import Style
from appdist.services.errors import (
    CredentialsWriteFailed,
    DistributionFailedError,
    GitSetupFailed,
    MissingAuthenticationError,
    NoMatchError,
    ReleaseNoteFailed,
    RunError,
    UnexpectedError,
)

if TYPE_CHECKING:
    from appdist.output.console import ConsoleProtocol

__all__ = ["print_run_error", "run_error_exit_code"]


def print_run_error(error: RunError, console: ConsoleProtocol) -> None:
    """Print a run error to console with its hint, if any."""
    console.error(error.message)
    match error:
        case ConfigError(path=path, hint=hint):
            if path is not None:
                console.print(f"config: {path}", Style.DIM)
            if hint:
                console.print(f"hint: {hint}", Style.DIM)
        case MissingAuthenticationError(hint=hint) | DistributionFailedError(hint=hint):
            if hint:
                console.print(f"hint: {hint}", Style.DIM)
        case _:
            pass


def run_error_exit_code(error: RunError) -> int:
    """Get exit code for a run error."""
    match error:
        case ConfigError() | MissingAuthenticationError() | NoMatchError():
            return int(ErrorCode.USER_ERROR)
        case GitSetupFailed() | ReleaseNoteFailed():
            return int(ErrorCode.ENV_ERROR)
        case DistributionFailedError():
            return int(ErrorCode.DISTRIBUTION_ERROR)
        case CredentialsWriteFailed():
            return int(ErrorCode.IO_ERROR)
        case UnexpectedError():
            return int(ErrorCode.INTERNAL_ERROR)
    return int(ErrorCode.INTERNAL_ERROR)
