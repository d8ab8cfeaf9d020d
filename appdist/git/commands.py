"""Git invocations needed by a distribution run.

Only two commands are used: registering the CI checkout as a trusted
directory, and reading the last commit for the default release note.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from appdist.core.result import Err, Ok, Result
from appdist.platform.process import ProcessError
from appdist.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = ["GitError", "add_safe_directory", "last_commit_summary"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


def _git_error(error: ProcessError) -> GitError:
    return GitError(
        command=" ".join(error.command),
        message=error.detail,
        returncode=error.returncode,
    )


def add_safe_directory(directory: Path, *, cwd: Path) -> Result[None, GitError]:
    """Register ``directory`` in the global ``safe.directory`` list.

    CI runners often check out the repository as a different user than the
    one running the job, which makes git refuse to read it.
    """
    cmd = ["git", "config", "--global", "--add", "safe.directory", str(directory)]
    result = run_process(cmd, cwd=cwd, timeout=_GIT_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        return Err(_git_error(result.error))
    return Ok(None)


def last_commit_summary(*, cwd: Path) -> Result[str, GitError]:
    """Return ``git log -1 --pretty=short`` output, trimmed."""
    result = run_process(
        ["git", "log", "-1", "--pretty=short"],
        cwd=cwd,
        timeout=_GIT_TIMEOUT_SECONDS,
    )
    if isinstance(result, Err):
        return Err(_git_error(result.error))
    return Ok(result.value.strip())
