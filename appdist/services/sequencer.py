"""Distribution run sequencing.

A run moves through fixed steps::

    git_safe_directory -> authenticate -> resolve_files -> distribute (x N) -> done

Each step runs to completion before the next starts. The first error ends
the run; files after a failing one are never attempted.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Literal

from appdist.core.config import RunConfiguration
from appdist.core.result import Err, Ok, Result
from appdist.git.commands import add_safe_directory, last_commit_summary
from appdist.output.actions import OutputSink
from appdist.output.console import ConsoleProtocol
from appdist.services.auth import Credentials, provision_credentials
from appdist.services.errors import GitSetupFailed, ReleaseNoteFailed, RunError
from appdist.services.firebase import DistributionOutcome, Distributor
from appdist.services.fsm import StepOutcome, advance, finish, run_state_machine
from appdist.services.inputs import ResolvedFile, resolve_files
from appdist.services.notes import DefaultNote, synthesize_release_note

WORKSPACE_ENV_VAR = "GITHUB_WORKSPACE"

Step = Literal["git_safe_directory", "authenticate", "resolve_files", "distribute"]

DistributorFactory = Callable[[Credentials], Distributor]

_URI_LABELS = {
    "console": "Console URI",
    "testing": "Testing URI",
    "binary_download": "Binary Download URI",
}


@dataclass(frozen=True, slots=True)
class FileOutcome:
    file: ResolvedFile
    outcome: DistributionOutcome


@dataclass(frozen=True, slots=True)
class RunSession:
    step: Step
    credentials: Credentials | None = None
    files: tuple[ResolvedFile, ...] = ()
    next_index: int = 0


@dataclass(frozen=True, slots=True)
class RunResult:
    """Outcome of a whole run.

    ``completed`` lists the files uploaded before the run finished or
    failed. There is no partial success: any error makes the run fail.
    """

    completed: tuple[FileOutcome, ...] = ()
    error: RunError | None = None


class DistributionRun:
    """Upload every file matched by the configured pattern, in order."""

    def __init__(
        self,
        *,
        config: RunConfiguration,
        cwd: Path,
        env: Mapping[str, str],
        console: ConsoleProtocol,
        outputs: OutputSink,
        distributor_factory: DistributorFactory,
        default_note: DefaultNote | None = None,
    ) -> None:
        self._config = config
        self._cwd = cwd
        self._env = env
        self._console = console
        self._outputs = outputs
        self._distributor_factory = distributor_factory
        self._distributor: Distributor | None = None
        self._default_note = default_note or (lambda: last_commit_summary(cwd=cwd))
        self._completed: list[FileOutcome] = []

    def run(self) -> RunResult:
        self._completed = []
        result = run_state_machine(
            initial_state=RunSession(step="git_safe_directory"),
            get_step=lambda s: s.step,
            handlers={
                "git_safe_directory": self._setup_git_safe_directory,
                "authenticate": self._authenticate,
                "resolve_files": self._resolve_files,
                "distribute": self._distribute_next,
            },
        )
        if isinstance(result, Err):
            return RunResult(completed=tuple(self._completed), error=result.error)

        self._console.success("Distribution completed successfully")
        return RunResult(completed=tuple(self._completed))

    def _setup_git_safe_directory(
        self, session: RunSession
    ) -> Result[StepOutcome[RunSession], RunError]:
        workspace = self._env.get(WORKSPACE_ENV_VAR)
        if workspace:
            added = add_safe_directory(Path(workspace), cwd=self._cwd)
            if isinstance(added, Err):
                return Err(GitSetupFailed(workspace=Path(workspace), reason=added.error.message))
            self._console.debug(f"git safe.directory: {workspace}")
        return Ok(advance(replace(session, step="authenticate")))

    def _authenticate(self, session: RunSession) -> Result[StepOutcome[RunSession], RunError]:
        provisioned = provision_credentials(self._config, cwd=self._cwd)
        if isinstance(provisioned, Err):
            return provisioned

        credentials = provisioned.value
        if credentials.source == "file":
            self._console.info("Using service account from file")
        else:
            self._console.info("Using service account from content")

        self._distributor = self._distributor_factory(credentials)
        return Ok(advance(replace(session, step="resolve_files", credentials=credentials)))

    def _resolve_files(self, session: RunSession) -> Result[StepOutcome[RunSession], RunError]:
        resolved = resolve_files(self._config.file, cwd=self._cwd)
        if isinstance(resolved, Err):
            return resolved

        files = resolved.value
        self._console.info(f"Found {len(files)} file(s) matching pattern: {self._config.file}")
        return Ok(advance(replace(session, step="distribute", files=files)))

    def _distribute_next(self, session: RunSession) -> Result[StepOutcome[RunSession], RunError]:
        if session.next_index >= len(session.files):
            return Ok(finish(session))

        assert self._distributor is not None
        file = session.files[session.next_index]
        self._console.info(f"Distributing file ({file.position}): {file.path}")

        note = synthesize_release_note(self._config, file, default_note=self._default_note)
        if isinstance(note, Err):
            return Err(ReleaseNoteFailed(path=file.path, reason=note.error.message))

        distributed = self._distributor.distribute(self._config, file, note.value)
        if isinstance(distributed, Err):
            return distributed

        outcome = distributed.value
        self._publish(outcome)
        self._completed.append(FileOutcome(file=file, outcome=outcome))
        return Ok(advance(replace(session, next_index=session.next_index + 1)))

    def _publish(self, outcome: DistributionOutcome) -> None:
        for kind, uri in outcome.uris.items():
            self._console.info(f"{_URI_LABELS[kind]}: {uri}")
        for name, value in outcome.outputs().items():
            self._outputs.set_output(name, value)
