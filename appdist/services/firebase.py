"""Firebase App Distribution backend.

Uploads go through the ``firebase appdistribution:distribute`` command. The
CLI reports the resulting links as human-readable lines such as::

    🔗 View this release in the Firebase console: https://console.firebase.google.com/...
    🔗 Share this release with testers who have access: https://appdistribution.firebase.google.com/...
    🔗 Download the release binary (link expires in 1 hour): https://firebaseappdistribution.googleapis.com/...

:func:`parse_distribution_output` is the single place that knows this
wording.
"""

from __future__ import annotations

import re
import shlex
import shutil
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Protocol

from appdist.core.config import RunConfiguration
from appdist.core.result import Err, Ok, Result
from appdist.output.console import ConsoleProtocol, Style
from appdist.platform.process import run as run_process
from appdist.services.auth import Credentials
from appdist.services.errors import DistributionFailedError
from appdist.services.inputs import ResolvedFile
from appdist.services.notes import ReleaseNote

__all__ = [
    "DEFAULT_FIREBASE_BIN",
    "OUTPUT_NAMES",
    "DistributionOutcome",
    "Distributor",
    "FirebaseCliDistributor",
    "build_distribute_command",
    "classify_line",
    "parse_distribution_output",
]

DEFAULT_FIREBASE_BIN = "firebase"
FIREBASE_INSTALL_HINT = "Install the Firebase CLI: npm install -g firebase-tools"

UriKind = Literal["console", "testing", "binary_download"]

OUTPUT_NAMES: Mapping[UriKind, str] = {
    "console": "firebase-console-uri",
    "testing": "testing-uri",
    "binary_download": "binary-download-uri",
}

_PHRASES: tuple[tuple[UriKind, re.Pattern[str]], ...] = (
    ("console", re.compile(r"\bview\b.*\bconsole\b", re.IGNORECASE)),
    ("testing", re.compile(r"\bshare\b.*\btesters\b", re.IGNORECASE)),
    ("binary_download", re.compile(r"\bdownload\b.*\bbinary\b", re.IGNORECASE)),
)

_URI_SEPARATOR = ": "


def _empty_uris() -> dict[UriKind, str]:
    return {}


@dataclass(frozen=True, slots=True)
class DistributionOutcome:
    """Links extracted from one upload, plus the raw CLI output."""

    uris: dict[UriKind, str] = field(default_factory=_empty_uris)
    raw_output: str = ""

    def outputs(self) -> dict[str, str]:
        """Step outputs keyed by their action output name."""
        return {OUTPUT_NAMES[kind]: uri for kind, uri in self.uris.items()}


def classify_line(line: str) -> tuple[UriKind, str] | None:
    """Classify one line of firebase output.

    The phrase is matched on the text before the last ``": "`` so words
    inside the URI itself never count.
    """
    sep = line.rfind(_URI_SEPARATOR)
    if sep == -1:
        return None

    label = line[:sep]
    uri = line[sep + len(_URI_SEPARATOR) :].strip()
    if not uri:
        return None

    for kind, phrase in _PHRASES:
        if phrase.search(label):
            return kind, uri
    return None


def parse_distribution_output(text: str) -> DistributionOutcome:
    uris: dict[UriKind, str] = {}
    for line in text.splitlines():
        classified = classify_line(line)
        if classified is None:
            continue
        kind, uri = classified
        uris[kind] = uri
    return DistributionOutcome(uris=uris, raw_output=text)


def build_distribute_command(
    *,
    firebase_bin: str,
    config: RunConfiguration,
    file: ResolvedFile,
    note: ReleaseNote,
) -> list[str]:
    """Compose the ``appdistribution:distribute`` invocation for one file."""
    cmd = [*shlex.split(firebase_bin), "appdistribution:distribute", str(file.path)]
    cmd += ["--app", config.app_id]

    if config.groups:
        cmd += ["--groups", config.groups]
    if config.testers:
        cmd += ["--testers", config.testers]

    if note.file is not None:
        cmd += ["--release-notes-file", str(note.file)]
    elif note.text:
        cmd += ["--release-notes", note.text]

    if config.debug:
        cmd.append("--debug")
    return cmd


def _display_command(cmd: list[str]) -> str:
    shown: list[str] = []
    hide_next = False
    for arg in cmd:
        if hide_next:
            shown.append("<release notes>")
            hide_next = False
            continue
        shown.append(arg)
        hide_next = arg == "--release-notes"
    return shlex.join(shown)


class Distributor(Protocol):
    def distribute(
        self,
        config: RunConfiguration,
        file: ResolvedFile,
        note: ReleaseNote,
    ) -> Result[DistributionOutcome, DistributionFailedError]: ...


class FirebaseCliDistributor:
    """Upload through the Firebase CLI.

    Credentials reach the CLI through its own environment only; the parent
    process environment is left untouched. No timeout is applied: large
    uploads and backend processing can legitimately take a long time.
    """

    def __init__(
        self,
        *,
        cwd: Path,
        credentials: Credentials,
        console: ConsoleProtocol,
        firebase_bin: str = DEFAULT_FIREBASE_BIN,
    ) -> None:
        self._cwd = cwd
        self._credentials = credentials
        self._console = console
        self._firebase_bin = firebase_bin

    def _executable(self) -> str:
        parts = shlex.split(self._firebase_bin)
        return parts[0] if parts else DEFAULT_FIREBASE_BIN

    def distribute(
        self,
        config: RunConfiguration,
        file: ResolvedFile,
        note: ReleaseNote,
    ) -> Result[DistributionOutcome, DistributionFailedError]:
        exe = self._executable()
        if shutil.which(exe) is None:
            return Err(
                DistributionFailedError(
                    path=file.path,
                    reason=f"{exe}: missing",
                    hint=FIREBASE_INSTALL_HINT,
                )
            )

        cmd = build_distribute_command(
            firebase_bin=self._firebase_bin,
            config=config,
            file=file,
            note=note,
        )
        self._console.debug(_display_command(cmd))

        result = run_process(cmd, cwd=self._cwd, env=self._credentials.env())
        if isinstance(result, Err):
            error = result.error
            for line in (error.stdout + error.stderr).splitlines():
                self._console.debug(line)
            return Err(DistributionFailedError(path=file.path, reason=error.detail))

        for line in result.value.splitlines():
            if line.strip():
                self._console.print(line, Style.DIM)
        return Ok(parse_distribution_output(result.value))
