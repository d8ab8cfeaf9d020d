from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from appdist.core.config import ConfigError


@dataclass(frozen=True, slots=True)
class MissingAuthenticationError:
    hint: str = "Set serviceCredentialsFile or serviceCredentialsFileContent"

    @property
    def message(self) -> str:
        return (
            "No authentication method provided. Please provide serviceCredentialsFile "
            "or serviceCredentialsFileContent."
        )


@dataclass(frozen=True, slots=True)
class CredentialsWriteFailed:
    path: Path
    reason: str

    @property
    def message(self) -> str:
        return f"Failed to write service credentials to {self.path}: {self.reason}"


@dataclass(frozen=True, slots=True)
class GitSetupFailed:
    workspace: Path
    reason: str

    @property
    def message(self) -> str:
        return f"Failed to mark {self.workspace} as a git safe.directory: {self.reason}"


@dataclass(frozen=True, slots=True)
class NoMatchError:
    pattern: str

    @property
    def message(self) -> str:
        return f"No files found matching pattern: {self.pattern}"


@dataclass(frozen=True, slots=True)
class ReleaseNoteFailed:
    path: Path
    reason: str

    @property
    def message(self) -> str:
        return f"Failed to compute release notes for {self.path}: {self.reason}"


@dataclass(frozen=True, slots=True)
class DistributionFailedError:
    path: Path
    reason: str
    hint: str | None = None

    @property
    def message(self) -> str:
        return f"Failed to distribute {self.path}: {self.reason}"


@dataclass(frozen=True, slots=True)
class UnexpectedError:
    reason: str = ""

    @property
    def message(self) -> str:
        return self.reason or "An unknown error occurred"


AuthError = MissingAuthenticationError | CredentialsWriteFailed

RunError = (
    ConfigError
    | MissingAuthenticationError
    | CredentialsWriteFailed
    | GitSetupFailed
    | NoMatchError
    | ReleaseNoteFailed
    | DistributionFailedError
    | UnexpectedError
)
