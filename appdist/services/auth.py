from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from appdist.core.config import RunConfiguration
from appdist.core.result import Err, Ok, Result
from appdist.platform.files import write_private_text
from appdist.services.errors import AuthError, CredentialsWriteFailed, MissingAuthenticationError

CREDENTIALS_ENV_VAR = "GOOGLE_APPLICATION_CREDENTIALS"
STAGED_CREDENTIALS_FILENAME = "service_credentials_content.json"


@dataclass(frozen=True, slots=True)
class Credentials:
    """Where the service account key for this run lives."""

    path: Path
    source: Literal["file", "content"]

    def env(self) -> dict[str, str]:
        """Environment entries a child process needs to authenticate."""
        return {CREDENTIALS_ENV_VAR: str(self.path)}


def provision_credentials(
    config: RunConfiguration, *, cwd: Path
) -> Result[Credentials, AuthError]:
    """Pick the credential source for the run.

    A credentials file is referenced as-is. Inline content is staged to
    ``service_credentials_content.json`` under ``cwd`` and left there for the
    rest of the run. When both are configured the file wins.
    """
    if config.service_credentials_file:
        return Ok(Credentials(path=Path(config.service_credentials_file), source="file"))

    if config.service_credentials_file_content:
        path = cwd / STAGED_CREDENTIALS_FILENAME
        try:
            write_private_text(path, config.service_credentials_file_content)
        except OSError as e:
            return Err(CredentialsWriteFailed(path=path, reason=str(e)))
        return Ok(Credentials(path=path, source="content"))

    return Err(MissingAuthenticationError())
