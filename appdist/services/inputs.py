from __future__ import annotations

import glob
from dataclasses import dataclass
from pathlib import Path

from appdist.core.result import Err, Ok, Result
from appdist.services.errors import NoMatchError


@dataclass(frozen=True, slots=True)
class ResolvedFile:
    """One artifact of the run with its 1-based position."""

    path: Path
    index: int
    total: int

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def position(self) -> str:
        return f"{self.index}/{self.total}"


def resolve_files(pattern: str, *, cwd: Path) -> Result[tuple[ResolvedFile, ...], NoMatchError]:
    """Expand ``pattern`` into absolute paths of regular files.

    Relative patterns are matched under ``cwd``, whose own path is taken
    literally even if it contains glob characters; ``**`` matches nested
    directories. Matches are sorted so the upload order is stable across
    filesystems.
    """
    expanded = str(Path(pattern).expanduser())
    if Path(expanded).is_absolute():
        found = [Path(p) for p in glob.glob(expanded, recursive=True)]
    else:
        found = [cwd / p for p in glob.glob(expanded, root_dir=cwd, recursive=True)]

    matches = sorted({p.absolute() for p in found if p.is_file()})
    if not matches:
        return Err(NoMatchError(pattern=pattern))

    total = len(matches)
    return Ok(
        tuple(ResolvedFile(path=p, index=i, total=total) for i, p in enumerate(matches, start=1))
    )
