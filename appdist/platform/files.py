"""Filesystem helpers."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

__all__ = ["SECRET_FILE_MODE", "write_private_text"]

SECRET_FILE_MODE = 0o600


def write_private_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write a secret to ``path`` with owner-only permissions.

    The parent directory must already exist. The content lands in a sibling
    temp file that is chmod'ed to :data:`SECRET_FILE_MODE` before anything is
    written, then moved over ``path``; readers never see a partial key.

    Raises:
        OSError: If the directory is missing or not writable.
    """
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )
    tmp_path = Path(tmp_name)

    try:
        os.chmod(tmp_path, SECRET_FILE_MODE)
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)
