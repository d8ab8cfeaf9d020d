from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from appdist.core.config import RunConfiguration
from appdist.core.result import Err, Ok, Result
from appdist.git.commands import GitError
from appdist.services.inputs import ResolvedFile

DefaultNote = Callable[[], Result[str, GitError]]


@dataclass(frozen=True, slots=True)
class ReleaseNote:
    """Release note for one upload: literal text or a file, never both."""

    text: str | None = None
    file: Path | None = None

    def __post_init__(self) -> None:
        if self.text is not None and self.file is not None:
            raise ValueError("release note cannot be both text and file")

    @classmethod
    def from_text(cls, text: str) -> ReleaseNote:
        return cls(text=text)

    @classmethod
    def from_file(cls, path: Path) -> ReleaseNote:
        return cls(file=path)


def file_name_suffix(file: ResolvedFile) -> str:
    return f"\n\nFile: {file.name} ({file.position})"


def synthesize_release_note(
    config: RunConfiguration,
    file: ResolvedFile,
    *,
    default_note: DefaultNote,
) -> Result[ReleaseNote, GitError]:
    """Compute the release note sent with ``file``.

    A configured notes file is passed through untouched. Otherwise the
    literal note, or the last commit summary when none is configured, is
    used; for multi-file runs with ``include_file_name_in_release_notes`` it
    gets a trailing line naming the file and its position.
    """
    if config.release_notes_file:
        return Ok(ReleaseNote.from_file(Path(config.release_notes_file)))

    text = config.release_notes
    if not text:
        derived = default_note()
        if isinstance(derived, Err):
            return derived
        text = derived.value

    if file.total > 1 and config.include_file_name_in_release_notes:
        text += file_name_suffix(file)

    return Ok(ReleaseNote.from_text(text))
