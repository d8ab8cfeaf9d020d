"""Git helpers."""

from .commands import GitError, add_safe_directory, last_commit_summary

__all__ = ["GitError", "add_safe_directory", "last_commit_summary"]
