from __future__ import annotations

"""Errors raised while reading or writing settings files and tree documents."""

import os

from pydantic import ValidationError

MAX_REPORTED_ISSUES = 3


def display_path(path: str) -> str:
    """Path relative to the working directory when one exists."""
    try:
        return os.path.relpath(path)
    except ValueError:  # pragma: no cover - different drive on Windows
        return path


def summarize_validation(error: ValidationError) -> str:
    """First few pydantic issues as ``loc: msg``, with a count of the rest."""
    issues = error.errors()
    parts = [
        f"{'.'.join(str(p) for p in issue.get('loc', ())) or '<root>'}: {issue.get('msg') or issue.get('type')}"
        for issue in issues[:MAX_REPORTED_ISSUES]
    ]
    if len(issues) > MAX_REPORTED_ISSUES:
        parts.append(f"... ({len(issues) - MAX_REPORTED_ISSUES} more)")
    return "; ".join(parts)


class FileContextError(RuntimeError):
    """A file operation failed; keeps the path, a short message and the cause."""

    def __init__(self, file_path: str, message: str, *, cause: Exception | None = None):
        self.file_path = str(file_path)
        self.message = message
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        text = f"{self.message} ({display_path(self.file_path)})"
        if isinstance(self.cause, ValidationError):
            return f"{text}: {summarize_validation(self.cause)}"
        if self.cause is not None:
            return f"{text}: {self.cause}"
        return text


class LoaderError(FileContextError):
    """A settings file could not be parsed or validated."""


class DocumentError(FileContextError):
    """A tree document could not be read, parsed or written."""


__all__ = ["DocumentError", "FileContextError", "LoaderError", "display_path", "summarize_validation"]
