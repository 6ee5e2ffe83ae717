"""Errors raised by the copy engine."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class CopyError(Exception):
    """Base error for a failed copy; ``path`` names the location that failed."""

    def __init__(self, message: str, path: Path | str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None
        self.details = details or {}


class SourceNotFoundError(CopyError):
    """The root source path does not exist."""


class AccessError(CopyError):
    """The filesystem denied inspecting or changing a path."""


class SyncIOError(CopyError):
    """A read, write or delete failed partway through a copy."""


def wrap_os_error(err: OSError, action: str, path: Path | str) -> CopyError:
    """Translate an OSError from ``action`` on ``path`` into a CopyError."""
    message = f"{action} failed for {path}: {err.strerror or err}"
    details: dict[str, Any] = {"action": action, "errno": err.errno}
    if isinstance(err, PermissionError):
        return AccessError(message, path, details)
    return SyncIOError(message, path, details)
