"""Depth-first file listing."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

from .errors import SourceNotFoundError, wrap_os_error

PathPredicate = Callable[[Path], bool]


def list_files(root: Path | str, predicate: PathPredicate | None = None) -> list[Path]:
    """Collect every file under ``root``, depth-first in name order.

    Directories are never returned. ``predicate`` only filters which files
    are emitted; every subdirectory is walked regardless.
    """
    root = Path(root)
    if not root.is_dir():
        raise SourceNotFoundError(f"Directory not found: {root}", root)

    files: list[Path] = []

    def walk(dir_path: Path) -> None:
        try:
            with os.scandir(dir_path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as err:
            raise wrap_os_error(err, "list directory", dir_path) from err

        for entry in entries:
            entry_path = dir_path / entry.name
            if entry.is_dir():
                walk(entry_path)
            elif predicate is None or predicate(entry_path):
                files.append(entry_path)

    walk(root)
    return files
