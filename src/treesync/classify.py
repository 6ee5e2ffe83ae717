"""Path classification: kind and modification time of one location."""

from __future__ import annotations

import asyncio
import functools
import os
import stat
from pathlib import Path
from typing import Any, Callable, TypeVar

from .errors import AccessError
from .types import PathStatus

T = TypeVar("T")


async def run_blocking(fn: Callable[..., T], *args: Any) -> T:
    """Run a blocking filesystem call on the default executor."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(fn, *args))


def classify(path: Path | str) -> PathStatus:
    """Report whether ``path`` is a file, a directory or absent.

    Absence is a normal status. Any other stat failure (permissions, I/O,
    symlink loops) raises AccessError. Symlinks are followed.
    """
    path = Path(path)
    try:
        st = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return PathStatus(path=path, kind="absent")
    except OSError as err:
        message = f"stat failed for {path}: {err.strerror or err}"
        raise AccessError(message, path, {"action": "stat", "errno": err.errno}) from err

    kind = "directory" if stat.S_ISDIR(st.st_mode) else "file"
    return PathStatus(path=path, kind=kind, mtime_ns=st.st_mtime_ns)


async def classify_async(path: Path | str) -> PathStatus:
    return await run_blocking(classify, path)
