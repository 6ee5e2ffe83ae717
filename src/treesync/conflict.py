"""Type-conflict resolution: clearing a destination of the wrong kind."""

from __future__ import annotations

import os
import shutil
from typing import TYPE_CHECKING

from .classify import run_blocking
from .errors import wrap_os_error
from .logger import logger
from .policy import should_overwrite

if TYPE_CHECKING:
    from pathlib import Path

    from .types import OverwritePolicy, PathStatus


def remove_tree(path: Path) -> None:
    """Recursively delete a directory and everything under it.

    Raises on the first failure; the directory may then be partially removed,
    but nothing is ever written in its place.
    """
    try:
        shutil.rmtree(path)
    except OSError as err:
        raise wrap_os_error(err, "remove directory", path) from err


def remove_node(status: PathStatus) -> None:
    """Delete whatever ``status`` describes (file or directory tree)."""
    if status.is_dir:
        remove_tree(status.path)
        return
    try:
        os.unlink(status.path)
    except OSError as err:
        raise wrap_os_error(err, "remove file", status.path) from err


def _check_conflict(source: PathStatus, destination: PathStatus) -> None:
    if not source.exists or not destination.exists or source.kind == destination.kind:
        raise ValueError(f"Not a type conflict: {source.kind} -> {destination.kind} at {destination.path}")


def resolve_type_conflict(source: PathStatus, destination: PathStatus, policy: OverwritePolicy) -> bool:
    """Clear ``destination`` so ``source`` can take its place.

    Returns False, leaving the destination untouched, when the policy
    forbids the replacement.
    """
    _check_conflict(source, destination)
    if not should_overwrite(policy, source, destination):
        logger.debug("Type conflict kept", destination=str(destination.path), policy=policy)
        return False

    remove_node(destination)
    logger.debug("Type conflict cleared", destination=str(destination.path), removed=destination.kind)
    return True


async def remove_tree_async(path: Path) -> None:
    await run_blocking(remove_tree, path)


async def resolve_type_conflict_async(source: PathStatus, destination: PathStatus, policy: OverwritePolicy) -> bool:
    _check_conflict(source, destination)
    if not should_overwrite(policy, source, destination):
        logger.debug("Type conflict kept", destination=str(destination.path), policy=policy)
        return False

    await run_blocking(remove_node, destination)
    logger.debug("Type conflict cleared", destination=str(destination.path), removed=destination.kind)
    return True
