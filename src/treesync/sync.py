"""Recursive copy of a file or directory tree under an overwrite policy.

For every source entry the destination is classified and one of four
things happens:

- destination absent: copy the file / create the directory
- same kind: files are replaced only if the policy allows it; directories
  are always merged, with each child evaluated on its own
- different kind: the conflicting destination node is removed first when
  the policy allows it, otherwise the entry is left alone
- source directory: recurse into its entries, one at a time, in name order

Policy refusals are recorded as skips, not errors. The first filesystem
failure aborts the walk and propagates.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .classify import classify, classify_async, run_blocking
from .conflict import resolve_type_conflict, resolve_type_conflict_async
from .errors import CopyError, SourceNotFoundError, SyncIOError, wrap_os_error
from .logger import logger
from .policy import should_overwrite
from .types import OverwritePolicy, PathStatus, SyncOptions, SyncResult

Options = SyncOptions | Mapping[str, Any] | None


def _coerce_options(options: Options) -> SyncOptions:
    if options is None:
        return SyncOptions()
    if isinstance(options, SyncOptions):
        return options
    if isinstance(options, Mapping):
        return SyncOptions.model_validate(dict(options))
    raise TypeError(f"options must be SyncOptions or a mapping, got {type(options).__name__}")


def _check_root(source: PathStatus, destination: Path) -> None:
    if not source.exists:
        raise SourceNotFoundError(f"Source not found: {source.path}", source.path)
    if source.is_dir:
        src_root = source.path.resolve()
        dst_root = destination.resolve()
        if dst_root == src_root or src_root in dst_root.parents:
            raise CopyError(f"Cannot copy {source.path} into itself ({destination})", destination)


def _copy_file(source: Path, destination: Path) -> None:
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)
    except OSError as err:
        raise wrap_os_error(err, "copy file", destination) from err


def _make_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise wrap_os_error(err, "create directory", path) from err


def _list_dir(path: Path) -> list[str]:
    try:
        return sorted(os.listdir(path))
    except OSError as err:
        raise wrap_os_error(err, "list directory", path) from err


def _vanished(path: Path) -> SyncIOError:
    """Error for a listed source entry that classifies as absent."""
    if os.path.islink(path):
        return SyncIOError(f"Broken symbolic link in source: {path}", path, {"action": "stat"})
    return SyncIOError(f"Source vanished during copy: {path}", path, {"action": "stat"})


def _settle(source: PathStatus, destination: PathStatus, policy: OverwritePolicy, result: SyncResult) -> bool | None:
    """Decide what to do with an existing same-kind destination.

    Returns False to skip the entry, True to proceed, None when the caller
    must resolve a type conflict first.
    """
    if not destination.exists:
        return True
    if source.kind != destination.kind:
        return None
    if source.is_file and not should_overwrite(policy, source, destination):
        logger.debug("Skipped existing file", destination=str(destination.path), policy=policy)
        result.skipped.append(destination.path)
        return False
    return True


def _record_conflict(cleared: bool, destination: PathStatus, result: SyncResult) -> PathStatus:
    if cleared:
        result.replaced.append(destination.path)
        return PathStatus(path=destination.path, kind="absent")
    result.skipped.append(destination.path)
    return destination


def _sync_entry(source: PathStatus, target: Path, policy: OverwritePolicy, result: SyncResult) -> None:
    destination = classify(target)
    decision = _settle(source, destination, policy, result)
    if decision is None:
        cleared = resolve_type_conflict(source, destination, policy)
        destination = _record_conflict(cleared, destination, result)
        decision = cleared
    if not decision:
        return

    if source.is_file:
        _copy_file(source.path, target)
        result.copied.append(target)
        logger.debug("Copied file", source=str(source.path), destination=str(target))
        return

    if not destination.exists:
        _make_dir(target)
        result.created.append(target)
        logger.debug("Created directory", destination=str(target))

    for name in _list_dir(source.path):
        child = classify(source.path / name)
        if not child.exists:
            raise _vanished(child.path)
        _sync_entry(child, target / name, policy, result)


async def _sync_entry_async(source: PathStatus, target: Path, policy: OverwritePolicy, result: SyncResult) -> None:
    destination = await classify_async(target)
    decision = _settle(source, destination, policy, result)
    if decision is None:
        cleared = await resolve_type_conflict_async(source, destination, policy)
        destination = _record_conflict(cleared, destination, result)
        decision = cleared
    if not decision:
        return

    if source.is_file:
        await run_blocking(_copy_file, source.path, target)
        result.copied.append(target)
        logger.debug("Copied file", source=str(source.path), destination=str(target))
        return

    if not destination.exists:
        await run_blocking(_make_dir, target)
        result.created.append(target)
        logger.debug("Created directory", destination=str(target))

    for name in await run_blocking(_list_dir, source.path):
        child = await classify_async(source.path / name)
        if not child.exists:
            raise _vanished(child.path)
        await _sync_entry_async(child, target / name, policy, result)


def _log_finished(source: Path, destination: Path, result: SyncResult) -> None:
    logger.info(
        "Copy finished",
        source=str(source),
        destination=str(destination),
        copied=len(result.copied),
        created=len(result.created),
        replaced=len(result.replaced),
        skipped=len(result.skipped),
    )


def copy_sync(source: Path | str, destination: Path | str, options: Options = None) -> SyncResult:
    """Copy ``source`` (file or directory) to ``destination``, blocking.

    ``options`` is a SyncOptions or a mapping such as ``{"overwrite": "newer"}``.
    With no overwrite option nothing existing is replaced unless
    TREESYNC_OVERWRITE says otherwise.
    """
    opts = _coerce_options(options)
    src, dst = Path(source), Path(destination)

    source_status = classify(src)
    _check_root(source_status, dst)

    result = SyncResult()
    try:
        _sync_entry(source_status, dst, opts.overwrite, result)
    except CopyError as err:
        logger.warning("Copy failed", source=str(src), path=str(err.path), error=str(err))
        raise

    _log_finished(src, dst, result)
    return result


async def copy(source: Path | str, destination: Path | str, options: Options = None) -> SyncResult:
    """Asynchronous twin of :func:`copy_sync`; same algorithm, same result."""
    opts = _coerce_options(options)
    src, dst = Path(source), Path(destination)

    source_status = await classify_async(src)
    _check_root(source_status, dst)

    result = SyncResult()
    try:
        await _sync_entry_async(source_status, dst, opts.overwrite, result)
    except CopyError as err:
        logger.warning("Copy failed", source=str(src), path=str(err.path), error=str(err))
        raise

    _log_finished(src, dst, result)
    return result
