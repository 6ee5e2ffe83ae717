"""Recursive file tree copying with overwrite policies, plus stream helpers."""

from __future__ import annotations

from .classify import classify, classify_async
from .config import load_options, read_env_file, resolve_default_overwrite
from .conflict import (
    remove_node,
    remove_tree,
    remove_tree_async,
    resolve_type_conflict,
    resolve_type_conflict_async,
)
from .errors import AccessError, CopyError, SourceNotFoundError, SyncIOError
from .listing import list_files
from .logger import setup_logging
from .policy import normalize_overwrite, should_overwrite
from .streams import array_to_stream, filter_stream, merge_streams, stream_to_array, stream_to_bytes
from .sync import copy, copy_sync
from .types import OverwritePolicy, PathKind, PathStatus, SyncOptions, SyncResult

__all__ = [
    "AccessError",
    "CopyError",
    "OverwritePolicy",
    "PathKind",
    "PathStatus",
    "SourceNotFoundError",
    "SyncIOError",
    "SyncOptions",
    "SyncResult",
    "array_to_stream",
    "classify",
    "classify_async",
    "copy",
    "copy_sync",
    "filter_stream",
    "list_files",
    "load_options",
    "merge_streams",
    "normalize_overwrite",
    "read_env_file",
    "remove_node",
    "remove_tree",
    "remove_tree_async",
    "resolve_default_overwrite",
    "resolve_type_conflict",
    "resolve_type_conflict_async",
    "setup_logging",
    "should_overwrite",
    "stream_to_array",
    "stream_to_bytes",
]
