"""Overwrite policy normalization and evaluation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import POLICIES, resolve_default_overwrite

if TYPE_CHECKING:
    from .types import OverwritePolicy, PathStatus


def normalize_overwrite(value: object) -> OverwritePolicy:
    """Collapse every accepted overwrite spelling into one policy.

    ``True`` means "always", ``False`` means "never", ``None`` defers to the
    configured default. Strings are matched case-insensitively.
    """
    if isinstance(value, bool):
        return "always" if value else "never"
    if value is None:
        return resolve_default_overwrite()
    if isinstance(value, str):
        policy = value.strip().lower()
        if policy in POLICIES:
            return policy  # type: ignore[return-value]
    raise ValueError(f"Invalid overwrite policy: {value!r} (expected one of {', '.join(POLICIES)} or a boolean)")


def should_overwrite(policy: OverwritePolicy, source: PathStatus, destination: PathStatus) -> bool:
    """Decide whether an existing destination may be replaced by source."""
    if not destination.exists:
        return True

    if policy == "always":
        return True
    if policy == "never":
        return False

    # "newer": strictly greater mtime only
    if source.mtime_ns is None or destination.mtime_ns is None:
        return False
    return source.mtime_ns > destination.mtime_ns
