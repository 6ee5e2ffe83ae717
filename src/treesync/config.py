"""Configuration: .env parsing, default overwrite policy, YAML options files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

if TYPE_CHECKING:
    from .types import OverwritePolicy, OverwriteValue, SyncOptions

POLICIES: tuple[str, ...] = ("always", "never", "newer")


def read_env_file(keys: list[str]) -> dict[str, str]:
    """Parse .env file and return values for requested keys.

    Does NOT load into os.environ; callers decide what to do with values.
    """
    env_file = Path.cwd() / ".env"
    try:
        content = env_file.read_text()
    except OSError:
        return {}

    result: dict[str, str] = {}
    wanted = set(keys)

    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        eq_idx = trimmed.find("=")
        if eq_idx == -1:
            continue
        key = trimmed[:eq_idx].strip()
        if key not in wanted:
            continue
        value = trimmed[eq_idx + 1 :].strip()
        if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
            value = value[1:-1]
        if value:
            result[key] = value

    return result


def resolve_default_overwrite() -> OverwritePolicy:
    """Policy used when a caller supplies no overwrite option.

    Reads TREESYNC_OVERWRITE from the environment, then .env. Unknown values
    fall back to "never".
    """
    raw = os.environ.get("TREESYNC_OVERWRITE") or read_env_file(["TREESYNC_OVERWRITE"]).get("TREESYNC_OVERWRITE", "")
    value = raw.strip().lower()
    if value in POLICIES:
        return value  # type: ignore[return-value]
    return "never"


def load_options(path: Path | str, overwrite: OverwriteValue = None) -> SyncOptions:
    """Read sync options from a YAML file.

    An explicit ``overwrite`` argument takes precedence over the file.
    """
    from .types import SyncOptions

    options_path = Path(path)
    if not options_path.exists():
        raise FileNotFoundError(f"Options file not found: {options_path}")

    raw = yaml.safe_load(options_path.read_text(encoding="utf-8"))
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Options file must contain a mapping: {options_path}")

    if overwrite is not None:
        raw["overwrite"] = overwrite

    return SyncOptions.model_validate(raw)
