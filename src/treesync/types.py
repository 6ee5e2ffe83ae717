"""Sync domain types."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .policy import normalize_overwrite

PathKind = Literal["file", "directory", "absent"]
OverwritePolicy = Literal["always", "never", "newer"]
# Anything accepted at the API boundary before normalization.
OverwriteValue = Union[OverwritePolicy, str, bool, None]


class PathStatus(BaseModel):
    """One filesystem location as seen at one instant."""

    model_config = ConfigDict(frozen=True)

    path: Path
    kind: PathKind
    mtime_ns: int | None = None  # None when absent

    @property
    def exists(self) -> bool:
        return self.kind != "absent"

    @property
    def is_file(self) -> bool:
        return self.kind == "file"

    @property
    def is_dir(self) -> bool:
        return self.kind == "directory"


class SyncOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    overwrite: OverwritePolicy = Field(default_factory=lambda: normalize_overwrite(None))

    @field_validator("overwrite", mode="before")
    @classmethod
    def _normalize(cls, value: object) -> OverwritePolicy:
        return normalize_overwrite(value)


class SyncResult(BaseModel):
    """Destination paths touched by one copy run, grouped by outcome."""

    copied: list[Path] = Field(default_factory=list)
    created: list[Path] = Field(default_factory=list)
    replaced: list[Path] = Field(default_factory=list)
    skipped: list[Path] = Field(default_factory=list)
