"""Shared fixtures and tree builders for copy engine tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run each test from an empty cwd with no overwrite default configured."""
    monkeypatch.delenv("TREESYNC_OVERWRITE", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def src(tmp_path: Path) -> Path:
    path = tmp_path / "src"
    path.mkdir()
    return path


@pytest.fixture()
def dest(tmp_path: Path) -> Path:
    return tmp_path / "dest"


def make_tree(root: Path, files: dict[str, str]) -> None:
    """Write ``files`` (relative path -> text) under root."""
    for rel_path, content in files.items():
        full_path = root / rel_path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")


def read_tree(root: Path) -> dict[str, str]:
    """Return every file under root as relative path -> text."""
    return {
        p.relative_to(root).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


def set_mtime(path: Path, seconds: int) -> None:
    ns = seconds * 1_000_000_000
    os.utime(path, ns=(ns, ns))
