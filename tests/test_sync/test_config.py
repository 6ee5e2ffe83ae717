"""Tests for configuration and options files."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import yaml
from pydantic import ValidationError

from treesync.config import load_options, read_env_file, resolve_default_overwrite

if TYPE_CHECKING:
    from pathlib import Path


class TestReadEnvFile:
    def test_reads_requested_keys(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("TREESYNC_OVERWRITE=newer\nOTHER=x\n")
        assert read_env_file(["TREESYNC_OVERWRITE"]) == {"TREESYNC_OVERWRITE": "newer"}

    def test_strips_quotes_and_comments(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text('# comment\n\nKEY1="quoted"\nKEY2=\'single\'\n')
        assert read_env_file(["KEY1", "KEY2"]) == {"KEY1": "quoted", "KEY2": "single"}

    def test_missing_file(self) -> None:
        assert read_env_file(["KEY1"]) == {}


class TestResolveDefaultOverwrite:
    def test_defaults_to_never(self) -> None:
        assert resolve_default_overwrite() == "never"

    def test_environment_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".env").write_text("TREESYNC_OVERWRITE=newer\n")
        monkeypatch.setenv("TREESYNC_OVERWRITE", "ALWAYS")
        assert resolve_default_overwrite() == "always"

    def test_env_file_fallback(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("TREESYNC_OVERWRITE=newer\n")
        assert resolve_default_overwrite() == "newer"

    def test_unknown_value_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TREESYNC_OVERWRITE", "sometimes")
        assert resolve_default_overwrite() == "never"


class TestLoadOptions:
    def test_reads_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "sync.yaml"
        path.write_text(yaml.safe_dump({"overwrite": "newer"}))
        assert load_options(path).overwrite == "newer"

    def test_yaml_boolean(self, tmp_path: Path) -> None:
        path = tmp_path / "sync.yaml"
        path.write_text("overwrite: true\n")
        assert load_options(path).overwrite == "always"

    def test_empty_file_uses_default(self, tmp_path: Path) -> None:
        path = tmp_path / "sync.yaml"
        path.write_text("")
        assert load_options(path).overwrite == "never"

    def test_argument_overrides_file(self, tmp_path: Path) -> None:
        path = tmp_path / "sync.yaml"
        path.write_text("overwrite: never\n")
        assert load_options(path, overwrite="always").overwrite == "always"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_options(tmp_path / "missing.yaml")

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "sync.yaml"
        path.write_text("- always\n")
        with pytest.raises(ValueError, match="mapping"):
            load_options(path)

    def test_invalid_policy(self, tmp_path: Path) -> None:
        path = tmp_path / "sync.yaml"
        path.write_text("overwrite: sometimes\n")
        with pytest.raises(ValidationError):
            load_options(path)
