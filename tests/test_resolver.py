"""
Tests for flatconf.resolver module.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from flatconf.resolver import normalize_config_path, resolve_path


class TestResolvePath:
    """Tests for file name resolution."""

    @pytest.mark.parametrize("file_path", [None, ""])
    def test_empty_is_unresolved(self, file_path, config_dir):
        """Test empty input returns None even with a base directory."""
        assert resolve_path(file_path, normalize_config_path(config_dir)) is None

    def test_existing_file_unchanged(self, config_dir):
        """Test an existing file is returned as given."""
        target = config_dir / "config.json"

        assert resolve_path(str(target)) == target

    def test_existing_relative_file(self, config_dir, monkeypatch):
        """Test a file relative to the working directory is found."""
        monkeypatch.chdir(config_dir)

        assert resolve_path("config.yaml") == Path("config.yaml")

    def test_joined_with_base_directory(self, config_dir):
        """Test bare names are joined to the base directory."""
        base = normalize_config_path(config_dir)

        assert resolve_path("config.ini", base) == config_dir / "config.ini"

    def test_leading_slash_stripped(self, config_dir):
        """Test a leading slash does not escape the base directory."""
        base = normalize_config_path(config_dir)

        assert resolve_path("/nested/app.yaml", base) == config_dir / "nested" / "app.yaml"

    def test_missing_file_with_base_not_checked(self, config_dir):
        """Test the joined path is returned even if it does not exist."""
        base = normalize_config_path(config_dir)

        assert resolve_path("missing.json", base) == config_dir / "missing.json"

    def test_unresolved_without_base(self, tmp_path):
        """Test a missing file without base directory returns None."""
        assert resolve_path(str(tmp_path / "missing.json")) is None


class TestNormalizeConfigPath:
    """Tests for base directory normalization."""

    def test_adds_separator(self, tmp_path):
        """Test a separator is appended."""
        assert normalize_config_path(tmp_path) == str(tmp_path) + os.sep

    def test_single_separator(self, tmp_path):
        """Test existing trailing slashes are collapsed."""
        assert normalize_config_path(f"{tmp_path}//") == str(tmp_path) + os.sep
