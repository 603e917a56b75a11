# tests/unit/test_paths.py
"""
Unit tests for config locations and YAML extension inference.
"""

import logging
from pathlib import Path

import pytest

from kubestate.config import (
    CONFIG_DIR_ENV,
    app_config_file,
    app_context_aliases_file,
    app_context_plugins_file,
    config_home,
    yaml_extension,
)
from kubestate.config.paths import ensure_dir_path, ensure_full_path, sanitize_file_name


class TestYamlExtension:
    """Tests for YAML extension inference."""

    def test_no_files_picks_yml(self, tmp_path):
        """Without siblings on disk the .yml variant is chosen."""
        assert yaml_extension(tmp_path / "cfg") == str(tmp_path / "cfg.yml")

    def test_existing_yaml_preferred(self, tmp_path):
        """An existing .yaml sibling wins when .yml is absent."""
        (tmp_path / "cfg.yaml").write_text("")
        assert yaml_extension(tmp_path / "cfg") == str(tmp_path / "cfg.yaml")

    def test_existing_yml_wins(self, tmp_path):
        """When both exist .yml is kept."""
        (tmp_path / "cfg.yaml").write_text("")
        (tmp_path / "cfg.yml").write_text("")
        assert yaml_extension(tmp_path / "cfg") == str(tmp_path / "cfg.yml")

    @pytest.mark.parametrize("name", ["cfg.yml", "cfg.yaml"])
    def test_yaml_extension_reinferred(self, tmp_path, name):
        """A YAML extension is stripped and picked again from disk."""
        (tmp_path / "cfg.yaml").write_text("")
        assert yaml_extension(tmp_path / name) == str(tmp_path / "cfg.yaml")

    def test_relative_path(self, tmp_path, monkeypatch):
        """Bare relative names resolve against the working directory."""
        monkeypatch.chdir(tmp_path)
        assert yaml_extension("cfg") == "cfg.yml"
        Path("cfg.yaml").write_text("")
        assert yaml_extension("cfg") == "cfg.yaml"

    def test_other_extension_returned_unchanged(self, tmp_path, caplog):
        """Non-YAML extensions are logged and passed through."""
        path = tmp_path / "cfg.json"
        with caplog.at_level(logging.WARNING, logger="kubestate.config.paths"):
            assert yaml_extension(path) == str(path)
        assert "is not a yaml file" in caplog.text


class TestConfigHome:
    """Tests for config home resolution."""

    def test_env_override(self, tmp_path, monkeypatch):
        """The environment variable replaces the config home entirely."""
        monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path / "custom"))
        assert config_home() == tmp_path / "custom"

    def test_xdg_config_home(self, tmp_path, monkeypatch):
        """Without override XDG_CONFIG_HOME is used."""
        monkeypatch.delenv(CONFIG_DIR_ENV, raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert config_home() == tmp_path / "kubestate"

    def test_home_fallback(self, tmp_path, monkeypatch):
        """Without any variable ~/.config is used."""
        monkeypatch.delenv(CONFIG_DIR_ENV, raising=False)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert config_home() == tmp_path / ".config" / "kubestate"

    def test_app_config_file(self, isolated_config_home):
        """The app config file lives in the config home."""
        assert app_config_file() == isolated_config_home / "config.yml"

    def test_app_config_file_explicit_home(self, tmp_path):
        (tmp_path / "config.yaml").write_text("")
        assert app_config_file(tmp_path) == tmp_path / "config.yaml"


class TestContextFiles:
    """Tests for context scoped side files."""

    def test_aliases_and_plugins(self, isolated_config_home):
        """Side files are keyed by cluster and context."""
        base = isolated_config_home / "clusters" / "c1" / "dev"
        assert app_context_aliases_file("c1", "dev") == base / "aliases.yaml"
        assert app_context_plugins_file("c1", "dev") == base / "plugins.yaml"

    def test_names_sanitized(self):
        """Path separators and colons never leak into path components."""
        assert sanitize_file_name("arn:aws:eks:cluster/x") == "arn-aws-eks-cluster-x"
        path = app_context_aliases_file("a/b", "c:d")
        assert path.parent.name == "c-d"
        assert path.parent.parent.name == "a-b"


class TestEnsurePaths:
    """Tests for directory creation helpers."""

    def test_ensure_full_path(self, tmp_path):
        target = tmp_path / "a" / "b"
        ensure_full_path(target)
        assert target.is_dir()

    def test_ensure_dir_path_creates_parent(self, tmp_path):
        """Only the parent of a file path is created."""
        target = tmp_path / "a" / "config.yml"
        ensure_dir_path(target)
        assert target.parent.is_dir()
        assert not target.exists()

    def test_ensure_full_path_failure_propagates(self, tmp_path):
        """A regular file in the way is an error."""
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(OSError):
            ensure_full_path(blocker / "sub")
