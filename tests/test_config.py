"""
Tests for docbrowse/config.py configuration management.

Tests defaults, file loading, environment variables and overrides.
"""
import os
import pytest
from pathlib import Path

from docbrowse.config import BrowseConfig, get_config, init_config


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run with an empty home and working directory and no DOCBROWSE_ vars."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.chdir(work)
    for key in list(os.environ):
        if key.startswith("DOCBROWSE_"):
            monkeypatch.delenv(key)
    return home, work


class TestBrowseConfigDefaults:
    """Test default configuration values."""

    def test_default_database(self):
        assert BrowseConfig().database == "documents.db"

    def test_default_database_url_is_none(self):
        assert BrowseConfig().database_url is None

    def test_default_query_tuning(self):
        config = BrowseConfig()
        assert config.preview_limit == 10
        assert config.chunk_size == 10
        assert config.pause_seconds == 2.0

    def test_default_log_level(self):
        assert BrowseConfig().log_level == "WARNING"


class TestDatabasePath:
    """Test database path resolution."""

    def test_relative_path_resolved_against_cwd(self, isolated):
        _, work = isolated
        config = BrowseConfig(database="docs.db")
        assert config.get_database_path() == work / "docs.db"

    def test_absolute_path_kept(self, tmp_path):
        config = BrowseConfig(database=str(tmp_path / "abs.db"))
        assert config.get_database_path() == tmp_path / "abs.db"


class TestValidate:
    """Test the chunk size bounds check."""

    @pytest.mark.parametrize("size", [1, 5, 10])
    def test_sizes_in_range_accepted(self, size):
        BrowseConfig(chunk_size=size).validate()

    @pytest.mark.parametrize("size", [0, -1, 11, 20])
    def test_sizes_out_of_range_rejected(self, size):
        with pytest.raises(ValueError, match="chunk_size must be between 1 and 10"):
            BrowseConfig(chunk_size=size).validate()

    def test_file_chunk_size_too_large(self, isolated, tmp_path):
        explicit = tmp_path / "custom.toml"
        explicit.write_text("chunk_size = 20\n")
        with pytest.raises(ValueError, match="got 20"):
            BrowseConfig.load(explicit)

    def test_env_chunk_size_zero(self, isolated, monkeypatch):
        monkeypatch.setenv("DOCBROWSE_CHUNK_SIZE", "0")
        with pytest.raises(ValueError, match="got 0"):
            BrowseConfig.load()

    def test_override_checked(self, isolated):
        with pytest.raises(ValueError):
            init_config(chunk_size=11)


class TestLoad:
    """Test loading from files and environment."""

    def test_defaults_without_files(self, isolated):
        assert BrowseConfig.load() == BrowseConfig()

    def test_user_config(self, isolated):
        home, _ = isolated
        path = home / ".config" / "docbrowse" / "config.toml"
        path.parent.mkdir(parents=True)
        path.write_text('database = "user.db"\npreview_limit = 5\n')

        config = BrowseConfig.load()
        assert config.database == "user.db"
        assert config.preview_limit == 5

    def test_local_config_overrides_user(self, isolated):
        home, work = isolated
        user = home / ".config" / "docbrowse" / "config.toml"
        user.parent.mkdir(parents=True)
        user.write_text('database = "user.db"\n')
        (work / "docbrowse.toml").write_text('database = "local.db"\n')

        assert BrowseConfig.load().database == "local.db"

    def test_explicit_file(self, isolated, tmp_path):
        explicit = tmp_path / "custom.toml"
        explicit.write_text('chunk_size = 3\nunknown_key = "ignored"\n')

        config = BrowseConfig.load(explicit)
        assert config.chunk_size == 3
        assert not hasattr(config, "unknown_key")

    def test_env_vars(self, isolated, monkeypatch):
        monkeypatch.setenv("DOCBROWSE_DATABASE", "env.db")
        monkeypatch.setenv("DOCBROWSE_PREVIEW_LIMIT", "3")
        monkeypatch.setenv("DOCBROWSE_DATABASE_ECHO", "yes")
        monkeypatch.setenv("DOCBROWSE_PAUSE_SECONDS", "0.5")

        config = BrowseConfig.load()
        assert config.database == "env.db"
        assert config.preview_limit == 3
        assert config.database_echo is True
        assert config.pause_seconds == 0.5

    def test_home_expanded(self, isolated, monkeypatch):
        monkeypatch.setenv("DOCBROWSE_DATABASE", "~/docs.db")
        monkeypatch.setenv("HOME", "/tmp/somebody")
        assert BrowseConfig.load().database == "/tmp/somebody/docs.db"


class TestGlobalConfig:
    """Test get_config/init_config."""

    def test_get_config_cached(self, isolated):
        assert get_config() is get_config()

    def test_reload(self, isolated):
        first = get_config()
        assert get_config(reload=True) is not first

    def test_init_config_overrides(self, isolated):
        config = init_config(database="cli.db", database_url=None, preview_limit=4)
        assert config.database == "cli.db"
        assert config.database_url is None
        assert config.preview_limit == 4
        assert get_config() is config
