"""
Configuration management for docbrowse.

Provides a hierarchical configuration for the ambient settings of the
browser: where the document database lives, logging, and query tuning.
Supports both a user file (~/.config/docbrowse/config.toml) and a local one
(docbrowse.toml). Paging and display flags are not read from here; they come
from the command line and are passed to the navigator explicitly.
"""
import os
import tomli
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field

from docbrowse.store import MAX_MEMBERSHIP_VALUES


@dataclass
class BrowseConfig:
    """
    docbrowse configuration with sensible defaults.

    Configuration hierarchy (highest to lowest priority):
    1. Command-line arguments
    2. Environment variables (DOCBROWSE_*)
    3. Explicit config file (--config)
    4. Local config file (./docbrowse.toml or ./.docbrowserc)
    5. User config file (~/.config/docbrowse/config.toml)
    6. System defaults
    """

    # Database settings
    database: str = field(default="documents.db")
    database_url: Optional[str] = field(default=None)  # Full connection string (overrides database)
    database_echo: bool = field(default=False)

    # Query tuning
    preview_limit: int = field(default=10)
    chunk_size: int = field(default=10)
    pause_seconds: float = field(default=2.0)

    log_level: str = field(default="WARNING")

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "BrowseConfig":
        """
        Load configuration from files and environment.

        Args:
            config_file: Specific config file to load (applied after the search paths)

        Returns:
            Merged configuration object
        """
        config = cls()

        user_config_path = Path.home() / ".config" / "docbrowse" / "config.toml"
        if user_config_path.exists():
            config._merge(cls._load_toml(user_config_path))

        local_paths = [
            Path.cwd() / "docbrowse.toml",
            Path.cwd() / ".docbrowserc",
        ]

        for path in local_paths:
            if path.exists():
                config._merge(cls._load_toml(path))
                break

        if config_file and config_file.exists():
            config._merge(cls._load_toml(config_file))

        config._apply_env_vars()
        config._expand_paths()
        config.validate()

        return config

    @staticmethod
    def _load_toml(path: Path) -> Dict[str, Any]:
        """Load TOML configuration file."""
        with open(path, "rb") as f:
            return tomli.load(f)

    def _merge(self, data: Dict[str, Any]):
        """Merge configuration data into this instance, ignoring unknown keys."""
        for key, value in data.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def _apply_env_vars(self):
        """Apply environment variables with DOCBROWSE_ prefix."""
        prefix = "DOCBROWSE_"
        for key, value in os.environ.items():
            if key.startswith(prefix):
                config_key = key[len(prefix):].lower()
                if hasattr(self, config_key):
                    current_value = getattr(self, config_key)
                    if isinstance(current_value, bool):
                        setattr(self, config_key, value.lower() in ("true", "1", "yes"))
                    elif isinstance(current_value, int):
                        setattr(self, config_key, int(value))
                    elif isinstance(current_value, float):
                        setattr(self, config_key, float(value))
                    else:
                        setattr(self, config_key, value)

    def _expand_paths(self):
        """Expand ~ and environment variables in the database path."""
        if isinstance(self.database, str):
            self.database = os.path.expanduser(os.path.expandvars(self.database))

    def get_database_path(self) -> Path:
        """Get the resolved database path."""
        path = Path(self.database)
        if not path.is_absolute():
            path = Path.cwd() / path
        return path

    def validate(self):
        """
        Check settings that would otherwise fail later, mid-session.

        Raises:
            ValueError: If chunk_size is outside 1..MAX_MEMBERSHIP_VALUES
        """
        if not 1 <= self.chunk_size <= MAX_MEMBERSHIP_VALUES:
            raise ValueError(
                f"chunk_size must be between 1 and {MAX_MEMBERSHIP_VALUES}, got {self.chunk_size}"
            )


_config: Optional[BrowseConfig] = None


def get_config(reload: bool = False, config_file: Optional[Path] = None) -> BrowseConfig:
    """
    Get the process configuration instance.

    Args:
        reload: Force reload configuration from files
        config_file: Specific config file to load

    Returns:
        Configuration instance
    """
    global _config
    if _config is None or reload:
        _config = BrowseConfig.load(config_file)
    return _config


def init_config(database: Optional[str] = None, config_file: Optional[Path] = None,
                **kwargs) -> BrowseConfig:
    """
    Initialize configuration with command-line overrides.

    Args:
        database: Database path override
        config_file: Config file given on the command line
        **kwargs: Other configuration overrides (None values are ignored)

    Returns:
        Configured instance
    """
    config = get_config(reload=config_file is not None, config_file=config_file)

    if database:
        config.database = database

    for key, value in kwargs.items():
        if hasattr(config, key) and value is not None:
            setattr(config, key, value)

    config.validate()
    return config
