"""Configuration loading for hourtracker.

Settings live in `config.toml` under the hourtracker home directory
(`$HOURTRACKER_HOME`, default `~/.config/hourtracker`).
"""

import logging
import os
from pathlib import Path
from typing import Optional

import toml

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "WARNING"


def get_home() -> Path:
    """Get the hourtracker home directory."""
    home = os.getenv("HOURTRACKER_HOME")
    if home:
        return Path(home).expanduser()
    return Path.home() / ".config" / "hourtracker"


def get_config_path() -> Path:
    return get_home() / "config.toml"


def load_config() -> dict:
    """Load configuration, falling back to an empty config.

    Returns:
        Parsed TOML as a dict. Missing or unreadable files yield {}.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return {}

    try:
        return toml.load(config_path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning(f"Could not read {config_path}: {e}")
        return {}


def get_db_path(config: Optional[dict] = None) -> Path:
    """Get the database path from config or the default location."""
    config = load_config() if config is None else config
    db_path = config.get("tracker", {}).get("db_path")
    if db_path:
        return Path(db_path).expanduser()
    return get_home() / "hourtracker.db"


def get_training_start_date(config: Optional[dict] = None) -> Optional[str]:
    """Get the training start date configured in config.toml, if any."""
    config = load_config() if config is None else config
    value = config.get("tracker", {}).get("training_start_date")
    # toml parses bare dates into date objects
    return str(value) if value else None


def get_log_level(config: Optional[dict] = None) -> str:
    config = load_config() if config is None else config
    return str(config.get("logging", {}).get("level", DEFAULT_LOG_LEVEL)).upper()


def get_data_store():
    """Get the data store instance."""
    from hourtracker.db.store import DataStore

    return DataStore(get_db_path())
