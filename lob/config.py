"""League configuration management."""

import os
from functools import lru_cache
from pathlib import Path

from .constants import DATA_DIR, PROJECT_DIR
from .schemas import LeagueConfig
from .utils import load_json

CONFIG_PATH = DATA_DIR / 'league_config.json'
DATASET_PATH_ENV = 'LOB_DATASET_PATH'


@lru_cache(maxsize=1)
def get_config() -> LeagueConfig:
    """
    Load league configuration from data/league_config.json.

    Configuration is cached after first load. A missing file yields the
    defaults declared on LeagueConfig.

    Returns:
        LeagueConfig object with validated settings

    Raises:
        ValueError: If config file has invalid structure

    Example:
        from lob.config import get_config
        config = get_config()
        print(f"Latest series shown: {config.latest_series_limit}")
    """
    if not CONFIG_PATH.exists():
        return LeagueConfig()
    return load_json(CONFIG_PATH, schema=LeagueConfig)


def _resolve(path_str: str) -> Path:
    path = Path(path_str)
    return path if path.is_absolute() else PROJECT_DIR / path


def get_dataset_path() -> Path:
    """Get the dataset file path ($LOB_DATASET_PATH wins over the config)."""
    override = os.environ.get(DATASET_PATH_ENV, '').strip()
    if override:
        return Path(override)
    return _resolve(get_config().dataset_path)


def get_export_dir() -> Path:
    """Get the directory exports are written to."""
    return _resolve(get_config().export_dir)


def get_latest_series_limit() -> int:
    """Get how many series the 'latest series' view returns."""
    return get_config().latest_series_limit


def get_leaderboard_size() -> int:
    """Get how many rows reports print per leaderboard."""
    return get_config().leaderboard_size


def get_log_dir() -> Path:
    """Get the directory for log files."""
    return _resolve(get_config().log_dir)


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
