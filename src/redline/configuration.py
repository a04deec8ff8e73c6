# SPDX-License-Identifier: MIT

import os
from pathlib import Path
from typing import Optional, TypedDict

import platformdirs

APP_NAME = "redline"

CONFIG_PATH: Path = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH: Path = CONFIG_PATH / "config.yaml"

CACHE_PATH: Path = platformdirs.user_cache_path(APP_NAME)
APP_CACHE_PATH: Path = CACHE_PATH / "cache.yaml"

DEFAULT_CACHE_TTL_MINUTES = 10
DEFAULT_TIME_ENTRY_DAYS = 7
DEFAULT_ISSUE_MATCH_FIELDS = "subject,id"


class Configuration(TypedDict):
    redmine_url: Optional[str]
    api_key: Optional[str]
    allow_self_signed_cert: bool
    cache_ttl_minutes: int
    time_entry_days: int
    issue_match_fields: str
    open_command: Optional[str]


def load_path_configuration() -> None:
    """
    Point the config and cache paths at the directories named by the
    REDLINE_CONFIG_DIR and REDLINE_CACHE_DIR environment variables.

    This must be called before any repositories are instantiated.
    """
    global CONFIG_PATH, APP_CONFIG_PATH, CACHE_PATH, APP_CACHE_PATH

    config_dir = os.environ.get("REDLINE_CONFIG_DIR")
    if config_dir:
        CONFIG_PATH = Path(config_dir)
        APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

    cache_dir = os.environ.get("REDLINE_CACHE_DIR")
    if cache_dir:
        CACHE_PATH = Path(cache_dir)
        APP_CACHE_PATH = CACHE_PATH / "cache.yaml"
