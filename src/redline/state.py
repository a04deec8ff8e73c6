# SPDX-License-Identifier: MIT

from contextvars import ContextVar
from typing import Optional

from redline import configuration
from redline.repository.cache import CacheRepository
from redline.repository.configuration import ConfigurationRepository

_config_repo: ContextVar[Optional[ConfigurationRepository]] = ContextVar(
    "config_repo", default=None
)
_cache_repo: ContextVar[Optional[CacheRepository]] = ContextVar(
    "cache_repo", default=None
)


def set_config_repo(repo: Optional[ConfigurationRepository]) -> None:
    _config_repo.set(repo)


def get_config_repo() -> ConfigurationRepository:
    repo = _config_repo.get()
    if repo is None:
        repo = ConfigurationRepository(configuration.APP_CONFIG_PATH)
        _config_repo.set(repo)
    return repo


def set_cache_repo(repo: Optional[CacheRepository]) -> None:
    _cache_repo.set(repo)


def get_cache_repo() -> CacheRepository:
    repo = _cache_repo.get()
    if repo is None:
        ttl_minutes = get_config_repo().get_config()["cache_ttl_minutes"]
        repo = CacheRepository(configuration.APP_CACHE_PATH, ttl_minutes)
        _cache_repo.set(repo)
    return repo


def peek_cache_repo() -> Optional[CacheRepository]:
    return _cache_repo.get()
