# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

import pendulum
from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from redline import configuration, time
from redline.model.cache import Cache, Snapshot
from redline.model.issue import Issue
from redline.template.cache import get_cache_template

logger = logging.getLogger(__name__)


class CacheRepository:
    """
    Owns the process-wide snapshot of server state.

    Every mutation is written to disk straight away. A failed write is logged
    and the in-memory cache stays authoritative for the rest of the process.
    """

    def __init__(
        self,
        path: Path,
        ttl_minutes: int = configuration.DEFAULT_CACHE_TTL_MINUTES,
    ) -> None:
        self.path = path
        self.ttl_minutes = ttl_minutes
        self._cache: Optional[Cache] = None
        self.is_dirty = False

    @property
    def cache(self) -> Cache:
        if self._cache is None:
            self.__load_data()
        if self._cache is None:
            raise ValueError()
        return self._cache

    def __load_data(self) -> None:
        self._cache = get_cache_template()
        if not self.path.is_file():
            logger.info("No cache at %s, starting empty", self.path)
            return

        try:
            raw_cache = load(self.path.read_text(), Loader=Loader)
            if raw_cache is not None:
                self._cache = self.__convert_cache_for_deserialization(raw_cache)
        except (
            AttributeError,
            KeyError,
            OSError,
            TypeError,
            ValueError,
            YAMLError,
        ) as e:
            logger.warning("Error loading cache %s: %s", self.path, e)
            self._cache = get_cache_template()

    def __save_data(self) -> None:
        serializable_cache = self.__convert_cache_for_serialization(
            deepcopy(self.cache)
        )
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(dump(serializable_cache, Dumper=Dumper))
        except (OSError, YAMLError) as e:
            logger.error("Error saving cache %s: %s", self.path, e)
            self.is_dirty = True
            return
        self.is_dirty = False

    def flush(self) -> bool:
        """Retry a save that failed earlier in the process."""
        if self._cache is not None and self.is_dirty:
            self.__save_data()
            return not self.is_dirty
        return False

    def __convert_cache_for_serialization(self, cache: Cache) -> dict[str, Any]:
        serializable_cache = cast(dict[str, Any], cache)
        serializable_cache["refreshed"] = time.datetime_to_iso_str_optional(
            serializable_cache["refreshed"]
        )
        return serializable_cache

    def __convert_cache_for_deserialization(self, cache: dict[str, Any]) -> Cache:
        deserializable_cache = get_cache_template()
        deserializable_cache["refreshed"] = time.datetime_from_str_optional(
            cache.get("refreshed")
        )
        user = cache.get("user")
        if user is not None and not isinstance(user, dict):
            raise ValueError("cached user is not a mapping")
        deserializable_cache["user"] = user
        deserializable_cache["issues"] = self.__records(cache, "issues")
        deserializable_cache["issue_statuses"] = self.__records(
            cache, "issue_statuses"
        )
        deserializable_cache["projects"] = self.__records(cache, "projects")
        deserializable_cache["time_entries"] = self.__records(cache, "time_entries")
        return deserializable_cache

    def __records(self, cache: dict[str, Any], key: str) -> list[Any]:
        records = cache.get(key) or []
        if not isinstance(records, list) or not all(
            isinstance(record, dict) for record in records
        ):
            raise ValueError(f"cached {key} is not a list of mappings")
        return records

    def is_stale(self, now: Optional[pendulum.DateTime] = None) -> bool:
        if now is None:
            now = time.now_utc()
        refreshed = self.cache["refreshed"]
        if refreshed is None:
            return True
        return (now - refreshed).total_seconds() > self.ttl_minutes * 60

    def replace(
        self, snapshot: Snapshot, now: Optional[pendulum.DateTime] = None
    ) -> None:
        if now is None:
            now = time.now_utc()

        # one assignment so a reader never sees half of two refreshes
        self._cache = {
            "refreshed": now,
            "user": deepcopy(snapshot["user"]),
            "issues": deepcopy(snapshot["issues"]),
            "issue_statuses": deepcopy(snapshot["issue_statuses"]),
            "projects": deepcopy(snapshot["projects"]),
            "time_entries": deepcopy(snapshot["time_entries"]),
        }
        self.__save_data()

    def patch_issue(self, issue: Issue) -> bool:
        issues = self.cache["issues"]
        for index, cached_issue in enumerate(issues):
            if cached_issue["id"] == issue["id"]:
                issues[index] = deepcopy(issue)
                self.__save_data()
                return True
        return False

    def append_issues(self, new_issues: list[Issue]) -> None:
        if len(new_issues) == 0:
            return
        self.cache["issues"].extend(deepcopy(new_issues))
        self.__save_data()

    def get_cache(self) -> Cache:
        return deepcopy(self.cache)

    def get_issue(self, id: int) -> Optional[Issue]:
        for issue in self.cache["issues"]:
            if issue["id"] == id:
                return deepcopy(issue)
        return None

    def clear(self) -> None:
        self._cache = get_cache_template()
        self.__save_data()
