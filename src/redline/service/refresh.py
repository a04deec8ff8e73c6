# SPDX-License-Identifier: MIT

import logging
from typing import Any, Callable, Optional, cast

import pendulum

from redline import configuration
from redline.client.remote import RemoteClient
from redline.model.cache import Snapshot
from redline.model.fetch_result import (
    EntriesResult,
    FetchResults,
    IssuesResult,
    ProjectsResult,
    StatusesResult,
    UserResult,
)
from redline.model.resource_kind import ResourceKind
from redline.repository.cache import CacheRepository
from redline.service.fan_in import FanInPolicy, fan_in

logger = logging.getLogger(__name__)


def __fetch_tasks(
    client: RemoteClient, days_back: int
) -> list[Callable[[], FetchResults]]:
    def fetch_user() -> UserResult:
        return {"kind": ResourceKind.USER, "user": client.get_user()}

    def fetch_issues() -> IssuesResult:
        return {"kind": ResourceKind.ISSUES, "issues": client.get_issues()}

    def fetch_statuses() -> StatusesResult:
        return {
            "kind": ResourceKind.ISSUE_STATUSES,
            "issue_statuses": client.get_issue_statuses(),
        }

    def fetch_projects() -> ProjectsResult:
        return {"kind": ResourceKind.PROJECTS, "projects": client.get_projects()}

    def fetch_time_entries() -> EntriesResult:
        return {
            "kind": ResourceKind.TIME_ENTRIES,
            "time_entries": client.get_time_entries(days_back),
        }

    return [
        fetch_user,
        fetch_issues,
        fetch_statuses,
        fetch_projects,
        fetch_time_entries,
    ]


def __build_snapshot(results: list[FetchResults]) -> Snapshot:
    snapshot: dict[str, Any] = {}
    for result in results:
        match result["kind"]:
            case ResourceKind.USER:
                snapshot["user"] = cast(UserResult, result)["user"]
            case ResourceKind.ISSUES:
                snapshot["issues"] = cast(IssuesResult, result)["issues"]
            case ResourceKind.ISSUE_STATUSES:
                snapshot["issue_statuses"] = cast(StatusesResult, result)[
                    "issue_statuses"
                ]
            case ResourceKind.PROJECTS:
                snapshot["projects"] = cast(ProjectsResult, result)["projects"]
            case ResourceKind.TIME_ENTRIES:
                snapshot["time_entries"] = cast(EntriesResult, result)[
                    "time_entries"
                ]
        logger.debug("Got %s", result["kind"])

    missing = {kind.value for kind in ResourceKind} - set(snapshot)
    if missing:
        raise ValueError(f"Refresh is missing {', '.join(sorted(missing))}")
    return cast(Snapshot, snapshot)


def refresh(
    cache_repo: CacheRepository,
    client: RemoteClient,
    days_back: int = configuration.DEFAULT_TIME_ENTRY_DAYS,
    now: Optional[pendulum.DateTime] = None,
) -> None:
    """
    Fetch user, issues, statuses, projects and recent time entries
    concurrently and swap them into the cache together.

    The first failed fetch is raised and the cache is left exactly as it was.
    """
    logger.info("Refreshing cache...")
    results = fan_in(
        __fetch_tasks(client, days_back), FanInPolicy.DISCARD_STRAGGLERS
    )
    cache_repo.replace(__build_snapshot(results), now)
    logger.info("Cache refreshed")


def check_refresh(
    cache_repo: CacheRepository,
    client: RemoteClient,
    days_back: int = configuration.DEFAULT_TIME_ENTRY_DAYS,
    now: Optional[pendulum.DateTime] = None,
) -> Optional[Exception]:
    """
    Refresh the cache when it is stale.

    A failure is returned rather than raised so the caller can still answer
    from the last known cache and show the error next to its results.
    """
    if not cache_repo.is_stale(now):
        return None

    try:
        refresh(cache_repo, client, days_back, now)
    except Exception as e:
        logger.warning("Error refreshing cache: %s", e)
        return e
    return None
