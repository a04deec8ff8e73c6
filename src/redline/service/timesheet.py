# SPDX-License-Identifier: MIT

import json
import logging
import re
from typing import Any, Optional

import pendulum

from redline.client.remote import RemoteClient
from redline.model.cache import Cache
from redline.model.issue import Issue
from redline.model.item import Item
from redline.model.span import Span
from redline.model.timesheet import IssueBucket, ProjectBucket, Timesheet
from redline.query.fuzzy import fuzzy_matches
from redline.repository.cache import CacheRepository
from redline.service.fan_in import FanInPolicy, fan_in
from redline.service.span import (
    SPAN_KEYWORDS,
    SpanParseError,
    parse_span,
    span_contains,
    span_label,
)
from redline.service.url import issue_url, timesheet_url
from redline.template.action import get_open_url_action
from redline.template.item import (
    get_action_arg,
    get_error_item,
    get_item_arg,
    get_item_template,
)
from redline.template.timesheet import get_timesheet_template

logger = logging.getLogger(__name__)

TIMESHEET_KEYWORD = "timesheet"
NO_ISSUE_NAME = "(no issue)"


def find_missing_issue_ids(cache: Cache) -> list[int]:
    """Distinct issue ids referenced by time entries but absent from the cache."""
    cached_ids = {issue["id"] for issue in cache["issues"]}
    missing_ids: list[int] = []
    for entry in cache["time_entries"]:
        issue_id = entry["issue_id"]
        if issue_id is None or issue_id in cached_ids or issue_id in missing_ids:
            continue
        missing_ids.append(issue_id)
    return missing_ids


def backfill_missing_issues(
    cache_repo: CacheRepository, client: RemoteClient
) -> list[Issue]:
    """
    Fetch every issue a time entry points at that the cache does not hold.

    The fetches run concurrently. The first failure is raised, fetches that
    have not started are cancelled and nothing is added to the cache.
    """
    missing_ids = find_missing_issue_ids(cache_repo.cache)
    if len(missing_ids) == 0:
        return []

    logger.info("Fetching %d issues missing from the cache", len(missing_ids))
    tasks = [
        (lambda issue_id=issue_id: client.get_issue(issue_id))
        for issue_id in missing_ids
    ]
    fetched = fan_in(tasks, FanInPolicy.CANCEL_PENDING)

    # keep the order in which the entries referenced them
    fetched_by_id = {issue["id"]: issue for issue in fetched}
    new_issues = [
        fetched_by_id[issue_id] for issue_id in missing_ids if issue_id in fetched_by_id
    ]
    cache_repo.append_issues(new_issues)
    return new_issues


def generate_timesheet(cache: Cache, span: Span) -> Timesheet:
    """
    Bucket the cached time entries within the span by project, then by issue.

    Buckets keep the order in which their first entry appears.
    """
    logger.debug("Generating timesheet from %s to %s", span["from"], span["to"])

    timesheet = get_timesheet_template()
    projects_by_id = {project["id"]: project for project in cache["projects"]}
    issues_by_id = {issue["id"]: issue for issue in cache["issues"]}
    project_buckets: dict[int, ProjectBucket] = {}
    issue_buckets: dict[tuple[int, Optional[int]], IssueBucket] = {}

    for entry in cache["time_entries"]:
        if not span_contains(span, entry["spent_on"]):
            continue

        project_id = entry["project"]["id"]
        project_bucket = project_buckets.get(project_id)
        if project_bucket is None:
            project = projects_by_id.get(project_id)
            if project is None:
                logger.debug("Missing project %s", project_id)
            project_bucket = {
                "id": project_id,
                "name": entry["project"]["name"],
                "project": project,
                "total": 0.0,
                "issues": [],
            }
            project_buckets[project_id] = project_bucket
            timesheet["projects"].append(project_bucket)

        issue_id = entry["issue_id"]
        issue_bucket = issue_buckets.get((project_id, issue_id))
        if issue_bucket is None:
            issue = issues_by_id.get(issue_id) if issue_id is not None else None
            if issue is not None:
                name = issue["subject"]
            elif issue_id is not None:
                logger.debug("Missing issue %s", issue_id)
                name = f"#{issue_id}"
            else:
                name = NO_ISSUE_NAME
            issue_bucket = {
                "id": issue_id,
                "name": name,
                "issue": issue,
                "total": 0.0,
            }
            issue_buckets[(project_id, issue_id)] = issue_bucket
            project_bucket["issues"].append(issue_bucket)

        issue_bucket["total"] += entry["hours"]
        project_bucket["total"] += entry["hours"]
        timesheet["total"] += entry["hours"]

    return timesheet


def get_timesheet(
    cache_repo: CacheRepository, client: RemoteClient, span: Span
) -> Timesheet:
    backfill_missing_issues(cache_repo, client)
    return generate_timesheet(cache_repo.get_cache(), span)


def timesheet_data(span: Span, project_id: Optional[int] = None) -> str:
    data: dict[str, Any] = {"span": span}
    if project_id is not None:
        data["project_id"] = project_id
    return json.dumps(data)


def span_item(
    span: Span, server_url: Optional[str], user_id: Optional[int]
) -> Item:
    label = span_label(span)
    item = get_item_template(label, f"Generate a timesheet for {label}")
    item["autocomplete"] = label
    item["valid"] = True
    item["arg"] = get_item_arg(TIMESHEET_KEYWORD, timesheet_data(span))
    if server_url is not None and user_id is not None:
        item["alt_subtitle"] = f"Open the timesheet for {label}"
        item["alt_arg"] = get_action_arg(
            get_open_url_action(timesheet_url(server_url, span, user_id))
        )
    return item


def span_items(
    query: str,
    server_url: Optional[str],
    user_id: Optional[int],
    today: Optional[pendulum.Date] = None,
) -> list[Item]:
    """Suggest spans for the query; anything starting with a digit is parsed."""
    items: list[Item] = []
    for keyword in SPAN_KEYWORDS:
        if fuzzy_matches(keyword, query):
            items.append(span_item(parse_span(keyword, today), server_url, user_id))

    if re.match(r"^\d", query.strip()):
        try:
            span = parse_span(query, today)
        except SpanParseError as e:
            items.append(get_error_item(e))
        else:
            items.append(span_item(span, server_url, user_id))

    if len(items) == 0:
        items.append(get_item_template("No entries"))
    return items


def __project_bucket_item(bucket: ProjectBucket, span: Span) -> Item:
    item = get_item_template(bucket["name"], f"{bucket['total']:.2f}")
    item["uid"] = f"redlinetimesheet-{bucket['id']}"
    item["autocomplete"] = bucket["name"]
    item["valid"] = True
    item["arg"] = get_item_arg(TIMESHEET_KEYWORD, timesheet_data(span, bucket["id"]))
    return item


def __issue_bucket_item(bucket: IssueBucket, server_url: Optional[str]) -> Item:
    item = get_item_template(bucket["name"], f"{bucket['total']:.2f}")
    item["autocomplete"] = bucket["name"]
    if bucket["id"] is not None and server_url is not None:
        item["uid"] = f"redlinetimesheet-issue-{bucket['id']}"
        item["valid"] = True
        item["arg"] = get_action_arg(
            get_open_url_action(issue_url(server_url, bucket["id"]))
        )
    return item


def timesheet_items(
    timesheet: Timesheet,
    span: Span,
    query: str,
    server_url: Optional[str],
    user_id: Optional[int],
    project_id: Optional[int] = None,
) -> list[Item]:
    """
    List the timesheet's project buckets, or the issue buckets of one project,
    behind a "Total hours" item covering whatever the query left in the list.
    """
    label = span_label(span)
    items: list[Item] = []
    total = 0.0

    if project_id is None:
        for project_bucket in timesheet["projects"]:
            if fuzzy_matches(project_bucket["name"], query):
                items.append(__project_bucket_item(project_bucket, span))
                total += project_bucket["total"]
        items.sort(key=lambda item: item["title"])
    else:
        for project_bucket in timesheet["projects"]:
            if project_bucket["id"] != project_id:
                continue
            label = f"{label} on {project_bucket['name']}"
            for issue_bucket in project_bucket["issues"]:
                if fuzzy_matches(issue_bucket["name"], query):
                    items.append(__issue_bucket_item(issue_bucket, server_url))
                    total += issue_bucket["total"]

    if len(items) == 0:
        return [get_item_template("No entries")]

    total_item = get_item_template(
        f"Total hours {label}: {total:.2f}", "Open the timesheet report"
    )
    total_item["autocomplete"] = query
    if server_url is not None and user_id is not None:
        total_item["valid"] = True
        total_item["arg"] = get_action_arg(
            get_open_url_action(timesheet_url(server_url, span, user_id))
        )
    return [total_item] + items
