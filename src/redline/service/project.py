# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from redline import time
from redline.model.cache import Cache
from redline.model.issue import Issue
from redline.model.item import Item
from redline.model.project import Project
from redline.query.filter import closed_status_ids, is_open
from redline.query.fuzzy import fuzzy_matches
from redline.service.issue import ISSUES_KEYWORD, issues_data
from redline.service.url import project_url
from redline.template.action import get_open_url_action
from redline.template.item import get_action_arg, get_item_arg, get_item_template


def partition_projects(cache: Cache) -> tuple[list[Project], list[Project]]:
    """
    Split projects into active ones, with at least one open issue, and
    recently active ones, with issues but none open. Projects without any
    cached issue are in neither list. Both keep the cache order.
    """
    closed_ids = closed_status_ids(cache["issue_statuses"])
    with_issues: set[int] = set()
    with_open_issues: set[int] = set()
    for issue in cache["issues"]:
        with_issues.add(issue["project"]["id"])
        if is_open(issue, closed_ids):
            with_open_issues.add(issue["project"]["id"])

    active = [
        project for project in cache["projects"] if project["id"] in with_open_issues
    ]
    recently_active = [
        project
        for project in cache["projects"]
        if project["id"] in with_issues and project["id"] not in with_open_issues
    ]
    return active, recently_active


def project_open_issues(cache: Cache, project_id: int) -> list[Issue]:
    closed_ids = closed_status_ids(cache["issue_statuses"])
    return [
        issue
        for issue in cache["issues"]
        if issue["project"]["id"] == project_id and is_open(issue, closed_ids)
    ]


def soonest_due_date(issues: list[Issue]) -> Optional[str]:
    due_dates = [issue["due_date"] for issue in issues if issue["due_date"]]
    # ISO dates, so the smallest string is the soonest date
    return min(due_dates) if due_dates else None


def project_item(project: Project, server_url: Optional[str]) -> Item:
    item = get_item_template(project["name"])
    item["uid"] = f"redlineproject-{project['id']}"
    item["autocomplete"] = project["name"]
    item["valid"] = True
    item["arg"] = get_item_arg(ISSUES_KEYWORD, issues_data(project["id"]))
    if server_url is not None:
        item["alt_subtitle"] = "Open this project in Redmine"
        item["alt_arg"] = get_action_arg(
            get_open_url_action(project_url(server_url, project["id"]))
        )
    return item


def project_items(
    cache: Cache,
    query: str,
    server_url: Optional[str],
    today: Optional[pendulum.Date] = None,
) -> list[Item]:
    """
    Active projects with their open issue count and soonest due date, then
    recently active projects, each filtered by name.
    """
    active, recently_active = partition_projects(cache)
    items: list[Item] = []

    for project in active:
        if not fuzzy_matches(project["name"], query):
            continue
        issues = project_open_issues(cache, project["id"])
        item = project_item(project, server_url)
        item["subtitle"] = f"{len(issues)} issues"
        due_date = soonest_due_date(issues)
        if due_date is not None:
            item["subtitle"] += (
                f", first is due {time.iso_str_to_human_str(due_date, today)}"
            )
        items.append(item)

    for project in recently_active:
        if fuzzy_matches(project["name"], query):
            items.append(project_item(project, server_url))

    return items
