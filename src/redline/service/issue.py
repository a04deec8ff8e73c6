# SPDX-License-Identifier: MIT

import json
import logging
from typing import Optional

import pendulum

from redline import time
from redline.model.cache import Cache
from redline.model.issue import Issue
from redline.model.item import Item
from redline.query.filter import match_issues, open_issues
from redline.query.fuzzy import fuzzy_matches
from redline.query.sort import is_assigned_to, sort_issues
from redline.service.url import issue_url, issues_url
from redline.template.action import get_open_url_action, get_update_issue_action
from redline.template.item import get_action_arg, get_item_template

logger = logging.getLogger(__name__)

ISSUES_KEYWORD = "issues"
ISSUE_ID_SEPARATOR = ":"
MY_ISSUE_ICON = "icon_me.png"


class InvalidIssueIdError(LookupError):
    pass


def issues_data(project_id: int) -> str:
    return json.dumps({"project_id": project_id})


def get_issue_by_str_id(cache: Cache, id_str: str) -> Issue:
    try:
        id = int(id_str)
    except ValueError as e:
        raise InvalidIssueIdError(f"Invalid ID {id_str}") from e

    for issue in cache["issues"]:
        if issue["id"] == id:
            return issue
    raise InvalidIssueIdError(f"Invalid ID {id_str}")


def issue_subtitle(issue: Issue, today: Optional[pendulum.Date] = None) -> str:
    subtitle = f"{issue['id']} [{issue['project']['name']}]"
    if issue["due_date"]:
        subtitle += f" Due {time.iso_str_to_human_str(issue['due_date'], today)},"
    subtitle += f" {issue['priority']['name']}"
    return subtitle


def issue_item(
    issue: Issue,
    server_url: Optional[str],
    user_id: Optional[int],
    today: Optional[pendulum.Date] = None,
) -> Item:
    item = get_item_template(issue["subject"], issue_subtitle(issue, today))
    item["uid"] = f"redlineissue-{issue['id']}"
    item["autocomplete"] = f"{issue['id']}{ISSUE_ID_SEPARATOR} "
    if is_assigned_to(issue, user_id):
        item["icon"] = MY_ISSUE_ICON
    if server_url is not None:
        item["valid"] = True
        item["arg"] = get_action_arg(
            get_open_url_action(issue_url(server_url, issue["id"]))
        )
    return item


def issue_items(
    cache: Cache,
    query: str,
    match_fields: list[str],
    server_url: Optional[str],
    project_id: Optional[int] = None,
    today: Optional[pendulum.Date] = None,
) -> list[Item]:
    """
    List open issues matching the query, the current user's first.

    A query of the form "<id>: <facet>" shows that issue's details instead.
    """
    if ISSUE_ID_SEPARATOR in query:
        return issue_detail_items(cache, query)

    user_id = cache["user"]["id"] if cache["user"] is not None else None
    issues = open_issues(cache["issues"], cache["issue_statuses"], project_id)
    issues = match_issues(issues, query, match_fields)

    items = [
        issue_item(issue, server_url, user_id, today)
        for issue in sort_issues(issues, user_id)
    ]

    if query.strip() == "" and project_id is None and server_url is not None:
        view_all_item = get_item_template("View all on Redmine", "")
        view_all_item["valid"] = True
        view_all_item["arg"] = get_action_arg(
            get_open_url_action(issues_url(server_url))
        )
        items.insert(0, view_all_item)

    return items


def issue_detail_items(cache: Cache, query: str) -> list[Item]:
    """
    Details of one issue, addressed as "<id>: <facet>".

    Each facet whose name fuzzy matches is shown. Naming the "status" facet
    exactly lists every status as an update the user can pick.
    """
    id_str, _, facet = query.partition(ISSUE_ID_SEPARATOR)
    issue = get_issue_by_str_id(cache, id_str.strip())
    facet = facet.strip()
    prefix = f"{issue['id']}{ISSUE_ID_SEPARATOR} "
    items: list[Item] = []

    if fuzzy_matches("subject", facet):
        subject_item = get_item_template(f"subject: {issue['subject']}")
        subject_item["autocomplete"] = prefix + "subject"
        items.append(subject_item)

    if fuzzy_matches("status", facet):
        if facet == "status":
            for issue_status in cache["issue_statuses"]:
                status_item = get_item_template(issue_status["name"])
                if issue_status["id"] == issue["status"]["id"]:
                    status_item["subtitle"] = "Current status"
                status_item["valid"] = True
                status_item["arg"] = get_action_arg(
                    get_update_issue_action(
                        issue["id"], {"status_id": issue_status["id"]}
                    )
                )
                items.append(status_item)
        else:
            status_item = get_item_template(f"status: {issue['status']['name']}")
            status_item["autocomplete"] = prefix + "status"
            items.append(status_item)

    return items


def my_open_issue_items(
    cache: Cache,
    server_url: Optional[str],
    today: Optional[pendulum.Date] = None,
) -> list[Item]:
    """Open issues assigned to the current user, in listing order."""
    if cache["user"] is None:
        return []
    user_id = cache["user"]["id"]
    issues = [
        issue
        for issue in open_issues(cache["issues"], cache["issue_statuses"])
        if is_assigned_to(issue, user_id)
    ]
    return [
        issue_item(issue, server_url, user_id, today)
        for issue in sort_issues(issues, user_id)
    ]
