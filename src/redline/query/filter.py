# SPDX-License-Identifier: MIT

from typing import Optional

from redline.model.issue import Issue
from redline.model.issue_status import IssueStatus
from redline.query.fuzzy import fuzzy_matches

ISSUE_MATCH_FIELDS = ("subject", "id", "project")


def closed_status_ids(issue_statuses: list[IssueStatus]) -> set[int]:
    return {status["id"] for status in issue_statuses if status["is_closed"]}


def is_open(issue: Issue, closed_ids: set[int]) -> bool:
    return issue["status"]["id"] not in closed_ids


def open_issues(
    issues: list[Issue],
    issue_statuses: list[IssueStatus],
    project_id: Optional[int] = None,
) -> list[Issue]:
    closed_ids = closed_status_ids(issue_statuses)
    return [
        issue
        for issue in issues
        if is_open(issue, closed_ids)
        and (project_id is None or issue["project"]["id"] == project_id)
    ]


def parse_match_fields(match_fields: str) -> list[str]:
    """
    Turn a comma separated field list into the known match fields.

    Unknown names are dropped; an empty result falls back to the subject.
    """
    fields = [field.strip().lower() for field in match_fields.split(",")]
    known_fields = [field for field in fields if field in ISSUE_MATCH_FIELDS]
    return known_fields or ["subject"]


def issue_match_keys(issue: Issue, match_fields: list[str]) -> list[str]:
    keys = []
    for field in match_fields:
        match field:
            case "subject":
                keys.append(issue["subject"])
            case "id":
                keys.append(str(issue["id"]))
            case "project":
                keys.append(f"{issue['project']['name']} {issue['subject']}")
    return keys


def issue_matches(issue: Issue, query: str, match_fields: list[str]) -> bool:
    return any(
        fuzzy_matches(key, query) for key in issue_match_keys(issue, match_fields)
    )


def match_issues(
    issues: list[Issue], query: str, match_fields: list[str]
) -> list[Issue]:
    return [issue for issue in issues if issue_matches(issue, query, match_fields)]
