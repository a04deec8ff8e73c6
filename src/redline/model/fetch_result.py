# SPDX-License-Identifier: MIT

from typing import TypedDict

from redline.model.issue import Issue
from redline.model.issue_status import IssueStatus
from redline.model.project import Project
from redline.model.resource_kind import ResourceKind
from redline.model.time_entry import TimeEntry
from redline.model.user import User


class FetchResult(TypedDict):
    kind: ResourceKind


class UserResult(FetchResult):
    user: User


class IssuesResult(FetchResult):
    issues: list[Issue]


class StatusesResult(FetchResult):
    issue_statuses: list[IssueStatus]


class ProjectsResult(FetchResult):
    projects: list[Project]


class EntriesResult(FetchResult):
    time_entries: list[TimeEntry]


FetchResults = (
    UserResult | IssuesResult | StatusesResult | ProjectsResult | EntriesResult
)
