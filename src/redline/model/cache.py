# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from redline.model.issue import Issue
from redline.model.issue_status import IssueStatus
from redline.model.project import Project
from redline.model.time_entry import TimeEntry
from redline.model.user import User


class Cache(TypedDict):
    refreshed: Optional[pendulum.DateTime]
    user: Optional[User]
    issues: list[Issue]
    issue_statuses: list[IssueStatus]
    projects: list[Project]
    time_entries: list[TimeEntry]


class Snapshot(TypedDict):
    """The five collections fetched together by a refresh."""

    user: User
    issues: list[Issue]
    issue_statuses: list[IssueStatus]
    projects: list[Project]
    time_entries: list[TimeEntry]
