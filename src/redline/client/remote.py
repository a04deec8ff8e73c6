# SPDX-License-Identifier: MIT

from typing import Protocol

from redline.model.issue import Issue, IssueUpdate
from redline.model.issue_status import IssueStatus
from redline.model.project import Project
from redline.model.time_entry import TimeEntry
from redline.model.user import User


class RemoteClient(Protocol):
    """What the services need from a Redmine connection."""

    def get_user(self) -> User: ...

    def get_issues(self) -> list[Issue]: ...

    def get_issue_statuses(self) -> list[IssueStatus]: ...

    def get_projects(self) -> list[Project]: ...

    def get_time_entries(self, days_back: int) -> list[TimeEntry]: ...

    def get_issue(self, id: int) -> Issue: ...

    def update_issue(self, id: int, update: IssueUpdate) -> None: ...
