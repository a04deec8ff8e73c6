# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from redline.model.issue import Issue
from redline.model.project import Project


class IssueBucket(TypedDict):
    id: Optional[int]
    name: str
    issue: Optional[Issue]
    total: float


class ProjectBucket(TypedDict):
    id: int
    name: str
    project: Optional[Project]
    total: float
    issues: list[IssueBucket]


class Timesheet(TypedDict):
    total: float
    projects: list[ProjectBucket]
