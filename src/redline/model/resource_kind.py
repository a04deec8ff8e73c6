# SPDX-License-Identifier: MIT

from enum import StrEnum


class ResourceKind(StrEnum):
    USER = "user"
    ISSUES = "issues"
    ISSUE_STATUSES = "issue_statuses"
    PROJECTS = "projects"
    TIME_ENTRIES = "time_entries"
