import threading
from pathlib import Path
from typing import Optional

import pendulum
import pytest

from redline.model.cache import Snapshot
from redline.model.issue import Issue, IssueUpdate
from redline.model.issue_status import IssueStatus
from redline.model.project import Project
from redline.model.time_entry import TimeEntry
from redline.model.user import User
from redline.repository.cache import CacheRepository
from redline.repository.configuration import ConfigurationRepository
from redline import state

USER_ID = 7
SERVER_URL = "https://redmine.test"


def make_user(id: int = USER_ID) -> User:
    return {
        "id": id,
        "login": "jdoe",
        "mail": "jdoe@example.com",
        "api_key": "secret",
        "last_login_on": None,
    }


def make_status(id: int, name: str, is_closed: bool = False) -> IssueStatus:
    return {"id": id, "name": name, "is_default": id == 1, "is_closed": is_closed}


def make_project(id: int, name: str) -> Project:
    return {
        "id": id,
        "name": name,
        "description": None,
        "created_on": None,
        "updated_on": None,
        "is_public": True,
    }


def make_issue(
    id: int,
    subject: str = "",
    project_id: int = 1,
    project_name: str = "Alpha",
    status_id: int = 1,
    priority_id: int = 2,
    assigned_to_id: Optional[int] = None,
    due_date: Optional[str] = None,
) -> Issue:
    return {
        "id": id,
        "subject": subject or f"Issue {id}",
        "project": {"id": project_id, "name": project_name},
        "status": {"id": status_id, "name": "Closed" if status_id == 2 else "New"},
        "priority": {"id": priority_id, "name": f"P{priority_id}"},
        "assigned_to": (
            {"id": assigned_to_id, "name": "Someone"}
            if assigned_to_id is not None
            else None
        ),
        "due_date": due_date,
        "description": None,
        "estimated_hours": None,
        "spent_hours": None,
        "done_ratio": 0,
        "created_on": None,
        "updated_on": None,
    }


def make_entry(
    id: int,
    spent_on: str,
    hours: float,
    project_id: int = 1,
    project_name: str = "Alpha",
    issue_id: Optional[int] = None,
) -> TimeEntry:
    return {
        "id": id,
        "hours": hours,
        "spent_on": spent_on,
        "user": {"id": USER_ID, "name": "J Doe"},
        "project": {"id": project_id, "name": project_name},
        "activity": {"id": 9, "name": "Development"},
        "issue_id": issue_id,
        "comments": None,
    }


def make_snapshot(
    issues: Optional[list[Issue]] = None,
    projects: Optional[list[Project]] = None,
    time_entries: Optional[list[TimeEntry]] = None,
) -> Snapshot:
    return {
        "user": make_user(),
        "issues": issues if issues is not None else [make_issue(1), make_issue(2)],
        "issue_statuses": [make_status(1, "New"), make_status(2, "Closed", True)],
        "projects": (
            projects if projects is not None else [make_project(1, "Alpha")]
        ),
        "time_entries": time_entries or [],
    }


class FakeClient:
    """In-memory stand-in for RedmineClient, one canned answer per call."""

    def __init__(
        self,
        snapshot: Optional[Snapshot] = None,
        fail: Optional[str] = None,
        extra_issues: Optional[list[Issue]] = None,
    ) -> None:
        self.snapshot = snapshot or make_snapshot()
        self.fail = fail
        self.extra_issues = {issue["id"]: issue for issue in extra_issues or []}
        self.calls: list[str] = []
        self.updates: list[tuple[int, IssueUpdate]] = []
        self.lock = threading.Lock()

    def __call(self, name: str) -> None:
        with self.lock:
            self.calls.append(name)
        if self.fail == name:
            raise RuntimeError(f"{name} failed")

    def get_user(self) -> User:
        self.__call("get_user")
        return self.snapshot["user"]

    def get_issues(self) -> list[Issue]:
        self.__call("get_issues")
        return self.snapshot["issues"]

    def get_issue_statuses(self) -> list[IssueStatus]:
        self.__call("get_issue_statuses")
        return self.snapshot["issue_statuses"]

    def get_projects(self) -> list[Project]:
        self.__call("get_projects")
        return self.snapshot["projects"]

    def get_time_entries(self, days_back: int) -> list[TimeEntry]:
        self.__call("get_time_entries")
        return self.snapshot["time_entries"]

    def get_issue(self, id: int) -> Issue:
        self.__call("get_issue")
        if id in self.extra_issues:
            return self.extra_issues[id]
        for issue in self.snapshot["issues"]:
            if issue["id"] == id:
                return issue
        raise LookupError(id)

    def update_issue(self, id: int, update: IssueUpdate) -> None:
        self.__call("update_issue")
        self.updates.append((id, update))


@pytest.fixture
def now() -> pendulum.DateTime:
    return pendulum.datetime(2024, 1, 10, 12, 0, 0, tz="UTC")


@pytest.fixture
def cache_repo(tmp_path: Path) -> CacheRepository:
    return CacheRepository(tmp_path / "cache.yaml")


@pytest.fixture
def config_repo(tmp_path: Path) -> ConfigurationRepository:
    return ConfigurationRepository(tmp_path / "config.yaml")


@pytest.fixture
def app_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point the process-wide repositories at a temporary directory."""
    config_repo = ConfigurationRepository(tmp_path / "config" / "config.yaml")
    cache_repo = CacheRepository(tmp_path / "cache" / "cache.yaml")
    state.set_config_repo(config_repo)
    state.set_cache_repo(cache_repo)
    yield config_repo, cache_repo
    state.set_config_repo(None)
    state.set_cache_repo(None)
