# SPDX-License-Identifier: MIT

"""
Blocking Redmine REST client.

One request per call, no retries. Every failure, whether transport, HTTP
status or an undecodable body, surfaces as RedmineAPIError.
"""

import logging
from typing import Any, Optional

import httpx
import pendulum

from redline import time
from redline.model.issue import Issue, IssueUpdate
from redline.model.issue_status import IssueStatus
from redline.model.project import Project
from redline.model.ref import Ref
from redline.model.time_entry import TimeEntry
from redline.model.user import User

logger = logging.getLogger(__name__)

PAGE_LIMIT = 100


class RedmineAPIError(Exception):
    def __init__(self, code: str, message: str, status_code: int = 0):
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class RedmineClient:
    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        verify: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key

        headers = {"Content-Type": "application/json"}
        auth: Optional[httpx.BasicAuth] = None
        if api_key:
            headers["X-Redmine-API-Key"] = api_key
        elif username is not None and password is not None:
            auth = httpx.BasicAuth(username, password)

        self._client = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            auth=auth,
            verify=verify,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "RedmineClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json_body: Optional[Any] = None,
    ) -> Any:
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = self._client.request(
                method, path, params=params, json=json_body
            )
        except httpx.HTTPError as e:
            raise RedmineAPIError("transport_error", f"{method} {path}: {e}") from e

        if response.status_code == 401:
            raise RedmineAPIError(
                "unauthorized", "Invalid Redmine API key or credentials", 401
            )
        if response.status_code == 403:
            raise RedmineAPIError(
                "forbidden", "Insufficient permissions for this operation", 403
            )
        if response.status_code == 404:
            raise RedmineAPIError("not_found", f"Not found: {path}", 404)
        if response.status_code == 422:
            raise RedmineAPIError(
                "validation_error",
                f"Rejected by Redmine: {self.__error_messages(response)}",
                422,
            )
        if response.status_code < 200 or response.status_code >= 400:
            raise RedmineAPIError(
                "upstream_error",
                f"Redmine returned {response.status_code} for {path}",
                response.status_code,
            )

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise RedmineAPIError(
                "decode_error", f"Invalid JSON from {path}", response.status_code
            ) from e

    def __error_messages(self, response: httpx.Response) -> str:
        try:
            return ", ".join(response.json().get("errors", []))
        except ValueError:
            return response.text

    def _get_paginated(
        self, path: str, key: str, params: Optional[dict[str, Any]] = None
    ) -> list[dict[str, Any]]:
        query = dict(params or {})
        query["limit"] = PAGE_LIMIT

        items: list[dict[str, Any]] = []
        while True:
            query["offset"] = len(items)
            data = self._request("GET", path, params=query)
            try:
                page = data[key]
                total_count = int(data.get("total_count", len(page)))
            except (KeyError, TypeError, ValueError) as e:
                raise RedmineAPIError(
                    "decode_error", f"Unexpected response from {path}"
                ) from e

            items.extend(page)
            if len(page) == 0 or len(items) >= total_count:
                return items

    def get_user(self) -> User:
        data = self._request("GET", "/users/current.json")
        return convert_user(self.__unwrap(data, "user"))

    def get_issues(self) -> list[Issue]:
        """Issues watched by the current user, open and closed."""
        raw_issues = self._get_paginated(
            "/issues.json", "issues", {"watcher_id": "me", "status_id": "*"}
        )
        return [convert_issue(raw_issue) for raw_issue in raw_issues]

    def get_issue(self, id: int) -> Issue:
        data = self._request("GET", f"/issues/{id}.json")
        return convert_issue(self.__unwrap(data, "issue"))

    def update_issue(self, id: int, update: IssueUpdate) -> None:
        logger.info("Updating issue %s with %s", id, update)
        self._request("PUT", f"/issues/{id}.json", json_body={"issue": update})

    def get_issue_statuses(self) -> list[IssueStatus]:
        data = self._request("GET", "/issue_statuses.json")
        raw_statuses = self.__unwrap(data, "issue_statuses")
        return [convert_issue_status(raw_status) for raw_status in raw_statuses]

    def get_projects(self) -> list[Project]:
        raw_projects = self._get_paginated("/projects.json", "projects")
        return [convert_project(raw_project) for raw_project in raw_projects]

    def get_time_entries(
        self, days_back: int, today: Optional[pendulum.Date] = None
    ) -> list[TimeEntry]:
        """The current user's time entries from days_back days ago until today."""
        if today is None:
            today = time.today_local()
        since = time.date_to_iso_str(today.subtract(days=days_back))
        until = time.date_to_iso_str(today)
        raw_entries = self._get_paginated(
            "/time_entries.json",
            "time_entries",
            {"user_id": "me", "spent_on": f"><{since}|{until}"},
        )
        return [convert_time_entry(raw_entry) for raw_entry in raw_entries]

    def __unwrap(self, data: Any, key: str) -> Any:
        try:
            return data[key]
        except (KeyError, TypeError) as e:
            raise RedmineAPIError(
                "decode_error", f"Response is missing '{key}'"
            ) from e


def login(base_url: str, username: str, password: str, verify: bool = True) -> str:
    """Exchange a username and password for the account's API key."""
    with RedmineClient(
        base_url, username=username, password=password, verify=verify
    ) as client:
        user = client.get_user()
    if not user["api_key"]:
        raise RedmineAPIError(
            "no_api_key", "The REST API key is not enabled for this account"
        )
    return user["api_key"]


def convert_ref(raw_ref: Optional[dict[str, Any]]) -> Optional[Ref]:
    if raw_ref is None:
        return None
    return {"id": int(raw_ref["id"]), "name": str(raw_ref.get("name", ""))}


def convert_required_ref(raw_ref: Optional[dict[str, Any]]) -> Ref:
    return convert_ref(raw_ref) or {"id": 0, "name": ""}


def convert_user(raw_user: dict[str, Any]) -> User:
    try:
        return {
            "id": int(raw_user["id"]),
            "login": raw_user.get("login", ""),
            "mail": raw_user.get("mail"),
            "api_key": raw_user.get("api_key"),
            "last_login_on": raw_user.get("last_login_on"),
        }
    except (KeyError, TypeError, ValueError) as e:
        raise RedmineAPIError("decode_error", f"Malformed user: {e}") from e


def convert_project(raw_project: dict[str, Any]) -> Project:
    try:
        return {
            "id": int(raw_project["id"]),
            "name": raw_project["name"],
            "description": raw_project.get("description"),
            "created_on": raw_project.get("created_on"),
            "updated_on": raw_project.get("updated_on"),
            "is_public": bool(raw_project.get("is_public", False)),
        }
    except (KeyError, TypeError, ValueError) as e:
        raise RedmineAPIError("decode_error", f"Malformed project: {e}") from e


def convert_issue_status(raw_status: dict[str, Any]) -> IssueStatus:
    try:
        return {
            "id": int(raw_status["id"]),
            "name": raw_status["name"],
            "is_default": bool(raw_status.get("is_default", False)),
            "is_closed": bool(raw_status.get("is_closed", False)),
        }
    except (KeyError, TypeError, ValueError) as e:
        raise RedmineAPIError("decode_error", f"Malformed issue status: {e}") from e


def convert_issue(raw_issue: dict[str, Any]) -> Issue:
    try:
        return {
            "id": int(raw_issue["id"]),
            "subject": raw_issue.get("subject", ""),
            "project": convert_required_ref(raw_issue.get("project")),
            "status": convert_required_ref(raw_issue.get("status")),
            "priority": convert_required_ref(raw_issue.get("priority")),
            "assigned_to": convert_ref(raw_issue.get("assigned_to")),
            "due_date": raw_issue.get("due_date") or None,
            "description": raw_issue.get("description"),
            "estimated_hours": raw_issue.get("estimated_hours"),
            "spent_hours": raw_issue.get("spent_hours"),
            "done_ratio": int(raw_issue.get("done_ratio") or 0),
            "created_on": raw_issue.get("created_on"),
            "updated_on": raw_issue.get("updated_on"),
        }
    except (KeyError, TypeError, ValueError) as e:
        raise RedmineAPIError("decode_error", f"Malformed issue: {e}") from e


def convert_time_entry(raw_entry: dict[str, Any]) -> TimeEntry:
    try:
        raw_issue = raw_entry.get("issue")
        return {
            "id": int(raw_entry["id"]),
            "hours": float(raw_entry["hours"]),
            "spent_on": raw_entry["spent_on"],
            "user": convert_required_ref(raw_entry.get("user")),
            "project": convert_required_ref(raw_entry.get("project")),
            "activity": convert_required_ref(raw_entry.get("activity")),
            "issue_id": int(raw_issue["id"]) if raw_issue else None,
            "comments": raw_entry.get("comments"),
        }
    except (KeyError, TypeError, ValueError) as e:
        raise RedmineAPIError("decode_error", f"Malformed time entry: {e}") from e
