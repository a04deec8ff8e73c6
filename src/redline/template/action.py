# SPDX-License-Identifier: MIT

from redline.model.action import (
    ChangeServerAction,
    OpenUrlAction,
    SetOptionAction,
    UpdateIssueAction,
)
from redline.model.action_type import ActionType
from redline.model.issue import IssueUpdate


def get_open_url_action(url: str) -> OpenUrlAction:
    return {"action_type": ActionType.OPEN_URL, "url": url}


def get_update_issue_action(issue_id: int, update: IssueUpdate) -> UpdateIssueAction:
    return {
        "action_type": ActionType.UPDATE_ISSUE,
        "issue_id": issue_id,
        "update": update,
    }


def get_change_server_action(url: str) -> ChangeServerAction:
    return {"action_type": ActionType.CHANGE_SERVER, "url": url}


def get_set_option_action(key: str, value: bool | int | str | None) -> SetOptionAction:
    return {"action_type": ActionType.SET_OPTION, "key": key, "value": value}
