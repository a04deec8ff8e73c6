# SPDX-License-Identifier: MIT

from typing import TypedDict

from redline.model.action_type import ActionType
from redline.model.issue import IssueUpdate


class Action(TypedDict):
    action_type: ActionType


class OpenUrlAction(Action):
    url: str


class UpdateIssueAction(Action):
    issue_id: int
    update: IssueUpdate


class ChangeServerAction(Action):
    url: str


class SetOptionAction(Action):
    key: str
    value: bool | int | str | None


Actions = OpenUrlAction | UpdateIssueAction | ChangeServerAction | SetOptionAction
