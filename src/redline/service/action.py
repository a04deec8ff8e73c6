# SPDX-License-Identifier: MIT

import json
import logging
import shlex
import subprocess
import sys
from typing import Any, Callable, Optional, cast

from redline.client.remote import RemoteClient
from redline.model.action import (
    Actions,
    ChangeServerAction,
    OpenUrlAction,
    SetOptionAction,
    UpdateIssueAction,
)
from redline.model.action_type import ActionType
from redline.model.issue import IssueUpdate
from redline.repository.cache import CacheRepository
from redline.repository.configuration import ConfigurationRepository
from redline.service.option import apply_option
from redline.service.server import parse_server_url
from redline.template.action import (
    get_change_server_action,
    get_open_url_action,
    get_set_option_action,
    get_update_issue_action,
)

logger = logging.getLogger(__name__)

UPDATE_FIELDS: dict[str, type] = {
    "status_id": int,
    "subject": str,
    "done_ratio": int,
    "due_date": str,
    "assigned_to_id": int,
    "priority_id": int,
    "notes": str,
}


class ActionDecodeError(ValueError):
    pass


class ActionError(Exception):
    pass


def __require(raw: dict[str, Any], key: str, kind: type) -> Any:
    value = raw.get(key)
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ActionDecodeError(f"Action field '{key}' must be {kind.__name__}")
    return value


def __decode_update(raw_update: Any) -> IssueUpdate:
    if not isinstance(raw_update, dict) or len(raw_update) == 0:
        raise ActionDecodeError("Issue update must be a non-empty object")
    update: dict[str, Any] = {}
    for key, value in raw_update.items():
        if key not in UPDATE_FIELDS:
            raise ActionDecodeError(f"Unknown issue field '{key}'")
        update[key] = __require(raw_update, key, UPDATE_FIELDS[key])
    return cast(IssueUpdate, update)


def decode_action(data: str) -> Actions:
    """Decode the JSON payload an item carries into exactly one action."""
    try:
        raw = json.loads(data)
    except ValueError as e:
        raise ActionDecodeError(f"Invalid action payload: {e}") from e
    if not isinstance(raw, dict):
        raise ActionDecodeError("Action payload must be an object")

    try:
        action_type = ActionType(raw.get("action_type"))
    except ValueError as e:
        raise ActionDecodeError(
            f"Unknown action type {raw.get('action_type')!r}"
        ) from e

    match action_type:
        case ActionType.OPEN_URL:
            return get_open_url_action(__require(raw, "url", str))
        case ActionType.UPDATE_ISSUE:
            return get_update_issue_action(
                __require(raw, "issue_id", int), __decode_update(raw.get("update"))
            )
        case ActionType.CHANGE_SERVER:
            return get_change_server_action(__require(raw, "url", str))
        case ActionType.SET_OPTION:
            value = raw.get("value")
            if value is not None and not isinstance(value, (bool, int, str)):
                raise ActionDecodeError("Option value must be a bool, int or string")
            return get_set_option_action(__require(raw, "key", str), value)


def default_open_command() -> str:
    if sys.platform == "darwin":
        return "open"
    return "xdg-open"


def open_url(url: str, open_command: Optional[str] = None) -> None:
    command = shlex.split(open_command or default_open_command()) + [url]
    logger.info("Opening URL %s", url)
    try:
        subprocess.run(command, check=True, capture_output=True)
    except (OSError, subprocess.CalledProcessError) as e:
        raise ActionError(f"Unable to open {url}: {e}") from e


def dispatch(
    action: Actions,
    config_repo: ConfigurationRepository,
    cache_repo: CacheRepository,
    get_client: Callable[[], RemoteClient],
) -> str:
    """
    Execute one action and return a short status message.

    The client is only requested by actions that talk to the server.
    """
    logger.debug("Dispatching %s", action["action_type"])

    match action["action_type"]:
        case ActionType.OPEN_URL:
            url = cast(OpenUrlAction, action)["url"]
            open_url(url, config_repo.get_config()["open_command"])
            return ""

        case ActionType.UPDATE_ISSUE:
            update_action = cast(UpdateIssueAction, action)
            issue_id = update_action["issue_id"]
            client = get_client()
            client.update_issue(issue_id, update_action["update"])
            issue = client.get_issue(issue_id)
            if not cache_repo.patch_issue(issue):
                logger.debug("Issue %s is not cached, nothing to patch", issue_id)
            return f"Updated issue {issue_id}"

        case ActionType.CHANGE_SERVER:
            url = cast(ChangeServerAction, action)["url"]
            server_url = parse_server_url(url)
            if server_url is None:
                raise ActionError(f"Not a server URL: {url}")
            config_repo.update_config(redmine_url=server_url)
            config_repo.flush()
            return f"Using server at {server_url}"

        case ActionType.SET_OPTION:
            option_action = cast(SetOptionAction, action)
            config_repo.set_config(
                apply_option(
                    config_repo.get_config(),
                    option_action["key"],
                    option_action["value"],
                )
            )
            config_repo.flush()
            return "Updated options"

    raise ActionError(f"Unhandled action {action['action_type']}")
