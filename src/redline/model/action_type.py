# SPDX-License-Identifier: MIT

from enum import StrEnum


class ActionType(StrEnum):
    OPEN_URL = "open_url"
    UPDATE_ISSUE = "update_issue"
    CHANGE_SERVER = "change_server"
    SET_OPTION = "set_option"
