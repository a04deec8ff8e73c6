# SPDX-License-Identifier: MIT

from typing import TypedDict


class IssueStatus(TypedDict):
    id: int
    name: str
    is_default: bool
    is_closed: bool
