# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Mapping, Optional, TypeVar

from redline.model.issue import Issue

T = TypeVar("T", bound=Mapping[str, Any])


def lookup(item: Mapping[str, Any], column: str) -> Optional[Any]:
    """Resolve a dotted column such as "priority.id"; empty strings count as missing."""
    value: Any = item
    for key in column.split("."):
        if value is None:
            return None
        value = value.get(key)
    if value == "":
        return None
    return value


def sort_items(
    items: list[T], sort_instructions: list[str]
) -> list[T]:
    """
    Stable multi-column sort. Instructions are listed highest precedence
    first, each one "column" or "desc column". Missing values always sort
    after present ones.
    """
    sorted_items = deepcopy(items)

    for sort_instruction in reversed(sort_instructions):
        descending = False
        column = sort_instruction
        if " " in sort_instruction:
            direction, column = sort_instruction.split(" ")
            if direction == "desc":
                descending = True
        none_items = [item for item in sorted_items if lookup(item, column) is None]
        value_items = [
            item for item in sorted_items if lookup(item, column) is not None
        ]
        value_items.sort(key=lambda item: lookup(item, column), reverse=descending)
        sorted_items = value_items + none_items

    return sorted_items


def is_assigned_to(issue: Issue, user_id: Optional[int]) -> bool:
    return (
        user_id is not None
        and issue["assigned_to"] is not None
        and issue["assigned_to"]["id"] == user_id
    )


def sort_issues(issues: list[Issue], user_id: Optional[int]) -> list[Issue]:
    """
    Order issues by assignment to the user, then priority (highest first),
    then due date (soonest first, undated last), then original order.

    The passes run lowest precedence first and each one is stable. Due dates
    are zero-padded ISO strings, so string order is date order.
    """
    sorted_issues = sort_items(issues, ["desc priority.id", "due_date"])

    mine = [issue for issue in sorted_issues if is_assigned_to(issue, user_id)]
    others = [issue for issue in sorted_issues if not is_assigned_to(issue, user_id)]
    return mine + others
