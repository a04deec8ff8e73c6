# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from redline.model.ref import Ref


class TimeEntry(TypedDict):
    id: int
    hours: float
    spent_on: str  # YYYY-MM-DD
    user: Ref
    project: Ref
    activity: Ref
    issue_id: Optional[int]  # only the id, the issue itself lives in the cache
    comments: Optional[str]
