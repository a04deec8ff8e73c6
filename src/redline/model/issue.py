# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict

from redline.model.ref import Ref


class Issue(TypedDict):
    id: int
    subject: str
    project: Ref
    status: Ref
    priority: Ref
    assigned_to: Optional[Ref]
    due_date: Optional[str]  # YYYY-MM-DD
    description: Optional[str]
    estimated_hours: Optional[float]
    spent_hours: Optional[float]
    done_ratio: int
    created_on: Optional[str]
    updated_on: Optional[str]


class IssueUpdate(TypedDict):
    """Partial issue body sent with PUT /issues/:id.json"""

    status_id: NotRequired[int]
    subject: NotRequired[str]
    done_ratio: NotRequired[int]
    due_date: NotRequired[str]
    assigned_to_id: NotRequired[int]
    priority_id: NotRequired[int]
    notes: NotRequired[str]
