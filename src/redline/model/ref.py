# SPDX-License-Identifier: MIT

from typing import TypedDict


class Ref(TypedDict):
    """An id/name pair Redmine embeds in place of a full related object."""

    id: int
    name: str
