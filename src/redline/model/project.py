# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict


class Project(TypedDict):
    id: int
    name: str
    description: Optional[str]
    created_on: Optional[str]
    updated_on: Optional[str]
    is_public: bool
