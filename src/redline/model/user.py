# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict


class User(TypedDict):
    id: int
    login: str
    mail: Optional[str]
    api_key: Optional[str]
    last_login_on: Optional[str]
