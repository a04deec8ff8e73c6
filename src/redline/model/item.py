# SPDX-License-Identifier: MIT

from typing import Literal, NotRequired, Optional, TypedDict

ItemMode = Literal["filter", "do"]


class ItemArg(TypedDict):
    keyword: str
    mode: ItemMode
    data: Optional[str]  # JSON payload handed back to the keyword


class Item(TypedDict):
    """A single launcher result row."""

    uid: Optional[str]
    title: str
    subtitle: Optional[str]
    autocomplete: Optional[str]
    icon: Optional[str]
    valid: bool
    arg: Optional[ItemArg]
    alt_arg: NotRequired[Optional[ItemArg]]
    alt_subtitle: NotRequired[Optional[str]]
