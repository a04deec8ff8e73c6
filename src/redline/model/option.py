# SPDX-License-Identifier: MIT

from typing import Callable, TypeAlias, TypedDict

from redline.configuration import Configuration
from redline.model.option_kind import OptionKind

OptionValue: TypeAlias = bool | int | str | None


class Option(TypedDict):
    key: str
    kind: OptionKind
    description: str
    getter: Callable[[Configuration], OptionValue]
    setter: Callable[[Configuration, OptionValue], None]
