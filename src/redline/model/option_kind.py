# SPDX-License-Identifier: MIT

from enum import StrEnum


class OptionKind(StrEnum):
    BOOL = "bool"
    INT = "int"
    TEXT = "text"
