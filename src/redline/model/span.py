# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

# "from" and "to" are inclusive YYYY-MM-DD dates
Span = TypedDict(
    "Span",
    {
        "name": str,
        "label": Optional[str],
        "from": str,
        "to": str,
    },
)
