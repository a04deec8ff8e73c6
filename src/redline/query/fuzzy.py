# SPDX-License-Identifier: MIT

from typing import Optional


def fuzzy_matches(candidate: Optional[str], pattern: str) -> bool:
    """
    Case-insensitive ordered subsequence match.

    Every non-space character of the pattern must appear in the candidate in
    the same order, not necessarily next to each other. An empty pattern
    matches everything, including a missing candidate.
    """
    needle = "".join(pattern.lower().split())
    if needle == "":
        return True
    if candidate is None:
        return False

    position = 0
    haystack = candidate.lower()
    for char in needle:
        position = haystack.find(char, position)
        if position == -1:
            return False
        position += 1
    return True
