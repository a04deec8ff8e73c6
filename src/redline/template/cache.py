# SPDX-License-Identifier: MIT

from redline.model.cache import Cache


def get_cache_template() -> Cache:
    return {
        "refreshed": None,
        "user": None,
        "issues": [],
        "issue_statuses": [],
        "projects": [],
        "time_entries": [],
    }
