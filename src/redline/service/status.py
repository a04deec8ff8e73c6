# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from redline.model.cache import Cache
from redline.model.item import Item
from redline.service.issue import my_open_issue_items
from redline.template.item import get_item_template


def status_items(
    cache: Cache,
    server_url: Optional[str],
    refresh_error: Optional[Exception] = None,
    today: Optional[pendulum.Date] = None,
) -> list[Item]:
    if refresh_error is not None:
        return [get_item_template("Error syncing with Redmine", str(refresh_error))]

    items = my_open_issue_items(cache, server_url, today)
    if len(items) == 0:
        items.append(get_item_template("Nothing assigned to you"))
    return items
