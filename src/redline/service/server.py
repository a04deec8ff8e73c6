# SPDX-License-Identifier: MIT

from typing import Optional

import httpx

from redline.model.item import Item
from redline.template.action import get_change_server_action
from redline.template.item import get_action_arg, get_item_template


def parse_server_url(text: str) -> Optional[str]:
    """Return the normalized server URL, or None when text is not an http(s) URL."""
    try:
        url = httpx.URL(text.strip())
    except httpx.InvalidURL:
        return None
    if url.scheme not in ("http", "https") or not url.host:
        return None
    return str(url).rstrip("/")


def server_items(redmine_url: Optional[str], query: str) -> list[Item]:
    if query.strip() == "":
        if redmine_url:
            return [get_item_template("Current server", redmine_url)]
        return [get_item_template("Use server at...", "Enter a URL")]

    item = get_item_template("Use server at...", query.strip())
    url = parse_server_url(query)
    if url is not None:
        item["valid"] = True
        item["arg"] = get_action_arg(get_change_server_action(url))
    return [item]
