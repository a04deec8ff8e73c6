# SPDX-License-Identifier: MIT

from typing import Optional

from redline.client.session import open_session
from redline.configuration import Configuration
from redline.model.cache import Cache
from redline.model.item import Item
from redline.service.refresh import check_refresh
from redline.state import get_cache_repo
from redline.template.item import get_error_item, get_item_template
from redline.view.item import items_view


def require_login(config: Configuration) -> bool:
    """Show how to connect when there is no server or API key yet."""
    if not config["redmine_url"]:
        items_view(
            [
                get_item_template(
                    "No Redmine server configured",
                    "Use the server command to set one",
                )
            ]
        )
        return False
    if not config["api_key"]:
        items_view(
            [get_item_template("Not logged in", "Use the login command to connect")]
        )
        return False
    return True


def refreshed_cache(config: Configuration) -> tuple[Cache, Optional[Exception]]:
    cache_repo = get_cache_repo()
    with open_session(config) as client:
        refresh_error = check_refresh(cache_repo, client, config["time_entry_days"])
    return cache_repo.get_cache(), refresh_error


def with_refresh_error(
    items: list[Item], refresh_error: Optional[Exception]
) -> list[Item]:
    if refresh_error is None:
        return items
    error_item = get_error_item(refresh_error)
    error_item["subtitle"] = "Error syncing with Redmine, showing cached results"
    return [error_item] + items


def current_user_id(cache: Cache) -> Optional[int]:
    return cache["user"]["id"] if cache["user"] is not None else None
