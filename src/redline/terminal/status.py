# SPDX-License-Identifier: MIT

from redline.client.redmine import RedmineAPIError
from redline.client.session import open_session
from redline.service.refresh import refresh
from redline.service.status import status_items
from redline.state import get_cache_repo, get_config_repo
from redline.template.item import get_error_item, get_item_template
from redline.terminal.session import refreshed_cache, require_login
from redline.view.item import items_view


def status() -> None:
    """Show open issues assigned to you, or why syncing failed."""
    config = get_config_repo().get_config()
    if not require_login(config):
        return

    cache, refresh_error = refreshed_cache(config)
    items_view(status_items(cache, config["redmine_url"], refresh_error))


def sync() -> None:
    """Refresh the cache from Redmine now, stale or not."""
    config = get_config_repo().get_config()
    if not require_login(config):
        return

    with open_session(config) as client:
        try:
            refresh(get_cache_repo(), client, config["time_entry_days"])
        except RedmineAPIError as e:
            items_view([get_error_item(e)])
            return

    items_view([get_item_template("Synchronized!")])
