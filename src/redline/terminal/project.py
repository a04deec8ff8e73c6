# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from redline.service.project import project_items
from redline.state import get_config_repo
from redline.terminal.session import (
    refreshed_cache,
    require_login,
    with_refresh_error,
)
from redline.view.item import items_view


def projects(
    query: Annotated[str, typer.Argument(help="filter on project name")] = "",
) -> None:
    """List the projects you're working on."""
    config = get_config_repo().get_config()
    if not require_login(config):
        return

    cache, refresh_error = refreshed_cache(config)
    items = project_items(cache, query, config["redmine_url"])
    items_view(with_refresh_error(items, refresh_error))
