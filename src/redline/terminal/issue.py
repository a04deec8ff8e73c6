# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from redline.query.filter import parse_match_fields
from redline.service.issue import InvalidIssueIdError, issue_items
from redline.state import get_config_repo
from redline.template.item import get_error_item
from redline.terminal.parse import parse_data, parse_data_int
from redline.terminal.session import (
    refreshed_cache,
    require_login,
    with_refresh_error,
)
from redline.view.item import items_view


def issues(
    query: Annotated[
        str, typer.Argument(help='filter text, or "<id>: <facet>" for one issue')
    ] = "",
    data: Annotated[
        Optional[str],
        typer.Option("--data", help='JSON payload, e.g. {"project_id": 3}'),
    ] = None,
) -> None:
    """List open issues you watch, your own first."""
    config = get_config_repo().get_config()
    if not require_login(config):
        return
    project_id = parse_data_int(parse_data(data), "project_id")

    cache, refresh_error = refreshed_cache(config)
    try:
        items = issue_items(
            cache,
            query,
            parse_match_fields(config["issue_match_fields"]),
            config["redmine_url"],
            project_id,
        )
    except InvalidIssueIdError as e:
        items = [get_error_item(e)]

    items_view(with_refresh_error(items, refresh_error))
