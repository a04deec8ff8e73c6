# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from redline.client.redmine import RedmineAPIError
from redline.client.session import open_session
from redline.service.refresh import check_refresh
from redline.service.timesheet import get_timesheet, span_items, timesheet_items
from redline.state import get_cache_repo, get_config_repo
from redline.template.item import get_error_item
from redline.terminal.parse import parse_data, parse_data_int, parse_data_span
from redline.terminal.session import (
    current_user_id,
    require_login,
    with_refresh_error,
)
from redline.view.item import items_view


def timesheet(
    query: Annotated[
        str,
        typer.Argument(
            help="today, yesterday, week, a date (d/m, d/m/yy, yyyy-m-d) or A..B"
        ),
    ] = "",
    data: Annotated[
        Optional[str],
        typer.Option("--data", help="JSON payload carrying span and project_id"),
    ] = None,
) -> None:
    """Generate a timesheet."""
    config = get_config_repo().get_config()
    if not require_login(config):
        return
    payload = parse_data(data)
    span = parse_data_span(payload)
    project_id = parse_data_int(payload, "project_id")

    cache_repo = get_cache_repo()
    with open_session(config) as client:
        refresh_error = check_refresh(cache_repo, client, config["time_entry_days"])
        user_id = current_user_id(cache_repo.cache)

        if span is None:
            items = span_items(query, config["redmine_url"], user_id)
        else:
            try:
                sheet = get_timesheet(cache_repo, client, span)
            except RedmineAPIError as e:
                items = [get_error_item(e)]
            else:
                items = timesheet_items(
                    sheet, span, query, config["redmine_url"], user_id, project_id
                )

    items_view(with_refresh_error(items, refresh_error))
