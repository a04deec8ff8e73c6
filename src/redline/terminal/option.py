# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from redline.service.option import option_items
from redline.state import get_config_repo
from redline.view.item import items_view


def options(
    query: Annotated[
        str, typer.Argument(help="option name, optionally followed by a new value")
    ] = "",
) -> None:
    """Show and change options."""
    items_view(option_items(get_config_repo().get_config(), query))
