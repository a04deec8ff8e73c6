# SPDX-License-Identifier: MIT

import logging
from typing import Annotated

import typer

from redline.client.redmine import RedmineAPIError, login as redmine_login
from redline.service.server import server_items
from redline.state import get_cache_repo, get_config_repo
from redline.view.item import items_view, message_view

logger = logging.getLogger(__name__)


def server(
    query: Annotated[str, typer.Argument(help="URL of your Redmine server")] = "",
) -> None:
    """Show or change the Redmine server."""
    items_view(server_items(get_config_repo().get_config()["redmine_url"], query))


def login(
    username: Annotated[str, typer.Option(prompt=True)],
    password: Annotated[str, typer.Option(prompt=True, hide_input=True)],
) -> None:
    """Log in to your Redmine server and store the account's API key."""
    config_repo = get_config_repo()
    config = config_repo.get_config()
    if not config["redmine_url"]:
        message_view("Set a server first with the server command", error=True)
        raise typer.Exit(1)

    logger.info("Logging in to %s as %s", config["redmine_url"], username)
    try:
        api_key = redmine_login(
            config["redmine_url"],
            username,
            password,
            verify=not config["allow_self_signed_cert"],
        )
    except RedmineAPIError as e:
        message_view(f"Login failed: {e}", error=True)
        raise typer.Exit(1)

    config_repo.update_config(api_key=api_key)
    config_repo.flush()
    message_view("Login successful!")


def logout() -> None:
    """Forget the stored API key and the cached account data."""
    config_repo = get_config_repo()
    config_repo.update_config(remove_api_key=True)
    config_repo.flush()
    get_cache_repo().clear()
    message_view("Logout successful!")
