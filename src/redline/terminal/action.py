# SPDX-License-Identifier: MIT

from contextlib import ExitStack
from typing import Annotated

import typer

from redline.client.redmine import RedmineAPIError
from redline.client.remote import RemoteClient
from redline.client.session import NotLoggedInError, open_session
from redline.service.action import ActionError, decode_action, dispatch
from redline.state import get_cache_repo, get_config_repo
from redline.view.item import message_view


def do(
    action_json: Annotated[str, typer.Argument(help="action carried by a chosen item")],
) -> None:
    """Run the action bound to a chosen item."""
    config_repo = get_config_repo()

    with ExitStack() as stack:

        def get_client() -> RemoteClient:
            return stack.enter_context(open_session(config_repo.get_config()))

        try:
            message = dispatch(
                decode_action(action_json), config_repo, get_cache_repo(), get_client
            )
        except (
            ActionError,
            LookupError,
            NotLoggedInError,
            OSError,
            RedmineAPIError,
            ValueError,
        ) as e:
            message_view(str(e), error=True)
            raise typer.Exit(1)

    message_view(message)
