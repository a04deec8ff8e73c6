# SPDX-License-Identifier: MIT

from redline.client.redmine import RedmineClient
from redline.configuration import Configuration


class NotLoggedInError(Exception):
    pass


def open_session(config: Configuration) -> RedmineClient:
    """A client for the configured server, authenticated with the stored API key."""
    if not config["redmine_url"]:
        raise NotLoggedInError("No Redmine server configured")
    if not config["api_key"]:
        raise NotLoggedInError("Not logged in")
    return RedmineClient(
        config["redmine_url"],
        api_key=config["api_key"],
        verify=not config["allow_self_signed_cert"],
    )
