# SPDX-License-Identifier: MIT

import logging
from typing import Annotated

import typer

from redline import log
from redline.terminal.account import login, logout, server
from redline.terminal.action import do
from redline.terminal.custom_typer import AliasedTyperGroup
from redline.terminal.issue import issues
from redline.terminal.option import options
from redline.terminal.project import projects
from redline.terminal.status import status, sync
from redline.terminal.timesheet import timesheet
from redline.view import state as view_state

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="Redline - Redmine from your launcher",
    no_args_is_help=True,
)
app.command(name="issues, i")(issues)
app.command(name="projects, p")(projects)
app.command(name="timesheet, t")(timesheet)
app.command(name="status, st")(status)
app.command(name="sync, sy")(sync)
app.command(name="options, o")(options)
app.command(name="server, se")(server)
app.command(name="login")(login)
app.command(name="logout")(logout)
app.command(name="do")(do)


@app.callback()
def main_callback(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print launcher script filter JSON"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Log debug output to stderr"),
    ] = False,
) -> None:
    """
    Redline - Redmine from your launcher

    Global options that apply to all commands.
    """
    log.configure_logging(logging.DEBUG if debug else None)
    view_state.set_json_output(json_output)


def run() -> None:
    app()
