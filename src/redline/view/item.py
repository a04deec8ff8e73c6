# SPDX-License-Identifier: MIT

import json
from typing import Any, Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from redline.model.item import Item, ItemArg
from redline.view.state import get_json_output


def __arg_to_str(arg: Optional[ItemArg]) -> Optional[str]:
    if arg is None:
        return None
    return json.dumps(arg)


def alfred_item(item: Item) -> dict[str, Any]:
    """Script filter JSON for one item, leaving out unset fields."""
    alfred: dict[str, Any] = {
        "title": item["title"],
        "valid": item["valid"],
    }
    if item["uid"] is not None:
        alfred["uid"] = item["uid"]
    if item["subtitle"] is not None:
        alfred["subtitle"] = item["subtitle"]
    if item["autocomplete"] is not None:
        alfred["autocomplete"] = item["autocomplete"]
    if item["icon"] is not None:
        alfred["icon"] = {"path": item["icon"]}
    if item["arg"] is not None:
        alfred["arg"] = __arg_to_str(item["arg"])

    alt_arg = item.get("alt_arg")
    if alt_arg is not None:
        alfred["mods"] = {
            "alt": {
                "valid": True,
                "arg": __arg_to_str(alt_arg),
                "subtitle": item.get("alt_subtitle") or "",
            }
        }
    return alfred


def items_view(items: list[Item]) -> None:
    if get_json_output():
        typer.echo(json.dumps({"items": [alfred_item(item) for item in items]}))
        return

    console = Console()
    if not items:
        console.print("No results found.")
        return

    table = Table(box=box.SIMPLE)
    table.add_column("title")
    table.add_column("subtitle", style="grey70")
    table.add_column("complete", style="cyan")
    table.add_column("action", style="magenta")

    for item in items:
        action = ""
        if item["arg"] is not None:
            action = f"{item['arg']['mode']} {item['arg']['keyword']}"
        # Text, not markup: subtitles contain "[project]"
        table.add_row(
            Text(item["title"], style="bold" if item["icon"] == "icon_me.png" else ""),
            Text(item["subtitle"] or ""),
            Text(item["autocomplete"] or ""),
            Text(action),
            style=None if item["valid"] or item["arg"] else "dim",
        )

    console.print(table)


def message_view(message: str, error: bool = False) -> None:
    if error:
        Console(stderr=True).print(Text(message, style="red"))
        return
    if message:
        typer.echo(message)
