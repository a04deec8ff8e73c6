# SPDX-License-Identifier: MIT

import json
from typing import Optional

from redline.model.action import Actions
from redline.model.item import Item, ItemArg, ItemMode


def get_item_template(title: str, subtitle: Optional[str] = None) -> Item:
    return {
        "uid": None,
        "title": title,
        "subtitle": subtitle,
        "autocomplete": None,
        "icon": None,
        "valid": False,
        "arg": None,
    }


def get_item_arg(
    keyword: str, data: Optional[str] = None, mode: ItemMode = "filter"
) -> ItemArg:
    return {"keyword": keyword, "mode": mode, "data": data}


def get_action_arg(action: Actions) -> ItemArg:
    """An arg that hands the action to the `do` command when the item is chosen."""
    return get_item_arg("do", json.dumps(action), mode="do")


def get_error_item(error: Exception | str) -> Item:
    item = get_item_template(str(error))
    item["subtitle"] = "Error"
    item["icon"] = "icon_error.png"
    return item
