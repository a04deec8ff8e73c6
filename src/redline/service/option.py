# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Optional

from redline.configuration import Configuration
from redline.model.item import Item
from redline.model.option import Option, OptionValue
from redline.model.option_kind import OptionKind
from redline.query.fuzzy import fuzzy_matches
from redline.template.action import get_set_option_action
from redline.template.item import get_action_arg, get_error_item, get_item_template

logger = logging.getLogger(__name__)


class UnknownOptionError(LookupError):
    pass


class InvalidOptionValueError(ValueError):
    pass


def __set_allow_self_signed_cert(config: Configuration, value: OptionValue) -> None:
    config["allow_self_signed_cert"] = bool(value)


def __set_cache_ttl_minutes(config: Configuration, value: OptionValue) -> None:
    config["cache_ttl_minutes"] = int(value or 0)


def __set_time_entry_days(config: Configuration, value: OptionValue) -> None:
    config["time_entry_days"] = int(value or 0)


def __set_issue_match_fields(config: Configuration, value: OptionValue) -> None:
    config["issue_match_fields"] = str(value or "")


def __set_open_command(config: Configuration, value: OptionValue) -> None:
    config["open_command"] = str(value) if value else None


OPTIONS: list[Option] = [
    {
        "key": "allow_self_signed_cert",
        "kind": OptionKind.BOOL,
        "description": "Accept self-signed TLS certificates from the server",
        "getter": lambda config: config["allow_self_signed_cert"],
        "setter": __set_allow_self_signed_cert,
    },
    {
        "key": "cache_ttl_minutes",
        "kind": OptionKind.INT,
        "description": "Minutes before cached data is fetched again",
        "getter": lambda config: config["cache_ttl_minutes"],
        "setter": __set_cache_ttl_minutes,
    },
    {
        "key": "time_entry_days",
        "kind": OptionKind.INT,
        "description": "Days of time entries to keep for timesheets",
        "getter": lambda config: config["time_entry_days"],
        "setter": __set_time_entry_days,
    },
    {
        "key": "issue_match_fields",
        "kind": OptionKind.TEXT,
        "description": "Issue fields searched by the issues filter (subject,id,project)",
        "getter": lambda config: config["issue_match_fields"],
        "setter": __set_issue_match_fields,
    },
    {
        "key": "open_command",
        "kind": OptionKind.TEXT,
        "description": "Command used to open URLs instead of the system opener",
        "getter": lambda config: config["open_command"],
        "setter": __set_open_command,
    },
]


def get_option(key: str) -> Option:
    for option in OPTIONS:
        if option["key"] == key:
            return option
    raise UnknownOptionError(f"Unknown option '{key}'")


def parse_option_value(option: Option, value: str) -> OptionValue:
    """Turn text typed by the user into a value of the option's kind."""
    match option["kind"]:
        case OptionKind.BOOL:
            lowered = value.strip().lower()
            if lowered in ("true", "yes", "on", "1"):
                return True
            if lowered in ("false", "no", "off", "0"):
                return False
            raise InvalidOptionValueError(f"{option['key']} must be on or off")
        case OptionKind.INT:
            try:
                int_value = int(value.strip())
            except ValueError as e:
                raise InvalidOptionValueError(
                    f"{option['key']} must be a whole number"
                ) from e
            if int_value < 0:
                raise InvalidOptionValueError(f"{option['key']} must not be negative")
            return int_value
        case OptionKind.TEXT:
            return value.strip()


def validate_option_value(option: Option, value: OptionValue) -> None:
    match option["kind"]:
        case OptionKind.BOOL:
            valid = isinstance(value, bool)
        case OptionKind.INT:
            valid = (
                isinstance(value, int) and not isinstance(value, bool) and value >= 0
            )
        case OptionKind.TEXT:
            valid = value is None or isinstance(value, str)
    if not valid:
        raise InvalidOptionValueError(
            f"Invalid value {value!r} for {option['kind']} option {option['key']}"
        )


def apply_option(config: Configuration, key: str, value: OptionValue) -> Configuration:
    """Return a copy of the config with one option set."""
    option = get_option(key)
    validate_option_value(option, value)
    new_config = deepcopy(config)
    option["setter"](new_config, value)
    logger.info("Set option %s to %r", key, value)
    return new_config


def format_option_value(option: Option, value: OptionValue) -> str:
    if option["kind"] is OptionKind.BOOL:
        return "on" if value else "off"
    if value is None:
        return ""
    return str(value)


def option_items(config: Configuration, query: str) -> list[Item]:
    """
    One item per option whose key matches the first word of the query.

    Boolean options toggle when chosen. Integer and text options take the
    rest of the query as their new value.
    """
    parts = query.strip().split(None, 1)
    name = parts[0] if parts else ""
    value: Optional[str] = parts[1] if len(parts) > 1 else None
    items: list[Item] = []

    for option in OPTIONS:
        if not fuzzy_matches(option["key"], name):
            continue

        current = option["getter"](config)
        item = get_item_template(
            f"{option['key']}: {format_option_value(option, current)}",
            option["description"],
        )
        item["autocomplete"] = option["key"]

        if option["kind"] is OptionKind.BOOL:
            if name == option["key"]:
                item["title"] += " (press Enter to toggle)"
            item["valid"] = True
            item["arg"] = get_action_arg(
                get_set_option_action(option["key"], not current)
            )
            items.append(item)
            continue

        item["autocomplete"] += " "
        if value is None:
            if name == option["key"]:
                item["title"] += " (type a new value to change)"
            items.append(item)
            continue

        try:
            new_value = parse_option_value(option, value)
        except InvalidOptionValueError as e:
            items.append(get_error_item(e))
            continue

        item["title"] = f"{option['key']}: {format_option_value(option, new_value)}"
        item["valid"] = True
        item["arg"] = get_action_arg(get_set_option_action(option["key"], new_value))
        items.append(item)

    return items
