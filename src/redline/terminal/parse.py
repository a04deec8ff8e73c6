# SPDX-License-Identifier: MIT

import json
from typing import Any, Optional

import typer

from redline.model.span import Span


def parse_data(data: Optional[str]) -> dict[str, Any]:
    """Decode the JSON payload a chosen item hands back to its keyword."""
    if data is None or data.strip() == "":
        return {}
    try:
        payload = json.loads(data)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid data: {e}")
    if not isinstance(payload, dict):
        raise typer.BadParameter("Data must be a JSON object")
    return payload


def parse_data_int(payload: dict[str, Any], key: str) -> Optional[int]:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise typer.BadParameter(f"{key} must be an integer")
    return value


def parse_data_span(payload: dict[str, Any]) -> Optional[Span]:
    raw_span = payload.get("span")
    if raw_span is None:
        return None
    if not isinstance(raw_span, dict):
        raise typer.BadParameter("span must be an object")
    for key in ("name", "from", "to"):
        if not isinstance(raw_span.get(key), str):
            raise typer.BadParameter(f"span.{key} must be a string")
    label = raw_span.get("label")
    return {
        "name": raw_span["name"],
        "label": label if isinstance(label, str) else None,
        "from": raw_span["from"],
        "to": raw_span["to"],
    }
