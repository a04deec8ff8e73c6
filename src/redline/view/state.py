"""Output settings shared by every view for the current invocation."""

# SPDX-License-Identifier: MIT

from contextvars import ContextVar

# Launcher JSON on stdout instead of a table for humans
_json_output_var: ContextVar[bool] = ContextVar("json_output", default=False)


def set_json_output(value: bool) -> None:
    _json_output_var.set(value)


def get_json_output() -> bool:
    return _json_output_var.get()
