# SPDX-License-Identifier: MIT

import json
import logging
import os
import sys
from typing import Any, Optional

from redline import time

# stdout carries launcher output, so every log record goes to stderr
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "ts": time.datetime_to_iso_str(time.now_utc()),
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        if record.exc_info:
            log_obj["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_obj)


def configure_logging(level: Optional[int] = None) -> None:
    """
    Install a single stderr handler on the root logger.

    REDLINE_LOG_JSON=true switches to one JSON object per line and
    REDLINE_LOG_LEVEL picks the level when none is passed in.
    """
    if level is None:
        level_name = os.getenv("REDLINE_LOG_LEVEL", "WARNING").upper()
        level = logging.getLevelNamesMapping().get(level_name, logging.WARNING)

    use_json = os.getenv("REDLINE_LOG_JSON", "").lower() in ("true", "1", "yes")

    handler = logging.StreamHandler(sys.stderr)
    if use_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(level=level, handlers=[handler], force=True)
