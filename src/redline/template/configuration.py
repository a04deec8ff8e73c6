# SPDX-License-Identifier: MIT

from redline import configuration


def get_configuration_template() -> configuration.Configuration:
    return {
        "redmine_url": None,
        "api_key": None,
        "allow_self_signed_cert": False,
        "cache_ttl_minutes": configuration.DEFAULT_CACHE_TTL_MINUTES,
        "time_entry_days": configuration.DEFAULT_TIME_ENTRY_DAYS,
        "issue_match_fields": configuration.DEFAULT_ISSUE_MATCH_FIELDS,
        "open_command": None,
    }
