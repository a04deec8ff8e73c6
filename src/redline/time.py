# SPDX-License-Identifier: MIT

from typing import Optional, cast

import pendulum


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def date_to_iso_str(date: pendulum.Date) -> str:
    """Format a date as a zero-padded 'YYYY-MM-DD' string."""
    return date.to_date_string()


def date_from_iso_str(date_str: str) -> pendulum.Date:
    """Parse a 'YYYY-MM-DD' string into a pendulum.Date."""
    return cast(pendulum.DateTime, pendulum.parse(date_str)).date()


def date_to_human_str(date: pendulum.Date, today: Optional[pendulum.Date] = None) -> str:
    """
    Render a date relative to today.

    Nearby dates become "today", "yesterday", "tomorrow", a weekday name
    ("Friday", "last Monday", "next Tuesday"); dates within a year become
    "Jan 5" and anything further away falls back to the ISO date.
    """
    if today is None:
        today = today_local()

    days = date.toordinal() - today.toordinal()
    date_week = date.isocalendar()[:2]
    today_week = today.isocalendar()[:2]
    weekday = date.format("dddd")

    if days == 0:
        return "today"
    if days == -1:
        return "yesterday"
    if days == 1:
        return "tomorrow"
    if -7 < days < 0:
        if date_week == today_week:
            return weekday
        return f"last {weekday}"
    if 0 < days < 7:
        return weekday
    if 0 < days < 14 and date_week == today.add(weeks=1).isocalendar()[:2]:
        return f"next {weekday}"
    if abs(days) < 365:
        return date.format("MMM D")
    return date_to_iso_str(date)


def iso_str_to_human_str(date_str: str, today: Optional[pendulum.Date] = None) -> str:
    return date_to_human_str(date_from_iso_str(date_str), today)
