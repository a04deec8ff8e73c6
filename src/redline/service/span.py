# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum

from redline import time
from redline.model.span import Span

SPAN_KEYWORDS = ("today", "yesterday", "week")

# Tried in this order; the first pattern that matches decides the layout.
DATE_LAYOUTS: list[tuple[str, re.Pattern[str]]] = [
    ("d/m", re.compile(r"^(?P<day>\d\d?)/(?P<month>\d\d?)$")),
    ("d/m/yy", re.compile(r"^(?P<day>\d\d?)/(?P<month>\d\d?)/(?P<year>\d\d)$")),
    (
        "d/m/yyyy",
        re.compile(r"^(?P<day>\d\d?)/(?P<month>\d\d?)/(?P<year>\d\d\d\d)$"),
    ),
    (
        "yyyy-m-d",
        re.compile(r"^(?P<year>\d\d\d\d)-(?P<month>\d\d?)-(?P<day>\d\d?)$"),
    ),
]


class SpanParseError(ValueError):
    pass


def get_span_template(name: str, date_from: str, date_to: str) -> Span:
    return {"name": name, "label": None, "from": date_from, "to": date_to}


def span_label(span: Span) -> str:
    return span["label"] or span["name"]


def parse_date(text: str, today: Optional[pendulum.Date] = None) -> pendulum.Date:
    """
    Parse a single date written as d/m, d/m/yy, d/m/yyyy or yyyy-m-d.

    A missing year means the current year. Two digit years follow the
    strptime convention: 69-99 is 1969-1999, 00-68 is 2000-2068.
    """
    if today is None:
        today = time.today_local()

    for layout, pattern in DATE_LAYOUTS:
        match = pattern.match(text)
        if match is None:
            continue

        year_str = match.groupdict().get("year")
        if year_str is None:
            year = today.year
        elif len(year_str) == 2:
            short_year = int(year_str)
            year = short_year + (1900 if short_year >= 69 else 2000)
        else:
            year = int(year_str)

        try:
            return pendulum.date(year, int(match["month"]), int(match["day"]))
        except ValueError as e:
            raise SpanParseError(f"Invalid {layout} date '{text}': {e}") from e

    raise SpanParseError(f"Unable to parse date '{text}'")


def parse_span(text: str, today: Optional[pendulum.Date] = None) -> Span:
    """
    Parse a timesheet span.

    Accepts "today", "yesterday", "week" (Monday of this week through today),
    a single date, or "A..B" where A and B are spans themselves; the range
    runs from the start of A to the end of B.
    """
    if today is None:
        today = time.today_local()
    arg = text.strip()

    if arg == "today":
        date = time.date_to_iso_str(today)
        return get_span_template(arg, date, date)
    if arg == "yesterday":
        date = time.date_to_iso_str(today.subtract(days=1))
        return get_span_template(arg, date, date)
    if arg == "week":
        span = get_span_template(
            arg,
            time.date_to_iso_str(today.start_of("week")),
            time.date_to_iso_str(today),
        )
        span["label"] = "this week"
        return span

    if ".." in arg:
        first, _, second = arg.partition("..")
        if first.strip() == "" or second.strip() == "":
            raise SpanParseError(f"Unable to parse span '{text}'")
        start_span = parse_span(first, today)
        end_span = parse_span(second, today)
        return get_span_template(arg, start_span["from"], end_span["to"])

    try:
        date = time.date_to_iso_str(parse_date(arg, today))
    except SpanParseError as e:
        raise SpanParseError(f"Unable to parse span '{text}'") from e
    return get_span_template(arg, date, date)


def span_contains(span: Span, date: str) -> bool:
    # Zero-padded ISO dates order the same as strings and as dates
    return span["from"] <= date <= span["to"]
