"""Timezone and calendar utilities for US/Eastern market time."""

from datetime import date, datetime, timedelta
from typing import Union

import pytz
from dateutil import parser as date_parser

EASTERN_TZ = pytz.timezone("US/Eastern")

SATURDAY = 5
SUNDAY = 6


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def today_eastern() -> date:
    """Return today's calendar date in US/Eastern timezone."""
    return now_eastern().date()


def parse_date(value: Union[str, date, datetime]) -> date:
    """
    Parse a date-like value into a calendar date.

    Accepts date objects, datetimes (time part dropped) and any string
    dateutil understands; ISO-8601 is the expected form.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.parse(value.strip()).date()


def is_weekend(value: date) -> bool:
    """Return True for Saturdays and Sundays."""
    return value.weekday() >= SATURDAY


def roll_back_to_weekday(value: date) -> date:
    """Move a Saturday back one day and a Sunday back two days."""
    if value.weekday() == SATURDAY:
        return value - timedelta(days=1)
    if value.weekday() == SUNDAY:
        return value - timedelta(days=2)
    return value


def roll_forward_to_weekday(value: date) -> date:
    """Move a Saturday or Sunday forward to the following Monday."""
    while is_weekend(value):
        value += timedelta(days=1)
    return value


def iter_days(start: date, end: date):
    """Yield every calendar day from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
