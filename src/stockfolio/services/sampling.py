"""
Resolution sampling for date-range series.

Maps a date range to a granularity and walks it, producing a bounded
number of representative dates (roughly 5 to 60) regardless of span.
Month, quarter and year points land on the last working day of the
period; weekends roll back to Friday.
"""

import calendar
from datetime import date
from typing import Optional

from dateutil.relativedelta import relativedelta

from stockfolio.core.timezone import roll_back_to_weekday
from stockfolio.domain.models import Resolution

_STEPS: dict[Resolution, relativedelta] = {
    Resolution.DAILY: relativedelta(days=1),
    Resolution.EVERY_10_DAYS: relativedelta(days=10),
    Resolution.MONTHLY: relativedelta(months=1),
    Resolution.EVERY_3_MONTHS: relativedelta(months=3),
    Resolution.YEARLY: relativedelta(years=1),
}


def determine_resolution(start: date, end: date) -> Resolution:
    days_between = (end - start).days
    if days_between <= 30:
        return Resolution.DAILY
    if days_between <= 150:
        return Resolution.EVERY_10_DAYS
    if days_between <= 540:  # up to 18 months
        return Resolution.MONTHLY
    if days_between <= 1825:  # up to 5 years
        return Resolution.EVERY_3_MONTHS
    return Resolution.YEARLY


def last_working_day_of_month(value: date) -> date:
    last_day = calendar.monthrange(value.year, value.month)[1]
    return roll_back_to_weekday(value.replace(day=last_day))


def last_working_day_of_year(value: date) -> date:
    return roll_back_to_weekday(date(value.year, 12, 31))


def target_date(current: date, resolution: Resolution, end: date) -> Optional[date]:
    """
    Representative date for the period starting at current.

    Quarter and year targets past end are dropped (None); a monthly
    target may fall after end.
    """
    if resolution in (Resolution.DAILY, Resolution.EVERY_10_DAYS):
        return current
    if resolution == Resolution.MONTHLY:
        return last_working_day_of_month(current)
    if resolution == Resolution.EVERY_3_MONTHS:
        target = last_working_day_of_month(current + relativedelta(months=2))
        return None if target > end else target
    if resolution == Resolution.YEARLY:
        target = last_working_day_of_year(current)
        return None if target > end else target
    raise ValueError(f"Unsupported resolution: {resolution}")


def advance(current: date, resolution: Resolution) -> date:
    return current + _STEPS[resolution]


def sample_dates(start: date, end: date, resolution: Optional[Resolution] = None) -> list[date]:
    """Ordered, de-duplicated target dates for [start, end]."""
    resolution = resolution or determine_resolution(start, end)
    targets: list[date] = []
    seen: set[date] = set()
    current = start
    while current <= end:
        target = target_date(current, resolution, end)
        if target is not None and target not in seen:
            seen.add(target)
            targets.append(target)
        current = advance(current, resolution)
    return targets
