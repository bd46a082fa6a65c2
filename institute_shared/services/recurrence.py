"""
Calendar expansion for weekly recurrences.

Only `datetime.date` values are used here; they carry no time zone or
time of day, so stepping one day at a time can never skip or repeat a date
around a DST change. Inputs that arrive as aware datetimes are normalized
to UTC by `institute_shared.domain.parse_date` before they get here.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Iterator

from institute_shared.domain import WEEKDAYS, normalize_weekdays
from institute_shared.errors import InvalidRangeError

_ONE_DAY = timedelta(days=1)


def weekday_of(day: date) -> str:
    # date.weekday() is Monday=0; WEEKDAYS starts on Sunday.
    return WEEKDAYS[(day.weekday() + 1) % 7]


def expand_dates(start: date, end: date) -> Iterator[date]:
    """
    Every calendar date from `start` to `end`, both inclusive, ascending.

    Raises InvalidRangeError straight away (not on first iteration) when
    `start` is after `end`.
    """
    if start > end:
        raise InvalidRangeError(start, end)
    return _iter_days(start, end)


def _iter_days(start: date, end: date) -> Iterator[date]:
    # Stop on `end` before stepping so a range ending on date.max does not overflow.
    current = start
    while True:
        yield current
        if current == end:
            return
        current += _ONE_DAY


def dates_on_weekdays(start: date, end: date, weekdays: Iterable[str]) -> Iterator[date]:
    """Dates in [start, end] whose weekday is one of `weekdays`."""
    wanted = normalize_weekdays(weekdays)
    days = expand_dates(start, end)
    return (day for day in days if weekday_of(day) in wanted)
