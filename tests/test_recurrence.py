from datetime import date, timedelta

import pytest

from institute_shared.domain import WEEKDAYS
from institute_shared.errors import InvalidRangeError
from institute_shared.services.recurrence import dates_on_weekdays, expand_dates, weekday_of


def test_weekday_of_known_dates():
    assert weekday_of(date(2024, 1, 1)) == "Monday"
    assert weekday_of(date(2024, 1, 7)) == "Sunday"
    assert weekday_of(date(2024, 2, 29)) == "Thursday"


def test_one_week_yields_each_weekday_once_in_order():
    start = date(2024, 3, 6)
    days = list(expand_dates(start, start + timedelta(days=6)))

    assert len(days) == 7
    assert days == sorted(days)
    assert sorted(weekday_of(d) for d in days) == sorted(WEEKDAYS)


def test_single_day_range():
    assert list(expand_dates(date(2024, 1, 1), date(2024, 1, 1))) == [date(2024, 1, 1)]


def test_range_across_dst_change_has_no_gap_or_repeat():
    # Late March / late October cross DST changes in many zones.
    for start, end in [(date(2024, 3, 9), date(2024, 4, 2)), (date(2024, 10, 25), date(2024, 11, 5))]:
        days = list(expand_dates(start, end))
        assert len(days) == (end - start).days + 1
        assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))


def test_inverted_range_fails_before_iteration():
    with pytest.raises(InvalidRangeError):
        expand_dates(date(2024, 1, 2), date(2024, 1, 1))


def test_inverted_range_is_a_value_error():
    with pytest.raises(ValueError):
        dates_on_weekdays(date(2024, 1, 2), date(2024, 1, 1), ["Monday"])


def test_dates_on_weekdays_is_case_insensitive():
    days = list(dates_on_weekdays(date(2024, 1, 1), date(2024, 1, 14), ["monday", "WEDNESDAY"]))
    assert days == [date(2024, 1, 1), date(2024, 1, 3), date(2024, 1, 8), date(2024, 1, 10)]


def test_range_ending_on_last_representable_date():
    assert list(expand_dates(date(9999, 12, 30), date.max)) == [date(9999, 12, 30), date.max]
    assert list(dates_on_weekdays(date(9999, 12, 20), date.max, ["Friday"])) == [date(9999, 12, 24), date.max]
