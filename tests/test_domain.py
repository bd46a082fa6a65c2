from datetime import date, datetime, time, timedelta, timezone

import pytest

from institute_shared.domain import (
    AvailabilityWindow,
    Batch,
    Faculty,
    FreeWindow,
    batch_status,
    normalize_weekday,
    parse_date,
    parse_time,
)
from tests.helpers import iv


def test_normalize_weekday_is_case_insensitive():
    assert normalize_weekday("monday") == "Monday"
    assert normalize_weekday(" SUNDAY ") == "Sunday"
    with pytest.raises(ValueError):
        normalize_weekday("Mon")


def test_parse_time_accepts_seconds_and_time_objects():
    assert parse_time("09:30") == time(9, 30)
    assert parse_time("09:30:00") == time(9, 30)
    assert parse_time(time(9, 30)) == time(9, 30)
    with pytest.raises(ValueError):
        parse_time("9.30am")


def test_parse_date_normalizes_aware_datetimes_to_utc():
    late_evening_west = datetime(2024, 3, 10, 22, 0, tzinfo=timezone(timedelta(hours=-5)))
    assert parse_date(late_evening_west) == date(2024, 3, 11)
    assert parse_date("2024-03-10") == date(2024, 3, 10)
    with pytest.raises(ValueError):
        parse_date("10/03/2024")


def test_availability_window_requires_start_before_end():
    with pytest.raises(ValueError):
        AvailabilityWindow("Monday", "17:00", "09:00")
    with pytest.raises(ValueError):
        AvailabilityWindow("Monday", "09:00", "09:00")


def test_faculty_requires_an_id():
    with pytest.raises(ValueError):
        Faculty(id=None)
    with pytest.raises(ValueError):
        Faculty(id="  ")


def test_faculty_availability_lookup():
    f = Faculty(id=1, availability=[AvailabilityWindow("tuesday", "09:00", "12:00")])
    assert f.availability_for("TUESDAY").interval == iv("09:00", "12:00")
    assert f.availability_for("Monday") is None


def test_batch_invariants():
    with pytest.raises(ValueError):
        Batch(id=1, faculty_id=1, start_date="2024-02-01", end_date="2024-01-01",
              start_time="09:00", end_time="10:00", days_of_week=["Monday"])
    with pytest.raises(ValueError):
        Batch(id=None, faculty_id=1, start_date="2024-01-01", end_date="2024-01-01",
              start_time="09:00", end_time="10:00", days_of_week=["Monday"])

    b = Batch(id=1, faculty_id=None, start_date="2024-01-01", end_date="2024-01-31",
              start_time="09:00:00", end_time="10:00", days_of_week=["monday", "Monday"])
    assert b.days_of_week == frozenset({"Monday"})
    assert b.covers(date(2024, 1, 31))
    assert not b.covers(date(2024, 2, 1))


def test_free_window_to_dict():
    w = FreeWindow(date=date(2024, 1, 1), windows=(iv("09:00", "10:00"), iv("12:00", "21:00")))
    assert w.to_dict() == {"date": "2024-01-01", "time": ["09:00 - 10:00", "12:00 - 21:00"]}


def test_batch_status():
    start, end = date(2024, 1, 10), date(2024, 1, 20)
    assert batch_status(start, end, date(2024, 1, 9)) == "Upcoming"
    assert batch_status(start, end, date(2024, 1, 10)) == "Active"
    assert batch_status(start, end, date(2024, 1, 20)) == "Active"
    assert batch_status(start, end, date(2024, 1, 21)) == "Completed"
