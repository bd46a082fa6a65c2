from datetime import date

import pytest

from institute_shared.errors import InvalidRangeError
from institute_shared.services.free_slots import find_free_slots
from tests.helpers import batch, faculty

MONDAY = date(2024, 1, 1)


def _labels(results):
    return {
        entry.faculty.id: {w.date.isoformat(): w.time_labels() for w in entry.slots}
        for entry in results
    }


def test_batch_splits_availability():
    f = faculty(windows=[("Monday", "09:00", "21:00")])
    b = batch(10, 1, "2024-01-01", "2024-01-31", "10:00", "12:00", ["Monday"])

    results = find_free_slots([f], [b], MONDAY, MONDAY)

    assert _labels(results) == {1: {"2024-01-01": ["09:00 - 10:00", "12:00 - 21:00"]}}


def test_fully_booked_day_is_omitted():
    f = faculty(windows=[("Monday", "09:00", "17:00")])
    b = batch(10, 1, "2024-01-01", "2024-01-01", "09:00", "17:00", ["Monday"])

    assert find_free_slots([f], [b], MONDAY, MONDAY) == []


def test_day_without_availability_is_skipped():
    f = faculty(windows=[("Monday", "09:00", "12:00"), ("Wednesday", "13:00", "15:00")])

    results = find_free_slots([f], [], MONDAY, date(2024, 1, 3))

    assert _labels(results) == {
        1: {"2024-01-01": ["09:00 - 12:00"], "2024-01-03": ["13:00 - 15:00"]}
    }


def test_faculty_without_any_availability_is_not_listed():
    results = find_free_slots([faculty(windows=[])], [], MONDAY, date(2024, 1, 7))
    assert results == []


def test_batch_outside_its_date_range_or_weekdays_is_ignored():
    f = faculty(windows=[("Monday", "09:00", "12:00"), ("Tuesday", "09:00", "12:00")])
    batches = [
        batch(10, 1, "2024-01-08", "2024-01-31", "09:00", "12:00", ["Monday"]),
        batch(11, 1, "2023-12-01", "2023-12-31", "09:00", "12:00", ["Monday"]),
        batch(12, 1, "2024-01-01", "2024-01-31", "09:00", "12:00", ["Wednesday"]),
    ]

    results = find_free_slots([f], batches, MONDAY, date(2024, 1, 2))

    assert _labels(results) == {
        1: {"2024-01-01": ["09:00 - 12:00"], "2024-01-02": ["09:00 - 12:00"]}
    }


def test_other_faculty_and_unassigned_batches_do_not_cut():
    ada = faculty(1, windows=[("Monday", "09:00", "12:00")])
    bob = faculty(2, windows=[("Monday", "09:00", "12:00")], name="Bob")
    batches = [
        batch(10, 2, "2024-01-01", "2024-01-01", "09:00", "10:00", ["Monday"]),
        batch(11, None, "2024-01-01", "2024-01-01", "10:00", "11:00", ["Monday"]),
        batch(12, 99, "2024-01-01", "2024-01-01", "11:00", "12:00", ["Monday"]),
    ]

    results = find_free_slots([ada, bob], batches, MONDAY, MONDAY)

    assert _labels(results) == {
        1: {"2024-01-01": ["09:00 - 12:00"]},
        2: {"2024-01-01": ["10:00 - 12:00"]},
    }


def test_several_batches_on_one_day():
    f = faculty(windows=[("Monday", "08:00", "20:00")])
    batches = [
        batch(10, 1, "2024-01-01", "2024-01-01", "17:00", "18:00", ["Monday"]),
        batch(11, 1, "2024-01-01", "2024-01-01", "09:00", "10:00", ["monday"]),
        batch(12, 1, "2024-01-01", "2024-01-01", "09:30", "13:00", ["MONDAY"]),
    ]

    results = find_free_slots([f], batches, MONDAY, MONDAY)

    assert _labels(results) == {
        1: {"2024-01-01": ["08:00 - 09:00", "13:00 - 17:00", "18:00 - 20:00"]}
    }


def test_filters_by_faculty_and_skill():
    ada = faculty(1, windows=[("Monday", "09:00", "12:00")], skills={"py"})
    bob = faculty(2, windows=[("Monday", "09:00", "12:00")], skills={"go"}, name="Bob")

    assert [r.faculty.id for r in find_free_slots([ada, bob], [], MONDAY, MONDAY)] == [1, 2]
    assert [r.faculty.id for r in find_free_slots([ada, bob], [], MONDAY, MONDAY, faculty_id=2)] == [2]
    assert [r.faculty.id for r in find_free_slots([ada, bob], [], MONDAY, MONDAY, skill_id="py")] == [1]
    assert find_free_slots([ada, bob], [], MONDAY, MONDAY, faculty_id=2, skill_id="py") == []


def test_first_window_for_a_weekday_wins():
    f = faculty(windows=[("Monday", "09:00", "10:00"), ("monday", "14:00", "18:00")])
    results = find_free_slots([f], [], MONDAY, MONDAY)
    assert _labels(results) == {1: {"2024-01-01": ["09:00 - 10:00"]}}


def test_output_windows_never_overlap_and_are_non_empty():
    f = faculty(windows=[(day, "07:00", "22:00") for day in ("Monday", "Tuesday", "Wednesday")])
    batches = [
        batch(10, 1, "2024-01-01", "2024-01-03", "08:00", "09:30", ["Monday", "Tuesday"]),
        batch(11, 1, "2024-01-01", "2024-01-03", "09:00", "11:00", ["Tuesday", "Wednesday"]),
        batch(12, 1, "2024-01-02", "2024-01-02", "21:00", "22:00", ["Tuesday"]),
    ]

    for entry in find_free_slots([f], batches, MONDAY, date(2024, 1, 3)):
        for day in entry.slots:
            windows = list(day.windows)
            assert all(w.start < w.end for w in windows)
            assert all(a.end <= b.start for a, b in zip(windows, windows[1:]))


def test_result_is_ordered_by_date():
    f = faculty(windows=[(day, "09:00", "10:00") for day in ("Monday", "Tuesday", "Friday")])
    results = find_free_slots([f], [], MONDAY, date(2024, 1, 12))
    dates = [w.date for w in results[0].slots]
    assert dates == sorted(dates)
    assert len(dates) == 6


def test_inverted_range_raises():
    with pytest.raises(InvalidRangeError):
        find_free_slots([faculty(windows=[("Monday", "09:00", "10:00")])], [], date(2024, 1, 2), MONDAY)


def test_inputs_are_not_mutated():
    f = faculty(windows=[("Monday", "09:00", "21:00")])
    batches = [batch(10, 1, "2024-01-01", "2024-01-31", "10:00", "12:00", ["Monday"])]
    snapshot = (f, tuple(batches))

    first = _labels(find_free_slots([f], batches, MONDAY, MONDAY))
    second = _labels(find_free_slots([f], batches, MONDAY, MONDAY))

    assert first == second
    assert (f, tuple(batches)) == snapshot
