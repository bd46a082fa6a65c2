from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Hashable, Iterable, Sequence

from institute_shared.domain import Batch, Faculty, FacultyFreeSlots, FreeWindow
from institute_shared.services.intervals import subtract_many
from institute_shared.services.recurrence import expand_dates, weekday_of

logger = logging.getLogger(__name__)


def _group_batches_by_faculty(batches: Iterable[Batch]) -> dict[Hashable, list[Batch]]:
    by_faculty: dict[Hashable, list[Batch]] = defaultdict(list)
    for batch in batches:
        # Unassigned batches occupy nobody's time.
        if batch.faculty_id is None or not batch.days_of_week:
            continue
        by_faculty[batch.faculty_id].append(batch)
    return by_faculty


def _select_faculties(
    faculties: Iterable[Faculty],
    faculty_id: Hashable | None,
    skill_id: Hashable | None,
) -> list[Faculty]:
    selected = list(faculties)
    if faculty_id is not None:
        selected = [f for f in selected if f.id == faculty_id]
    if skill_id is not None:
        selected = [f for f in selected if f.has_skill(skill_id)]
    return selected


def free_windows_on(faculty: Faculty, day: date, batches: Sequence[Batch]) -> FreeWindow | None:
    """
    Free time of one faculty on one date, or None when there is none.

    `batches` should already be restricted to this faculty; those that do
    not run on `day` are ignored here.
    """
    weekday = weekday_of(day)
    availability = faculty.availability_for(weekday)
    if availability is None:
        return None

    cuts = [
        b.interval
        for b in batches
        if b.faculty_id == faculty.id and b.covers(day) and b.meets_on(weekday)
    ]
    pieces = subtract_many(availability.interval, cuts)
    if not pieces:
        return None
    return FreeWindow(date=day, windows=tuple(pieces))


def find_free_slots(
    faculties: Iterable[Faculty],
    batches: Iterable[Batch],
    start: date,
    end: date,
    *,
    faculty_id: Hashable | None = None,
    skill_id: Hashable | None = None,
) -> list[FacultyFreeSlots]:
    """
    Open time windows per faculty per date in [start, end].

    - Faculties are filtered to `faculty_id` and then to those holding
      `skill_id`, when given.
    - For each date, the faculty's availability window for that weekday
      has every batch of theirs running that day cut out of it.
    - Dates with nothing left, and faculties with no free date at all,
      are left out of the result.

    Raises InvalidRangeError when `start` is after `end`.
    """
    days = list(expand_dates(start, end))
    batches_by_faculty = _group_batches_by_faculty(batches)

    selected = _select_faculties(faculties, faculty_id, skill_id)

    results: list[FacultyFreeSlots] = []
    for faculty in selected:
        own_batches = batches_by_faculty.get(faculty.id, [])
        entry = FacultyFreeSlots(faculty=faculty)
        for day in days:
            window = free_windows_on(faculty, day, own_batches)
            if window is not None:
                entry.slots.append(window)
        if entry.slots:
            results.append(entry)

    logger.debug(
        "Free slots %s..%s: %d of %d faculty have open time",
        start,
        end,
        len(results),
        len(selected),
    )
    return results
