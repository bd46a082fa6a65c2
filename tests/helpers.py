from datetime import date, time

from institute_shared.domain import AvailabilityWindow, Batch, Faculty, Interval


def t(value: str) -> time:
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def iv(start: str, end: str) -> Interval:
    return Interval(t(start), t(end))


def faculty(fid=1, windows=(), skills=(), name="Ada"):
    return Faculty(
        id=fid,
        name=name,
        skill_ids=frozenset(skills),
        availability=tuple(AvailabilityWindow(day, start, end) for day, start, end in windows),
    )


def batch(bid, fid, start_date, end_date, start, end, days, name=None):
    return Batch(
        id=bid,
        name=name or f"Batch {bid}",
        faculty_id=fid,
        start_date=date.fromisoformat(start_date),
        end_date=date.fromisoformat(end_date),
        start_time=start,
        end_time=end,
        days_of_week=days,
    )
