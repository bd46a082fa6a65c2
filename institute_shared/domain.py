"""
Typed entities the scheduling core works on.

Everything here is an immutable snapshot: the service layer builds these
from database rows for the duration of one query, and the core never
mutates them. Invariants are checked at construction so the algorithms can
trust their inputs.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Hashable, Iterable


WEEKDAYS: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

_WEEKDAY_LOOKUP = {name.lower(): name for name in WEEKDAYS}


def normalize_weekday(name: str) -> str:
    """Return the canonical spelling of a weekday name (case-insensitive)."""
    if not isinstance(name, str):
        raise ValueError(f"Weekday must be a string, got {name!r}")
    try:
        return _WEEKDAY_LOOKUP[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown weekday: {name!r}") from None


def normalize_weekdays(names: Iterable[str]) -> frozenset[str]:
    return frozenset(normalize_weekday(n) for n in names)


# =====================
# Time and date parsing
# =====================

def parse_time(value: time | str) -> time:
    """Accept a `time` or an `HH:MM` / `HH:MM:SS` string (24-hour)."""
    if isinstance(value, time):
        return value.replace(tzinfo=None)
    if isinstance(value, str):
        for fmt in ("%H:%M", "%H:%M:%S"):
            try:
                return datetime.strptime(value.strip(), fmt).time()
            except ValueError:
                continue
    raise ValueError(f"Invalid time of day: {value!r}")


def format_time(value: time) -> str:
    return value.strftime("%H:%M")


def parse_date(value: date | str) -> date:
    """
    Accept a `date` or a `YYYY-MM-DD` string.

    Aware datetimes are converted to UTC before being truncated to a date.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ValueError(f"Invalid date: {value!r}")


def _check_id(value, what: str):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"{what} id must not be empty")


def _check_time_window(start: time, end: time, what: str):
    if not start < end:
        raise ValueError(
            f"{what}: start {format_time(start)} must be before end {format_time(end)}"
        )


def _check_date_range(start: date, end: date, what: str):
    if start > end:
        raise ValueError(f"{what}: start date {start} is after end date {end}")


# =====================
# Entities
# =====================

@dataclass(frozen=True)
class Interval:
    """A half-open time-of-day interval [start, end)."""

    start: time
    end: time

    @property
    def is_empty(self) -> bool:
        return not self.start < self.end

    def label(self) -> str:
        return f"{format_time(self.start)} - {format_time(self.end)}"

    def __str__(self) -> str:
        return self.label()


@dataclass(frozen=True)
class AvailabilityWindow:
    weekday: str
    start: time
    end: time

    def __post_init__(self):
        object.__setattr__(self, "weekday", normalize_weekday(self.weekday))
        object.__setattr__(self, "start", parse_time(self.start))
        object.__setattr__(self, "end", parse_time(self.end))
        _check_time_window(self.start, self.end, f"Availability on {self.weekday}")

    @property
    def interval(self) -> Interval:
        return Interval(self.start, self.end)


@dataclass(frozen=True)
class Faculty:
    id: Hashable
    name: str = ""
    skill_ids: frozenset = field(default_factory=frozenset)
    availability: tuple[AvailabilityWindow, ...] = ()

    def __post_init__(self):
        _check_id(self.id, "Faculty")
        object.__setattr__(self, "skill_ids", frozenset(self.skill_ids))
        object.__setattr__(self, "availability", tuple(self.availability))

    def availability_for(self, weekday: str) -> AvailabilityWindow | None:
        """First availability window recorded for `weekday`, if any."""
        wanted = normalize_weekday(weekday)
        for window in self.availability:
            if window.weekday == wanted:
                return window
        return None

    def has_skill(self, skill_id) -> bool:
        return skill_id in self.skill_ids


@dataclass(frozen=True)
class BatchProposal:
    """A batch that is about to be created or edited."""

    faculty_id: Hashable
    start_date: date
    end_date: date
    start_time: time
    end_time: time
    days_of_week: frozenset[str]

    def __post_init__(self):
        _normalize_schedule(self, "Batch")

    @property
    def interval(self) -> Interval:
        return Interval(self.start_time, self.end_time)

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def meets_on(self, weekday: str) -> bool:
        return normalize_weekday(weekday) in self.days_of_week


@dataclass(frozen=True)
class Batch(BatchProposal):
    """An existing batch. `faculty_id` and `skill_id` may be unset."""

    id: Hashable = None
    name: str = ""
    skill_id: Hashable = None

    def __post_init__(self):
        _check_id(self.id, "Batch")
        _normalize_schedule(self, f"Batch {self.name or self.id}")


def _normalize_schedule(obj: BatchProposal, what: str):
    object.__setattr__(obj, "start_date", parse_date(obj.start_date))
    object.__setattr__(obj, "end_date", parse_date(obj.end_date))
    object.__setattr__(obj, "start_time", parse_time(obj.start_time))
    object.__setattr__(obj, "end_time", parse_time(obj.end_time))
    object.__setattr__(obj, "days_of_week", normalize_weekdays(obj.days_of_week or ()))
    _check_date_range(obj.start_date, obj.end_date, what)
    _check_time_window(obj.start_time, obj.end_time, what)


@dataclass(frozen=True)
class FreeWindow:
    date: date
    windows: tuple[Interval, ...]

    def time_labels(self) -> list[str]:
        return [w.label() for w in self.windows]

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "time": self.time_labels()}


@dataclass
class FacultyFreeSlots:
    faculty: Faculty
    slots: list[FreeWindow] = field(default_factory=list)


def batch_status(start_date: date, end_date: date, today: date) -> str:
    """Schedule status of a batch relative to `today`."""
    if today < start_date:
        return "Upcoming"
    if today > end_date:
        return "Completed"
    return "Active"
