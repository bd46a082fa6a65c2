"""
Conflict checks for a batch that is about to be created or edited.

The same check backs the pre-flight endpoint a client calls before saving
and the enforcement done when the batch is actually written, so both
always agree. It only looks at the snapshot it is handed: two concurrent
writers can both pass it before either commits.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Hashable, Iterable

from institute_shared.domain import (
    WEEKDAYS,
    Batch,
    BatchProposal,
    Faculty,
    Interval,
)
from institute_shared.services.intervals import overlaps
from institute_shared.services.recurrence import dates_on_weekdays, weekday_of


# =====================
# Conflict results
# =====================

@dataclass(frozen=True)
class BatchConflict(ABC):
    kind: ClassVar[str] = "conflict"

    weekday: str

    @property
    @abstractmethod
    def message(self) -> str:
        """Human-readable explanation shown to the admin."""

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message, "weekday": self.weekday}


@dataclass(frozen=True)
class NoAvailabilityForDay(BatchConflict):
    kind: ClassVar[str] = "no_availability_for_day"

    faculty_name: str = ""

    @property
    def message(self) -> str:
        who = f"Faculty {self.faculty_name}" if self.faculty_name else "Faculty"
        return f"{who} is not available on {self.weekday}."


@dataclass(frozen=True)
class OutsideAvailableHours(BatchConflict):
    kind: ClassVar[str] = "outside_available_hours"

    available: Interval = None
    requested: Interval = None

    @property
    def message(self) -> str:
        return (
            f"Batch time on {self.weekday} is outside of faculty's available hours. "
            f"Available: {self.available}. Requested: {self.requested}."
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["available"] = self.available.label()
        data["requested"] = self.requested.label()
        return data


@dataclass(frozen=True)
class ScheduleClash(BatchConflict):
    kind: ClassVar[str] = "schedule_clash"

    date: date = None
    conflicting_batch: Batch = None

    @property
    def message(self) -> str:
        other = self.conflicting_batch
        return (
            f'On {self.weekday}, the batch clashes with "{other.name or other.id}" '
            f"which runs from {other.start_date} to {other.end_date} "
            f"at {other.interval}."
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["date"] = self.date.isoformat()
        data["conflicting_batch_id"] = self.conflicting_batch.id
        data["conflicting_batch_name"] = self.conflicting_batch.name
        return data


# =====================
# Checks
# =====================

def _ordered_weekdays(days: Iterable[str]) -> list[str]:
    wanted = set(days)
    return [d for d in WEEKDAYS if d in wanted]


def check_availability(proposal: BatchProposal, faculty: Faculty) -> BatchConflict | None:
    """Every weekday of the batch must fall inside the faculty's availability."""
    requested = proposal.interval
    for weekday in _ordered_weekdays(proposal.days_of_week):
        window = faculty.availability_for(weekday)
        if window is None:
            return NoAvailabilityForDay(weekday=weekday, faculty_name=faculty.name)
        if proposal.start_time < window.start or proposal.end_time > window.end:
            return OutsideAvailableHours(
                weekday=weekday,
                available=window.interval,
                requested=requested,
            )
    return None


def _date_ranges_overlap(a: BatchProposal, b: BatchProposal) -> bool:
    return a.start_date <= b.end_date and a.end_date >= b.start_date


def check_clashes(
    proposal: BatchProposal,
    existing_batches: Iterable[Batch],
    exclude_batch_id: Hashable | None = None,
) -> ScheduleClash | None:
    """First date on which the proposal runs into another batch of the same faculty."""
    candidates = [
        b
        for b in existing_batches
        if b.faculty_id == proposal.faculty_id
        and (exclude_batch_id is None or b.id != exclude_batch_id)
        and b.days_of_week & proposal.days_of_week
        and _date_ranges_overlap(proposal, b)
        and overlaps(proposal.interval, b.interval)
    ]
    if not candidates:
        return None

    for day in dates_on_weekdays(proposal.start_date, proposal.end_date, proposal.days_of_week):
        weekday = weekday_of(day)
        for other in candidates:
            if other.covers(day) and other.meets_on(weekday):
                return ScheduleClash(weekday=weekday, date=day, conflicting_batch=other)
    return None


def validate_batch(
    proposal: BatchProposal,
    faculty: Faculty,
    existing_batches: Iterable[Batch],
    exclude_batch_id: Hashable | None = None,
) -> BatchConflict | None:
    """
    Check a proposed batch against its faculty's availability, then against
    that faculty's other batches. Returns the first conflict found, or None.

    `exclude_batch_id` is the id of the batch being edited, so it is not
    reported as clashing with itself.
    """
    if faculty.id != proposal.faculty_id:
        raise ValueError(
            f"Proposal is for faculty {proposal.faculty_id!r}, got faculty {faculty.id!r}"
        )

    conflict = check_availability(proposal, faculty)
    if conflict is not None:
        return conflict
    return check_clashes(proposal, existing_batches, exclude_batch_id)
