from __future__ import annotations

from datetime import date, time
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from institute_shared.domain import normalize_weekday


# ========= Skills =========

class SkillRead(BaseModel):
    id: int
    name: str
    category: str | None = None
    description: str | None = None

    model_config = ConfigDict(from_attributes=True)


# ========= Availability =========

class AvailabilitySlot(BaseModel):
    day_of_week: str
    start_time: time
    end_time: time

    @field_validator("day_of_week")
    @classmethod
    def _known_weekday(cls, v: str) -> str:
        return normalize_weekday(v)

    @model_validator(mode="after")
    def _start_before_end(self):
        if not self.start_time < self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class AvailabilityRead(BaseModel):
    id: int
    faculty_id: int
    day_of_week: str
    start_time: time
    end_time: time

    model_config = ConfigDict(from_attributes=True)


# ========= Faculty =========

class FacultySummary(BaseModel):
    id: int
    name: str
    email: str | None = None

    model_config = ConfigDict(from_attributes=True)


class FacultyRead(BaseModel):
    id: int
    name: str
    email: str
    phone_number: str | None = None
    employment_type: str | None = None
    is_active: bool = True
    skills: List[SkillRead] = []
    availability: List[AvailabilityRead] = []

    model_config = ConfigDict(from_attributes=True)


# ========= Students =========

class StudentRead(BaseModel):
    id: int
    name: str
    admission_number: str | None = None
    phone_number: str | None = None

    model_config = ConfigDict(from_attributes=True)


# ========= Batch schedule =========

class BatchSchedule(BaseModel):
    """Date range, daily time window and weekdays shared by every batch payload."""

    start_date: date
    end_date: date
    start_time: time
    end_time: time
    days_of_week: List[str] = Field(default_factory=list)

    @field_validator("days_of_week")
    @classmethod
    def _known_weekdays(cls, v: List[str]) -> List[str]:
        seen: list[str] = []
        for name in v:
            day = normalize_weekday(name)
            if day not in seen:
                seen.append(day)
        return seen

    @model_validator(mode="after")
    def _ordered(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        if not self.start_time < self.end_time:
            raise ValueError("start_time must be before end_time")
        return self
