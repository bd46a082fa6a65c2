from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.db import get_db
from app.services import snapshots
from institute_shared.domain import parse_date
from institute_shared.errors import InvalidRangeError
from institute_shared.services.free_slots import find_free_slots

router = APIRouter(prefix="/api/free-slots", tags=["free-slots"])


class SkillRef(BaseModel):
    id: int
    name: str


class FreeSlotFaculty(BaseModel):
    id: int
    name: str
    skills: List[SkillRef] = []


class FreeSlotDay(BaseModel):
    date: str
    time: List[str]


class FacultyFreeSlotsRead(BaseModel):
    faculty: FreeSlotFaculty
    slots: List[FreeSlotDay]


@router.get("", response_model=List[FacultyFreeSlotsRead])
def get_free_slots(
    start_date: str | None = Query(None, description="First date, YYYY-MM-DD"),
    end_date: str | None = Query(None, description="Last date (inclusive), YYYY-MM-DD"),
    faculty_id: int | None = Query(None, description="Only this faculty member"),
    skill_id: int | None = Query(None, description="Only faculty holding this skill"),
    db: Session = Depends(get_db),
):
    """
    Open time per faculty per date: weekly availability minus the batches
    each faculty member already teaches that day.
    """
    if not start_date or not end_date:
        raise HTTPException(status_code=400, detail="Please select a start and end date.")
    try:
        start = parse_date(start_date)
        end = parse_date(end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    rows = snapshots.load_faculty_rows(db, faculty_id=faculty_id)
    rows_by_id = {row.id: row for row in rows}
    faculties = [snapshots.to_faculty(row) for row in rows]
    batches = snapshots.load_batches(db, faculty_id=faculty_id)

    try:
        results = find_free_slots(
            faculties,
            batches,
            start,
            end,
            faculty_id=faculty_id,
            skill_id=skill_id,
        )
    except InvalidRangeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    out: list[FacultyFreeSlotsRead] = []
    for entry in results:
        row = rows_by_id[entry.faculty.id]
        out.append(
            FacultyFreeSlotsRead(
                faculty=FreeSlotFaculty(
                    id=row.id,
                    name=row.name,
                    skills=[SkillRef(id=s.id, name=s.name) for s in row.skills],
                ),
                slots=[FreeSlotDay(**w.to_dict()) for w in entry.slots],
            )
        )
    return out
