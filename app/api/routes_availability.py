from __future__ import annotations

from collections import Counter
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.schemas import AvailabilityRead, AvailabilitySlot
from app.db import get_db
from app.models import Faculty, FacultyAvailability
from app.services.activity import log_activity

router = APIRouter(
    prefix="/api/availability",
    tags=["availability"],
)


# =====================
# Schemas (Pydantic)
# =====================

class AvailabilitySet(BaseModel):
    faculty_id: int
    availability: List[AvailabilitySlot]


# =====================
# Faculty Availability Endpoints
# =====================

@router.get("/faculty/{faculty_id}", response_model=List[AvailabilityRead])
def get_faculty_availability(
    faculty_id: int,
    db: Session = Depends(get_db),
):
    """List the weekly availability of a faculty member."""
    faculty = db.query(Faculty).filter(Faculty.id == faculty_id).first()
    if not faculty:
        raise HTTPException(status_code=404, detail="Faculty not found")

    return (
        db.query(FacultyAvailability)
        .filter(FacultyAvailability.faculty_id == faculty_id)
        .order_by(FacultyAvailability.id)
        .all()
    )


@router.post("", response_model=List[AvailabilityRead])
def set_faculty_availability(
    body: AvailabilitySet,
    db: Session = Depends(get_db),
):
    """
    Replace the whole weekly availability of a faculty member.
    An empty list clears it.
    """
    faculty = db.query(Faculty).filter(Faculty.id == body.faculty_id).first()
    if not faculty:
        raise HTTPException(status_code=404, detail="Faculty not found")

    # Free-slot search uses one window per weekday.
    repeated = [day for day, n in Counter(s.day_of_week for s in body.availability).items() if n > 1]
    if repeated:
        raise HTTPException(
            status_code=400,
            detail=f"Only one availability window per weekday is allowed: {', '.join(repeated)}",
        )

    db.query(FacultyAvailability).filter(FacultyAvailability.faculty_id == body.faculty_id).delete()

    entries = [
        FacultyAvailability(
            faculty_id=body.faculty_id,
            day_of_week=slot.day_of_week,
            start_time=slot.start_time,
            end_time=slot.end_time,
        )
        for slot in body.availability
    ]
    db.add_all(entries)
    db.commit()
    for e in entries:
        db.refresh(e)

    log_activity(db, "Updated", f'Availability of faculty "{faculty.name}"')
    return entries
