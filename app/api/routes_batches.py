from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session, selectinload

from app.api.schemas import BatchSchedule, FacultySummary, SkillRead, StudentRead
from app.core.config import settings
from app.db import get_db
from app.models import Batch, Faculty, Skill, Student
from app.services import snapshots
from app.services.activity import log_activity
from institute_shared.domain import BatchProposal, batch_status
from institute_shared.services.batch_conflicts import BatchConflict, validate_batch

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/batches", tags=["batches"])


# ========= Schemas =========

class BatchCreate(BatchSchedule):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    faculty_id: int | None = None
    skill_id: int | None = None
    max_students: int | None = Field(None, ge=1)
    status: str = Field("Upcoming", max_length=20)
    student_ids: List[int] = Field(default_factory=list)


class BatchUpdate(BatchCreate):
    pass


class BatchValidateRequest(BatchSchedule):
    faculty_id: int
    exclude_batch_id: int | None = None


class BatchValidateResult(BaseModel):
    ok: bool
    conflict: dict | None = None


class BatchRead(BaseModel):
    id: int
    name: str
    description: str | None = None
    start_date: str
    end_date: str
    start_time: str
    end_time: str
    days_of_week: List[str] = []
    faculty_id: int | None = None
    skill_id: int | None = None
    max_students: int | None = None
    status: str

    # derived / denormalized fields for frontend
    schedule_status: str
    faculty: FacultySummary | None = None
    skill: SkillRead | None = None
    students: List[StudentRead] = []

    model_config = ConfigDict(from_attributes=True)


def _today():
    return datetime.now(timezone.utc).date()


def _to_read_model(batch: Batch) -> BatchRead:
    return BatchRead(
        id=batch.id,
        name=batch.name,
        description=batch.description,
        start_date=batch.start_date.isoformat(),
        end_date=batch.end_date.isoformat(),
        start_time=batch.start_time.strftime("%H:%M"),
        end_time=batch.end_time.strftime("%H:%M"),
        days_of_week=list(batch.days_of_week or []),
        faculty_id=batch.faculty_id,
        skill_id=batch.skill_id,
        max_students=batch.max_students,
        status=batch.status,
        schedule_status=batch_status(batch.start_date, batch.end_date, _today()),
        faculty=FacultySummary.model_validate(batch.faculty) if batch.faculty else None,
        skill=SkillRead.model_validate(batch.skill) if batch.skill else None,
        students=[StudentRead.model_validate(s) for s in batch.students],
    )


# ========= Helpers =========

def _get_batch_or_404(db: Session, batch_id: int) -> Batch:
    batch = (
        db.query(Batch)
        .options(
            selectinload(Batch.faculty),
            selectinload(Batch.skill),
            selectinload(Batch.students),
        )
        .filter(Batch.id == batch_id)
        .first()
    )
    if not batch:
        raise HTTPException(status_code=404, detail="Batch not found")
    return batch


def _find_conflict(
    db: Session,
    schedule: BatchSchedule,
    faculty_id: int,
    exclude_batch_id: int | None = None,
) -> BatchConflict | None:
    faculties = snapshots.load_faculties(db, faculty_id=faculty_id)
    if not faculties:
        raise HTTPException(status_code=400, detail="Faculty does not exist")

    proposal = BatchProposal(
        faculty_id=faculty_id,
        start_date=schedule.start_date,
        end_date=schedule.end_date,
        start_time=schedule.start_time,
        end_time=schedule.end_time,
        days_of_week=schedule.days_of_week,
    )
    existing = snapshots.load_batches(db, faculty_id=faculty_id)
    return validate_batch(proposal, faculties[0], existing, exclude_batch_id=exclude_batch_id)


def _enforce_no_conflict(db: Session, batch_in: BatchCreate, exclude_batch_id: int | None = None):
    if not settings.ENFORCE_BATCH_VALIDATION:
        return
    if batch_in.faculty_id is None or not batch_in.days_of_week:
        return

    conflict = _find_conflict(db, batch_in, batch_in.faculty_id, exclude_batch_id)
    if conflict is not None:
        logger.warning(
            "Rejected batch %r for faculty %s: %s",
            batch_in.name,
            batch_in.faculty_id,
            conflict.message,
        )
        raise HTTPException(status_code=409, detail=conflict.to_dict())


def _apply(db: Session, batch: Batch, batch_in: BatchCreate):
    """Copy a validated payload onto `batch`, resolving related rows."""
    if batch_in.faculty_id is not None:
        if not db.query(Faculty).filter(Faculty.id == batch_in.faculty_id).first():
            raise HTTPException(status_code=400, detail="Faculty does not exist")
    if batch_in.skill_id is not None:
        if not db.query(Skill).filter(Skill.id == batch_in.skill_id).first():
            raise HTTPException(status_code=400, detail="Skill does not exist")

    students: list[Student] = []
    wanted = set(batch_in.student_ids)
    if wanted:
        students = db.query(Student).filter(Student.id.in_(wanted)).all()
        missing = wanted - {s.id for s in students}
        if missing:
            raise HTTPException(status_code=400, detail=f"Unknown student ids: {sorted(missing)}")
    if batch_in.max_students is not None and len(students) > batch_in.max_students:
        raise HTTPException(
            status_code=400,
            detail=f"Batch allows at most {batch_in.max_students} students, got {len(students)}",
        )

    payload = batch_in.model_dump(exclude={"student_ids"})
    for field, value in payload.items():
        setattr(batch, field, value)
    batch.students = students


# ========= Endpoints =========

@router.get("", response_model=List[BatchRead])
def list_batches(db: Session = Depends(get_db)):
    batches = (
        db.query(Batch)
        .options(
            selectinload(Batch.faculty),
            selectinload(Batch.skill),
            selectinload(Batch.students),
        )
        .order_by(Batch.start_date, Batch.id)
        .all()
    )
    return [_to_read_model(b) for b in batches]


@router.get("/{batch_id}", response_model=BatchRead)
def get_batch(batch_id: int, db: Session = Depends(get_db)):
    return _to_read_model(_get_batch_or_404(db, batch_id))


@router.post("/validate", response_model=BatchValidateResult)
def validate_batch_schedule(body: BatchValidateRequest, db: Session = Depends(get_db)):
    """
    Pre-flight check for a batch that has not been saved yet.
    Runs the same rules create and update enforce.
    """
    conflict = _find_conflict(db, body, body.faculty_id, body.exclude_batch_id)
    if conflict is None:
        return BatchValidateResult(ok=True)
    return BatchValidateResult(ok=False, conflict=conflict.to_dict())


@router.post("", response_model=BatchRead, status_code=201)
def create_batch(batch_in: BatchCreate, db: Session = Depends(get_db)):
    _enforce_no_conflict(db, batch_in)

    batch = Batch()
    _apply(db, batch, batch_in)
    db.add(batch)
    db.commit()

    batch = _get_batch_or_404(db, batch.id)
    log_activity(db, "Created", f'Batch "{batch.name}"')
    return _to_read_model(batch)


@router.put("/{batch_id}", response_model=BatchRead)
def update_batch(batch_id: int, batch_in: BatchUpdate, db: Session = Depends(get_db)):
    batch = _get_batch_or_404(db, batch_id)
    _enforce_no_conflict(db, batch_in, exclude_batch_id=batch_id)

    _apply(db, batch, batch_in)
    db.commit()

    batch = _get_batch_or_404(db, batch_id)
    log_activity(db, "Updated", f'Batch "{batch.name}"')
    return _to_read_model(batch)


@router.delete("/{batch_id}", status_code=204)
def delete_batch(batch_id: int, db: Session = Depends(get_db)):
    batch = _get_batch_or_404(db, batch_id)
    name = batch.name
    db.delete(batch)
    db.commit()
    log_activity(db, "Deleted", f'Batch "{name}"')
