from __future__ import annotations

from typing import List, Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.api.schemas import FacultyRead
from app.db import get_db
from app.models import Faculty, Skill
from app.services.activity import log_activity

router = APIRouter(prefix="/api/faculty", tags=["faculty"])

EmploymentType = Literal["full-time", "part-time", "contract"]


# ========= Schemas =========

class FacultyCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=200)
    phone_number: str | None = Field(None, max_length=50)
    employment_type: EmploymentType | None = None
    skill_ids: List[int] = Field(default_factory=list)


class FacultyUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    email: str | None = Field(None, min_length=3, max_length=200)
    phone_number: str | None = Field(None, max_length=50)
    employment_type: EmploymentType | None = None
    is_active: bool | None = None
    skill_ids: List[int] | None = None  # None keeps the current skills


# ========= Helpers =========

def _get_faculty_or_404(db: Session, faculty_id: int) -> Faculty:
    faculty = (
        db.query(Faculty)
        .options(selectinload(Faculty.skills), selectinload(Faculty.availability))
        .filter(Faculty.id == faculty_id)
        .first()
    )
    if not faculty:
        raise HTTPException(status_code=404, detail="Faculty not found")
    return faculty


def _load_skills(db: Session, skill_ids: List[int]) -> list[Skill]:
    wanted = set(skill_ids)
    if not wanted:
        return []
    skills = db.query(Skill).filter(Skill.id.in_(wanted)).all()
    missing = wanted - {s.id for s in skills}
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown skill ids: {sorted(missing)}",
        )
    return skills


# ========= Endpoints =========

@router.get("", response_model=List[FacultyRead])
def list_faculty(db: Session = Depends(get_db)):
    return (
        db.query(Faculty)
        .options(selectinload(Faculty.skills), selectinload(Faculty.availability))
        .order_by(Faculty.name)
        .all()
    )


@router.get("/{faculty_id}", response_model=FacultyRead)
def get_faculty(faculty_id: int, db: Session = Depends(get_db)):
    return _get_faculty_or_404(db, faculty_id)


@router.post("", response_model=FacultyRead, status_code=201)
def create_faculty(faculty_in: FacultyCreate, db: Session = Depends(get_db)):
    payload = faculty_in.model_dump()
    skills = _load_skills(db, payload.pop("skill_ids"))

    faculty = Faculty(**payload)
    faculty.skills = skills
    db.add(faculty)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Faculty with this email already exists")
    db.refresh(faculty)
    log_activity(db, "Created", f'Faculty "{faculty.name}"')
    return faculty


@router.put("/{faculty_id}", response_model=FacultyRead)
def update_faculty(faculty_id: int, faculty_in: FacultyUpdate, db: Session = Depends(get_db)):
    faculty = _get_faculty_or_404(db, faculty_id)

    payload = faculty_in.model_dump(exclude_unset=True)
    skill_ids = payload.pop("skill_ids", None)
    if skill_ids is not None:
        faculty.skills = _load_skills(db, skill_ids)

    for field, value in payload.items():
        if value is None and field in ("name", "email", "is_active"):
            continue
        setattr(faculty, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Faculty with this email already exists")
    db.refresh(faculty)
    log_activity(db, "Updated", f'Faculty "{faculty.name}"')
    return faculty


@router.delete("/{faculty_id}", status_code=204)
def delete_faculty(faculty_id: int, db: Session = Depends(get_db)):
    faculty = _get_faculty_or_404(db, faculty_id)
    name = faculty.name
    # Batches keep running without a faculty; their faculty_id is cleared.
    db.delete(faculty)
    db.commit()
    log_activity(db, "Deleted", f'Faculty "{name}"')
