from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.schemas import StudentRead
from app.db import get_db
from app.models import Student
from app.services.activity import log_activity

router = APIRouter(prefix="/api/students", tags=["students"])


class StudentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    admission_number: str | None = Field(None, max_length=50)
    phone_number: str | None = Field(None, max_length=50)


class StudentUpdate(StudentCreate):
    pass


def _get_student_or_404(db: Session, student_id: int) -> Student:
    student = db.query(Student).filter(Student.id == student_id).first()
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.get("", response_model=List[StudentRead])
def list_students(db: Session = Depends(get_db)):
    return db.query(Student).order_by(Student.name).all()


@router.post("", response_model=StudentRead, status_code=201)
def create_student(student_in: StudentCreate, db: Session = Depends(get_db)):
    student = Student(**student_in.model_dump())
    db.add(student)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Admission number already in use")
    db.refresh(student)
    log_activity(db, "Created", f'Student "{student.name}"')
    return student


@router.put("/{student_id}", response_model=StudentRead)
def update_student(student_id: int, student_in: StudentUpdate, db: Session = Depends(get_db)):
    student = _get_student_or_404(db, student_id)

    for field, value in student_in.model_dump().items():
        setattr(student, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Admission number already in use")
    db.refresh(student)
    log_activity(db, "Updated", f'Student "{student.name}"')
    return student


@router.delete("/{student_id}", status_code=204)
def delete_student(student_id: int, db: Session = Depends(get_db)):
    student = _get_student_or_404(db, student_id)
    name = student.name
    db.delete(student)
    db.commit()
    log_activity(db, "Deleted", f'Student "{name}"')
