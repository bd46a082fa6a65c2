from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.db import get_db
from app.models import Batch, Faculty, Skill, Student

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


class DashboardStats(BaseModel):
    total_faculty: int
    active_batches: int
    total_skills: int
    total_students: int


@router.get("/stats", response_model=DashboardStats)
def get_stats(db: Session = Depends(get_db)):
    today = datetime.now(timezone.utc).date()
    active = (
        db.query(Batch)
        .filter(Batch.start_date <= today, Batch.end_date >= today)
        .count()
    )
    return DashboardStats(
        total_faculty=db.query(Faculty).count(),
        active_batches=active,
        total_skills=db.query(Skill).count(),
        total_students=db.query(Student).count(),
    )
