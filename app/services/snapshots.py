"""
Turn database rows into the immutable entities the scheduling core expects.

A row that breaks an entity invariant (availability ending before it
starts, a batch with its dates inverted, an unknown weekday) is skipped
with a warning instead of failing the whole query.
"""
from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy.orm import Session, selectinload

from app import models
from institute_shared.domain import AvailabilityWindow, Batch, Faculty

logger = logging.getLogger(__name__)


def to_faculty(row: models.Faculty) -> Faculty:
    windows = []
    for a in row.availability:
        try:
            windows.append(AvailabilityWindow(a.day_of_week, a.start_time, a.end_time))
        except ValueError as e:
            logger.warning("Skipping availability %s of faculty %s: %s", a.id, row.id, e)
    return Faculty(
        id=row.id,
        name=row.name,
        skill_ids=frozenset(s.id for s in row.skills),
        availability=tuple(windows),
    )


def to_batch(row: models.Batch) -> Batch | None:
    try:
        return Batch(
            id=row.id,
            name=row.name,
            faculty_id=row.faculty_id,
            skill_id=row.skill_id,
            start_date=row.start_date,
            end_date=row.end_date,
            start_time=row.start_time,
            end_time=row.end_time,
            days_of_week=row.days_of_week or (),
        )
    except ValueError as e:
        logger.warning("Skipping batch %s: %s", row.id, e)
        return None


def to_batches(rows: Iterable[models.Batch]) -> list[Batch]:
    return [b for b in (to_batch(r) for r in rows) if b is not None]


def load_faculty_rows(db: Session, faculty_id: int | None = None) -> list[models.Faculty]:
    query = db.query(models.Faculty).options(
        selectinload(models.Faculty.skills),
        selectinload(models.Faculty.availability),
    )
    if faculty_id is not None:
        query = query.filter(models.Faculty.id == faculty_id)
    return query.order_by(models.Faculty.name, models.Faculty.id).all()


def load_faculties(db: Session, faculty_id: int | None = None) -> list[Faculty]:
    return [to_faculty(row) for row in load_faculty_rows(db, faculty_id)]


def load_batches(db: Session, faculty_id: int | None = None) -> list[Batch]:
    query = db.query(models.Batch).filter(models.Batch.faculty_id.isnot(None))
    if faculty_id is not None:
        query = query.filter(models.Batch.faculty_id == faculty_id)
    return to_batches(query.order_by(models.Batch.id).all())
