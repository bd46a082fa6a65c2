from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.schemas import SkillRead
from app.db import get_db
from app.models import Skill
from app.services.activity import log_activity

router = APIRouter(prefix="/api/skills", tags=["skills"])


class SkillCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=100)
    description: str | None = None


class SkillUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    category: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None


def _get_skill_or_404(db: Session, skill_id: int) -> Skill:
    skill = db.query(Skill).filter(Skill.id == skill_id).first()
    if not skill:
        raise HTTPException(status_code=404, detail="Skill not found")
    return skill


@router.get("", response_model=List[SkillRead])
def list_skills(db: Session = Depends(get_db)):
    return db.query(Skill).order_by(Skill.name).all()


@router.post("", response_model=SkillRead, status_code=201)
def create_skill(skill_in: SkillCreate, db: Session = Depends(get_db)):
    skill = Skill(**skill_in.model_dump())
    db.add(skill)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Skill with this name already exists")
    db.refresh(skill)
    log_activity(db, "Created", f'Skill "{skill.name}"')
    return skill


@router.put("/{skill_id}", response_model=SkillRead)
def update_skill(skill_id: int, skill_in: SkillUpdate, db: Session = Depends(get_db)):
    skill = _get_skill_or_404(db, skill_id)
    for field, value in skill_in.model_dump(exclude_unset=True).items():
        if value is None and field != "description":
            continue
        setattr(skill, field, value)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Skill with this name already exists")
    db.refresh(skill)
    log_activity(db, "Updated", f'Skill "{skill.name}"')
    return skill


@router.delete("/{skill_id}", status_code=204)
def delete_skill(skill_id: int, db: Session = Depends(get_db)):
    skill = _get_skill_or_404(db, skill_id)
    name = skill.name
    db.delete(skill)
    db.commit()
    log_activity(db, "Deleted", f'Skill "{name}"')
