from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.db import get_db
from app.services.activity import recent_activities

router = APIRouter(
    prefix="/api/activities",
    tags=["activities"],
)


class ActivityRead(BaseModel):
    id: int
    action: str
    item: str
    user: str
    type: str
    created_at: str


@router.get("", response_model=List[ActivityRead])
def list_activities(
    limit: int | None = Query(None, ge=1, le=100, description="Maximum number of results"),
    db: Session = Depends(get_db),
):
    """Most recent activities first."""
    return [
        ActivityRead(
            id=a.id,
            action=a.action,
            item=a.item,
            user=a.user,
            type=a.type,
            created_at=a.created_at.isoformat() if a.created_at else "",
        )
        for a in recent_activities(db, limit=limit)
    ]
