"""
Activity feed: a short record of who created, updated or deleted what.
"""
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models import Activity

logger = logging.getLogger(__name__)


def log_activity(
    db: Session,
    action: str,
    item: str,
    user: str | None = None,
    activity_type: str = "system",
) -> Activity | None:
    """
    Record an activity entry.

    Args:
        db: Database session
        action: What happened (e.g., "Created", "Updated", "Deleted")
        item: What it happened to (e.g., 'Faculty "Jane Doe"')
        user: Who did it; defaults to ACTIVITY_DEFAULT_USER
        activity_type: Category shown in the feed

    Returns:
        The created Activity, or None if it could not be stored. The
        change that triggered it has already been committed either way.
    """
    entry = Activity(
        action=action,
        item=item,
        user=user or settings.ACTIVITY_DEFAULT_USER,
        type=activity_type,
    )
    db.add(entry)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to record activity %s %s", action, item)
        return None
    db.refresh(entry)
    return entry


def recent_activities(db: Session, limit: int | None = None) -> list[Activity]:
    """Most recent activities first."""
    return (
        db.query(Activity)
        .order_by(Activity.created_at.desc(), Activity.id.desc())
        .limit(limit or settings.ACTIVITY_FEED_LIMIT)
        .all()
    )
