import uuid
from typing import Optional

from sqlalchemy.orm import Session

from jobswipe.models.activity_log import ActivityLog


def log_activity(db: Session, user_id: Optional[uuid.UUID], action: str, details: Optional[dict] = None) -> ActivityLog:
    """Adds an audit row to the caller's transaction."""
    entry = ActivityLog(user_id=user_id, action=action, details=details)
    db.add(entry)
    return entry
