import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select, update, delete, func
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from jobswipe.db.base import utcnow
from jobswipe.db.session import get_db
from jobswipe.errors import Unexpected
from jobswipe.models.notification import Notification
from jobswipe.models.user import User
from jobswipe.schemas.notification import NotificationsMarkRead, NotificationsDelete
from jobswipe.security.deps import require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def serialize_notification(n: Notification) -> dict:
    return {
        "id": str(n.id),
        "type": n.type,
        "title": n.title,
        "message": n.body,
        "action_url": n.action_link,
        "is_read": n.is_read,
        "read_at": n.read_at,
        "created_at": n.created_at,
    }


@router.get("")
def list_notifications(
    limit: int = Query(20, ge=1, le=100),
    unreadOnly: bool = Query(False),
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    """
    The caller's notifications, newest first, plus the unread count.
    """
    try:
        query = select(Notification).where(Notification.user_id == user.id)
        if unreadOnly:
            query = query.where(Notification.is_read.is_(False))
        notifications = db.execute(
            query.order_by(Notification.created_at.desc()).limit(limit)
        ).scalars().all()

        unread_count = db.execute(
            select(func.count(Notification.id)).where(
                Notification.user_id == user.id,
                Notification.is_read.is_(False),
            )
        ).scalar_one()
    except SQLAlchemyError:
        logger.exception(f"Error fetching notifications for user {user.id}")
        raise Unexpected()

    return {
        "notifications": [serialize_notification(n) for n in notifications],
        "unreadCount": unread_count,
    }


@router.put("")
def mark_notifications_read(
    body: NotificationsMarkRead,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    """
    Marks the given notifications (or all of them) as read. Ids that belong
    to someone else are ignored.
    """
    stmt = (
        update(Notification)
        .where(Notification.user_id == user.id, Notification.is_read.is_(False))
        .values(is_read=True, read_at=utcnow())
    )
    if not body.mark_all:
        if not body.notification_ids:
            return {"success": True, "updated": 0}
        stmt = stmt.where(Notification.id.in_(body.notification_ids))

    try:
        result = db.execute(stmt.execution_options(synchronize_session=False))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error updating notifications for user {user.id}")
        raise Unexpected()

    return {"success": True, "updated": result.rowcount}


@router.delete("")
def delete_notifications(
    body: NotificationsDelete,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    """
    Deletes the given notifications (or all of them) for the caller.
    """
    stmt = delete(Notification).where(Notification.user_id == user.id)
    if not body.delete_all:
        if not body.notification_ids:
            return {"success": True, "deleted": 0}
        stmt = stmt.where(Notification.id.in_(body.notification_ids))

    try:
        result = db.execute(stmt.execution_options(synchronize_session=False))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error deleting notifications for user {user.id}")
        raise Unexpected()

    return {"success": True, "deleted": result.rowcount}
