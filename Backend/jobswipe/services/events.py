# backend/jobswipe/services/events.py

"""
Outbox handoff for notifications.

Producers call ``emit`` inside the transaction of the action that owes a
notification. ``dispatch_pending`` runs afterwards (as a FastAPI background
task after the response, and periodically from the Celery worker) and turns
each pending event into Notification rows.

Delivery is at-least-once: an event that fails stays pending with its
attempt count bumped. Notifications remember the event that produced them,
so a redelivered event skips recipients it already reached.
"""

import logging
import uuid
from typing import Callable, Dict, List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobswipe.db.base import utcnow
from jobswipe.models.notification import Notification
from jobswipe.models.outbox import OutboxEvent

logger = logging.getLogger(__name__)

MATCH_CREATED = "match.created"
MESSAGE_SENT = "message.sent"
USER_WELCOME = "user.welcome"
JOB_POSTED = "job.posted"


def emit(db: Session, kind: str, payload: dict) -> OutboxEvent:
    """Queue an event in the caller's transaction; nothing is sent yet."""
    event = OutboxEvent(kind=kind, payload=payload)
    db.add(event)
    return event


# ----------------------------
# Event -> notification builders
# ----------------------------
def _match_created(payload: dict) -> List[dict]:
    link = f"/matches?id={payload['match_id']}"
    return [
        {
            "user_id": payload["candidate_id"],
            "type": "match",
            "title": "New Match!",
            "body": f"You matched with {payload['company_name']} for {payload['job_title']}",
            "action_link": link,
        },
        {
            "user_id": payload["recruiter_id"],
            "type": "match",
            "title": "New Match!",
            "body": f"A candidate matched with your {payload['job_title']} position",
            "action_link": link,
        },
    ]


def _message_sent(payload: dict) -> List[dict]:
    sender = payload.get("sender_name") or "your match"
    return [
        {
            "user_id": payload["recipient_id"],
            "type": "message",
            "title": "New Message",
            "body": f"You have a new message from {sender}",
            "action_link": f"/matches?id={payload['match_id']}",
        }
    ]


def _user_welcome(payload: dict) -> List[dict]:
    return [
        {
            "user_id": payload["user_id"],
            "type": "system",
            "title": "Welcome to JobSwipe AI!",
            "body": "Complete your profile to start matching with opportunities.",
            "action_link": "/onboarding",
        }
    ]


def _job_posted(payload: dict) -> List[dict]:
    return [
        {
            "user_id": payload["poster_id"],
            "type": "job",
            "title": "Job posted",
            "body": f"{payload['title']} is now live for candidates.",
            "action_link": f"/jobs/{payload['job_id']}",
        }
    ]


BUILDERS: Dict[str, Callable[[dict], List[dict]]] = {
    MATCH_CREATED: _match_created,
    MESSAGE_SENT: _message_sent,
    USER_WELCOME: _user_welcome,
    JOB_POSTED: _job_posted,
}


def deliver(db: Session, event: OutboxEvent) -> int:
    """Write the notifications an event owes. Returns how many were new."""
    builder = BUILDERS.get(event.kind)
    if builder is None:
        raise ValueError(f"Unknown event kind: {event.kind}")

    written = 0
    for fields in builder(event.payload):
        recipient = uuid.UUID(str(fields.pop("user_id")))
        already = db.execute(
            select(Notification.id).where(
                Notification.source_event_id == event.id,
                Notification.user_id == recipient,
            )
        ).first()
        if already:
            continue
        db.add(Notification(user_id=recipient, source_event_id=event.id, **fields))
        written += 1
    return written


def dispatch_pending(session_factory: Callable[[], Session], limit: int = 100) -> int:
    """
    Deliver up to ``limit`` pending events, oldest first, committing each one
    on its own. Returns the number of events delivered.
    """
    delivered = 0
    with session_factory() as db:
        event_ids = db.execute(
            select(OutboxEvent.id)
            .where(OutboxEvent.delivered_at.is_(None))
            .order_by(OutboxEvent.created_at)
            .limit(limit)
        ).scalars().all()

        for event_id in event_ids:
            event = db.get(OutboxEvent, event_id)
            try:
                written = deliver(db, event)
                event.delivered_at = utcnow()
                event.attempts += 1
                db.commit()
                delivered += 1
                logger.debug(f"Delivered {event.kind} event {event_id} ({written} notifications)")
            except (SQLAlchemyError, KeyError, ValueError) as e:
                db.rollback()
                logger.warning(f"Outbox event {event_id} failed, leaving it pending: {e}")
                try:
                    event = db.get(OutboxEvent, event_id)
                    event.attempts += 1
                    event.last_error = str(e)[:2000]
                    db.commit()
                except SQLAlchemyError:
                    db.rollback()
                    logger.exception(f"Could not record failure for outbox event {event_id}")

    if delivered:
        logger.info(f"Outbox dispatch delivered {delivered} event(s)")
    return delivered
