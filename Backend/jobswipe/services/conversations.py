# backend/jobswipe/services/conversations.py

import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import select, update, or_, func
from sqlalchemy.orm import Session

from jobswipe.db.base import utcnow
from jobswipe.errors import Forbidden, InvalidInput, NotFound
from jobswipe.models.match import Match
from jobswipe.models.message import Message
from jobswipe.models.user import User
from jobswipe.services import events

logger = logging.getLogger(__name__)

# Below this many messages the conversation gets opening-line suggestions
SUGGESTION_THRESHOLD = 3


def serialize_message(message: Message) -> dict:
    return {
        "id": str(message.id),
        "match_id": str(message.match_id),
        "sender_id": str(message.sender_id),
        "recipient_id": str(message.recipient_id),
        "content": message.body,
        "message_type": message.message_type,
        "is_read": message.is_read,
        "read_at": message.read_at,
        "created_at": message.created_at,
    }


def _job_summary(match: Match) -> Optional[dict]:
    if match.job is None:
        return None
    return {
        "id": str(match.job.id),
        "title": match.job.title,
        "company": {"name": match.job.company.name if match.job.company else None},
    }


def load_match_for(db: Session, user: User, match_id: uuid.UUID) -> Match:
    """Fetches a match the user takes part in, or raises NotFound/Forbidden."""
    match = db.get(Match, match_id)
    if match is None:
        raise NotFound("Match not found")
    if not match.has_participant(user.id):
        raise Forbidden("You are not part of this match")
    return match


def list_matches(db: Session, user: User) -> List[dict]:
    """Active matches for the user, most recent conversation first."""
    matches = db.execute(
        select(Match)
        .where(
            or_(Match.user_a_id == user.id, Match.user_b_id == user.id),
            Match.status == "active",
        )
        .order_by(func.coalesce(Match.last_message_at, Match.created_at).desc())
    ).scalars().all()

    results = []
    for match in matches:
        last_message = db.execute(
            select(Message)
            .where(Message.match_id == match.id)
            .order_by(Message.created_at.desc())
            .limit(1)
        ).scalar_one_or_none()

        results.append({
            "id": str(match.id),
            "other_user": match.other_participant(user.id).public_summary(),
            "job": _job_summary(match),
            "last_message": {
                "content": last_message.body,
                "is_from_me": last_message.sender_id == user.id,
                "created_at": last_message.created_at,
                "is_read": last_message.is_read,
            } if last_message else None,
            "created_at": match.created_at,
            "last_message_at": match.last_message_at,
        })
    return results


def open_conversation(db: Session, user: User, match_id: uuid.UUID) -> Tuple[Match, List[Message]]:
    """
    Returns the match and its messages in chronological order, marking the
    messages addressed to the user as read. Messages the user sent are left
    as they are.
    """
    match = load_match_for(db, user, match_id)

    db.execute(
        update(Message)
        .where(
            Message.match_id == match.id,
            Message.recipient_id == user.id,
            Message.is_read.is_(False),
        )
        .values(is_read=True, read_at=utcnow())
        .execution_options(synchronize_session="fetch")
    )

    messages = db.execute(
        select(Message)
        .where(Message.match_id == match.id)
        .order_by(Message.created_at.asc())
    ).scalars().all()
    return match, list(messages)


def match_header(match: Match, user: User) -> dict:
    return {
        "id": str(match.id),
        "other_user": match.other_participant(user.id).public_summary(),
        "job": _job_summary(match),
    }


def send_message(db: Session, user: User, match_id: uuid.UUID, content: Optional[str], message_type: str = "text") -> Message:
    """Appends a message to the match and queues a notification for the other side."""
    match = load_match_for(db, user, match_id)

    body = (content or "").strip()
    if not body:
        raise InvalidInput("Message cannot be empty")

    recipient_id = match.other_participant_id(user.id)
    message = Message(
        match_id=match.id,
        sender_id=user.id,
        recipient_id=recipient_id,
        body=body,
        message_type=message_type or "text",
    )
    db.add(message)
    db.flush()

    match.last_message_at = message.created_at

    events.emit(db, events.MESSAGE_SENT, {
        "match_id": str(match.id),
        "message_id": str(message.id),
        "recipient_id": str(recipient_id),
        "sender_name": user.name,
    })
    logger.info(f"User {user.id} sent message {message.id} in match {match.id}")
    return message
