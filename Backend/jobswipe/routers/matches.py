import logging
import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from jobswipe.db.session import get_db, get_session_factory
from jobswipe.errors import Unexpected
from jobswipe.models.user import User
from jobswipe.schemas.message import MessageCreate
from jobswipe.security.deps import require_user
from jobswipe.services import conversations
from jobswipe.services.ai import SuggestionClient, get_suggestion_client
from jobswipe.services.events import dispatch_pending

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/matches", tags=["Matches"])


@router.get("")
def list_matches(
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    """
    Active matches for the caller, most recent conversation first.
    """
    try:
        return {"matches": conversations.list_matches(db, user)}
    except SQLAlchemyError:
        logger.exception(f"Error fetching matches for user {user.id}")
        raise Unexpected()


@router.get("/{match_id}/messages")
def get_messages(
    match_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
    ai: SuggestionClient = Depends(get_suggestion_client),
):
    """
    Messages of a match in chronological order. Reading marks the caller's
    unread messages as read. New conversations also get opening-line
    suggestions.
    """
    try:
        match, messages = conversations.open_conversation(db, user, match_id)
        db.commit()
        header = conversations.match_header(match, user)
        payload = [conversations.serialize_message(m) for m in messages]
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error fetching messages for match {match_id}")
        raise Unexpected()

    suggestions = []
    if len(messages) < conversations.SUGGESTION_THRESHOLD:
        job_title = header["job"]["title"] if header["job"] else None
        suggestions = ai.opening_lines(
            user.role_enum,
            job_title=job_title,
            previous_messages=[m.body for m in messages],
        )

    return {"match": header, "messages": payload, "suggestions": suggestions}


@router.post("/{match_id}/messages", status_code=status.HTTP_201_CREATED)
def send_message(
    match_id: uuid.UUID,
    body: MessageCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
    session_factory=Depends(get_session_factory),
):
    """
    Sends a message to the other participant of the match.
    """
    try:
        message = conversations.send_message(db, user, match_id, body.content, body.message_type)
        db.commit()
        db.refresh(message)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error sending message in match {match_id}")
        raise Unexpected()

    background_tasks.add_task(dispatch_pending, session_factory)
    return {"message": conversations.serialize_message(message)}
