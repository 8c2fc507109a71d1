import logging

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from jobswipe.db.session import get_db, get_session_factory
from jobswipe.errors import Unexpected
from jobswipe.models.user import User
from jobswipe.schemas.swipe import JobSwipeCreate, CandidateSwipeCreate, SwipeResult
from jobswipe.security.deps import require_user, require_recruiter
from jobswipe.services.events import dispatch_pending
from jobswipe.services.swipes import record_job_swipe, record_candidate_swipe

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/swipes", tags=["Swipes"])


# ----------------------------
# Job Seeker -> Job
# ----------------------------
@router.post("", response_model=SwipeResult, status_code=status.HTTP_200_OK)
def swipe_job(
    body: JobSwipeCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
    session_factory=Depends(get_session_factory),
):
    """
    Record the caller's decision on a job and report whether it produced a match.
    """
    try:
        outcome = record_job_swipe(db, user, body.job_id, body.direction)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Database error while recording swipe for user {user.id}")
        raise Unexpected()

    if outcome.match.created:
        background_tasks.add_task(dispatch_pending, session_factory)

    subscription = outcome.subscription
    return SwipeResult(
        matched=outcome.match.matched,
        match_id=outcome.match.match_id,
        swipes_remaining=subscription.swipes_remaining if subscription.is_metered else None,
        super_likes_remaining=subscription.super_likes_remaining,
    )


# ----------------------------
# Recruiter -> Candidate
# ----------------------------
@router.post("/candidates", response_model=SwipeResult, status_code=status.HTTP_200_OK)
def swipe_candidate(
    body: CandidateSwipeCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    recruiter: User = Depends(require_recruiter),
    session_factory=Depends(get_session_factory),
):
    """
    Record a recruiter's decision about a candidate for one of their company's jobs.
    """
    try:
        outcome = record_candidate_swipe(db, recruiter, body.job_id, body.candidate_id, body.direction)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Database error while recording candidate swipe for recruiter {recruiter.id}")
        raise Unexpected()

    if outcome.match.created:
        background_tasks.add_task(dispatch_pending, session_factory)

    return SwipeResult(matched=outcome.match.matched, match_id=outcome.match.match_id)
