# backend/jobswipe/services/swipes.py

"""
Swipe recording for both sides of the market.

Job seekers swipe on jobs (``record_job_swipe``) and are metered by their
subscription; recruiters swipe on candidates for one of their company's
jobs (``record_candidate_swipe``) without a quota. Either kind of positive
swipe runs mutual-interest detection.

Quota is charged per *new* decision only. Replaying a direction is free, and
changing the direction of an existing decision costs no general swipe,
though switching to a super-like spends one super-like.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from jobswipe.errors import InvalidInput, NotFound, QuotaExceeded, Forbidden
from jobswipe.models.job import Job
from jobswipe.models.subscription import Subscription
from jobswipe.models.swipe import Swipe, SwipeDirection
from jobswipe.models.user import User, Role
from jobswipe.services.activity import log_activity
from jobswipe.services.matching import detect_mutual_interest, MatchResult, NO_MATCH

logger = logging.getLogger(__name__)


@dataclass
class SwipeOutcome:
    swipe: Swipe
    created: bool
    match: MatchResult
    subscription: Optional[Subscription] = None


def parse_direction(value) -> SwipeDirection:
    try:
        return SwipeDirection.parse(value)
    except ValueError:
        raise InvalidInput(f"Unrecognized swipe direction: {value!r}")


def check_quota(subscription: Subscription, direction: SwipeDirection) -> None:
    if subscription.is_metered and subscription.swipes_remaining <= 0:
        raise QuotaExceeded("Daily swipe limit reached. Upgrade to Premium!")
    if direction is SwipeDirection.SUPER_INTERESTED and subscription.super_likes_remaining <= 0:
        raise QuotaExceeded("No super likes remaining. Upgrade to Premium!")


def charge_quota(subscription: Subscription, previous: Optional[str], direction: SwipeDirection) -> None:
    is_super = direction is SwipeDirection.SUPER_INTERESTED
    if previous is None:
        if subscription.is_metered:
            subscription.swipes_remaining -= 1
        if is_super:
            subscription.super_likes_remaining -= 1
    elif previous != direction.value and is_super:
        subscription.super_likes_remaining -= 1


def _upsert_swipe(db: Session, sender_id, receiver_id, job_id, direction: SwipeDirection):
    swipe = db.execute(
        select(Swipe).where(
            Swipe.sender_id == sender_id,
            Swipe.receiver_id == receiver_id,
            Swipe.job_id == job_id,
        )
    ).scalar_one_or_none()

    previous = swipe.direction if swipe else None
    if swipe is None:
        swipe = Swipe(sender_id=sender_id, receiver_id=receiver_id, job_id=job_id, direction=direction.value)
        db.add(swipe)
    elif previous != direction.value:
        swipe.direction = direction.value
    db.flush()
    return swipe, previous


def record_job_swipe(db: Session, user: User, job_id: uuid.UUID, direction) -> SwipeOutcome:
    """
    Records (or overwrites) the user's decision on a job, charges quota for
    new decisions and checks for a match. Nothing is written when a
    precondition fails. The caller commits.
    """
    direction = parse_direction(direction)

    subscription = db.execute(
        select(Subscription).where(Subscription.user_id == user.id)
    ).scalar_one_or_none()
    if subscription is None:
        raise InvalidInput("No subscription found")

    job = db.get(Job, job_id)
    if job is None:
        raise NotFound("Job not found")
    if job.poster_id == user.id:
        raise InvalidInput("You cannot swipe on your own job")

    check_quota(subscription, direction)

    swipe, previous = _upsert_swipe(db, user.id, job.poster_id, job.id, direction)
    charge_quota(subscription, previous, direction)

    result = NO_MATCH
    if direction.is_positive:
        result = detect_mutual_interest(db, candidate_id=user.id, job=job)

    log_activity(db, user.id, "swipe", {
        "job_id": str(job.id),
        "direction": direction.value,
        "matched": result.matched,
    })
    logger.info(f"User {user.id} swiped {direction.value} on job {job.id} (new={previous is None}, matched={result.matched})")
    return SwipeOutcome(swipe=swipe, created=previous is None, match=result, subscription=subscription)


def record_candidate_swipe(db: Session, recruiter: User, job_id: uuid.UUID, candidate_id: uuid.UUID, direction) -> SwipeOutcome:
    """
    Records a recruiter's decision about a candidate for one of their
    company's jobs: the reciprocal signal of a candidate's job swipe.
    """
    direction = parse_direction(direction)

    job = db.get(Job, job_id)
    if job is None:
        raise NotFound("Job not found")
    if recruiter.company_id is None or recruiter.company_id != job.company_id:
        raise Forbidden("You can only review candidates for your company's jobs")

    candidate = db.get(User, candidate_id)
    if candidate is None:
        raise NotFound("Candidate not found")
    if candidate.role_enum is not Role.JOBSEEKER:
        raise InvalidInput("Only job seekers can be reviewed as candidates")

    swipe, previous = _upsert_swipe(db, recruiter.id, candidate.id, job.id, direction)

    result = NO_MATCH
    if direction.is_positive:
        result = detect_mutual_interest(db, candidate_id=candidate.id, recruiter_id=recruiter.id, job=job)

    log_activity(db, recruiter.id, "candidate_swipe", {
        "job_id": str(job.id),
        "candidate_id": str(candidate.id),
        "direction": direction.value,
        "matched": result.matched,
    })
    logger.info(f"Recruiter {recruiter.id} swiped {direction.value} on candidate {candidate.id} for job {job.id}")
    return SwipeOutcome(swipe=swipe, created=previous is None, match=result)
