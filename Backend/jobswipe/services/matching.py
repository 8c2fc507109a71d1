# backend/jobswipe/services/matching.py

"""
Mutual-interest detection.

Interest runs in two directions through the same ``swipes`` relation:
a candidate's swipe on a job (receiver = the job's poster) and a
recruiter's swipe on a candidate (receiver = the candidate). Both sides are
scoped to the company that owns the job, so a recruiter who liked a
candidate for one opening still matches when that candidate swipes right on
another opening at the same company.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jobswipe.models.job import Job
from jobswipe.models.match import Match, ordered_pair
from jobswipe.models.swipe import Swipe, POSITIVE_DIRECTIONS
from jobswipe.services import events

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    matched: bool
    match_id: Optional[uuid.UUID] = None
    created: bool = False


NO_MATCH = MatchResult(matched=False)


def candidate_is_interested(db: Session, candidate_id: uuid.UUID, company_id: uuid.UUID) -> bool:
    """Has the candidate swiped right (or up) on any job at this company?"""
    row = db.execute(
        select(Swipe.id)
        .join(Job, Swipe.job_id == Job.id)
        .where(
            Swipe.sender_id == candidate_id,
            Swipe.direction.in_(POSITIVE_DIRECTIONS),
            Job.company_id == company_id,
        )
        .limit(1)
    ).first()
    return row is not None


def recruiter_is_interested(
    db: Session, recruiter_id: uuid.UUID, candidate_id: uuid.UUID, company_id: uuid.UUID
) -> bool:
    """Has the recruiter swiped right on this candidate for any job at this company?"""
    row = db.execute(
        select(Swipe.id)
        .join(Job, Swipe.job_id == Job.id)
        .where(
            Swipe.sender_id == recruiter_id,
            Swipe.receiver_id == candidate_id,
            Swipe.direction.in_(POSITIVE_DIRECTIONS),
            Job.company_id == company_id,
        )
        .limit(1)
    ).first()
    return row is not None


def interested_recruiter(
    db: Session, candidate_id: uuid.UUID, company_id: uuid.UUID, prefer: Optional[uuid.UUID] = None
) -> Optional[uuid.UUID]:
    """
    A recruiter who swiped right on the candidate for any job at this
    company, or None. ``prefer`` (usually the job's poster) wins when it is
    among them; otherwise the earliest signal does.
    """
    senders = db.execute(
        select(Swipe.sender_id)
        .join(Job, Swipe.job_id == Job.id)
        .where(
            Swipe.receiver_id == candidate_id,
            Swipe.direction.in_(POSITIVE_DIRECTIONS),
            Job.company_id == company_id,
        )
        .order_by(Swipe.created_at, Swipe.id)
    ).scalars().all()
    if not senders:
        return None
    if prefer is not None and prefer in senders:
        return prefer
    return senders[0]


def find_match(db: Session, user_id: uuid.UUID, other_id: uuid.UUID, job_id: uuid.UUID) -> Optional[Match]:
    user_a_id, user_b_id = ordered_pair(user_id, other_id)
    return db.execute(
        select(Match).where(
            Match.user_a_id == user_a_id,
            Match.user_b_id == user_b_id,
            Match.job_id == job_id,
        )
    ).scalar_one_or_none()


def upsert_match(db: Session, user_id: uuid.UUID, other_id: uuid.UUID, job_id: uuid.UUID) -> Tuple[Match, bool]:
    """
    Returns the match for the unordered pair and job, creating it if needed.
    The second element is True only when this call created the row.
    """
    existing = find_match(db, user_id, other_id, job_id)
    if existing is not None:
        return existing, False

    user_a_id, user_b_id = ordered_pair(user_id, other_id)
    match = Match(user_a_id=user_a_id, user_b_id=user_b_id, job_id=job_id)
    try:
        with db.begin_nested():
            db.add(match)
    except IntegrityError:
        # A concurrent request inserted the same pair first
        return find_match(db, user_id, other_id, job_id), False
    return match, True


def detect_mutual_interest(
    db: Session, *, candidate_id: uuid.UUID, job: Job, recruiter_id: Optional[uuid.UUID] = None
) -> MatchResult:
    """
    Materialises a match for (candidate, recruiter, job) when both sides have
    expressed interest. Without ``recruiter_id`` (a candidate's swipe) any
    recruiter at the company who already swiped right on the candidate counts.

    Never raises for storage errors: detection is best effort and a failure
    is reported as "no match".
    """
    try:
        with db.begin_nested():
            if recruiter_id is None:
                recruiter_id = interested_recruiter(db, candidate_id, job.company_id, prefer=job.poster_id)
                if recruiter_id is None:
                    return NO_MATCH
            elif not recruiter_is_interested(db, recruiter_id, candidate_id, job.company_id):
                return NO_MATCH
            if not candidate_is_interested(db, candidate_id, job.company_id):
                return NO_MATCH

            match, created = upsert_match(db, candidate_id, recruiter_id, job.id)
            if created:
                events.emit(db, events.MATCH_CREATED, {
                    "match_id": str(match.id),
                    "candidate_id": str(candidate_id),
                    "recruiter_id": str(recruiter_id),
                    "job_id": str(job.id),
                    "job_title": job.title,
                    "company_name": job.company.name if job.company else "a company",
                })
                logger.info(f"Match {match.id} created for candidate {candidate_id} and recruiter {recruiter_id}")
            return MatchResult(matched=True, match_id=match.id, created=created)
    except SQLAlchemyError:
        logger.exception(f"Match detection failed for candidate {candidate_id} on job {job.id}")
        return NO_MATCH
