import logging
import uuid
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from jobswipe.db.session import get_db, get_session_factory
from jobswipe.errors import InvalidInput, NotFound, Unexpected
from jobswipe.models.job import Job
from jobswipe.models.user import User
from jobswipe.schemas.job import JobCreate
from jobswipe.security.deps import require_user, require_recruiter
from jobswipe.services import events
from jobswipe.services.activity import log_activity
from jobswipe.services.jobs import feed, serialize_job, normalize_skills

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/jobs",
    tags=["Jobs"],
)


def _split(value: Optional[str]) -> list:
    return [part for part in (value or "").split(",") if part]


@router.get("")
def list_jobs(
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
    mode: str = Query("swipe", description="'swipe' hides decided jobs and ranks by skill match; 'browse' lists everything"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: str = Query(""),
    location: str = Query(""),
    locationType: Optional[str] = Query(None, description="Comma-separated: onsite,remote,hybrid"),
    employmentType: Optional[str] = Query(None),
    experienceLevel: Optional[str] = Query(None),
    minSalary: int = Query(0, ge=0),
    maxSalary: int = Query(0, ge=0),
):
    """
    Fetches active jobs for the swipe deck or the browse page.
    """
    try:
        return feed(
            db,
            user,
            mode=mode,
            page=page,
            limit=limit,
            search=search,
            location=location,
            location_types=_split(locationType),
            employment_types=_split(employmentType),
            experience_levels=_split(experienceLevel),
            min_salary=minSalary,
            max_salary=maxSalary,
        )
    except SQLAlchemyError:
        logger.exception(f"Error fetching jobs for user {user.id}")
        raise Unexpected("Could not fetch jobs.")


@router.get("/{job_id}")
def get_job(
    job_id: uuid.UUID,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    """
    Returns a single job and counts the view.
    """
    job = db.get(Job, job_id)
    if job is None:
        raise NotFound("Job not found")

    try:
        job.view_count = (job.view_count or 0) + 1
        db.commit()
        db.refresh(job)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error updating view count for job {job_id}")
        raise Unexpected()

    return {"job": serialize_job(job)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_job(
    body: JobCreate,
    background_tasks: BackgroundTasks,
    recruiter: User = Depends(require_recruiter),
    db: Session = Depends(get_db),
    session_factory=Depends(get_session_factory),
):
    """
    Posts a new job for the recruiter's company.
    """
    if recruiter.company_id is None:
        raise InvalidInput("Please set up your company profile first")

    try:
        job = Job(
            title=body.title.strip(),
            description=body.description,
            location=body.location,
            location_type=body.location_type,
            employment_type=body.employment_type,
            experience_level=body.experience_level,
            min_salary=body.min_salary,
            max_salary=body.max_salary,
            currency=body.currency.upper(),
            skills=normalize_skills(body.skills),
            status=body.status,
            poster_id=recruiter.id,
            company_id=recruiter.company_id,
        )
        db.add(job)
        db.flush()

        log_activity(db, recruiter.id, "job_post", {"job_id": str(job.id), "title": job.title})
        if job.status == "active":
            events.emit(db, events.JOB_POSTED, {
                "job_id": str(job.id),
                "poster_id": str(recruiter.id),
                "title": job.title,
            })
        db.commit()
        db.refresh(job)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error creating job for recruiter {recruiter.id}")
        raise Unexpected()

    background_tasks.add_task(events.dispatch_pending, session_factory)
    return {"message": "Job posted successfully", "job": serialize_job(job)}
