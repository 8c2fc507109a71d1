# backend/jobswipe/services/jobs.py

import math
import re
import uuid
from typing import Iterable, List, Optional

from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from jobswipe.models.company import Company
from jobswipe.models.job import Job
from jobswipe.models.swipe import Swipe
from jobswipe.models.user import User

# Score for a job that lists no skills at all
NEUTRAL_SCORE = 50


def normalize_skills(skills: Optional[Iterable[str]]) -> List[str]:
    """Lower-cases, trims and de-duplicates skill names, preserving order."""
    seen = set()
    cleaned = []
    for skill in skills or []:
        if skill is None:
            continue
        s = " ".join(str(skill).split()).lower()
        if s and s not in seen:
            seen.add(s)
            cleaned.append(s)
    return cleaned


def skill_match_score(user_skills: Iterable[str], job_skills: Iterable[str]) -> int:
    """Percentage of the job's skills the user has."""
    job_set = normalize_skills(job_skills)
    if not job_set:
        return NEUTRAL_SCORE
    user_set = set(normalize_skills(user_skills))
    overlap = sum(1 for s in job_set if s in user_set)
    return round(overlap / len(job_set) * 100)


def slugify(value: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return f"{slug or 'item'}-{uuid.uuid4().hex[:6]}"


def serialize_job(job: Job, score: Optional[int] = None) -> dict:
    data = {
        "id": str(job.id),
        "title": job.title,
        "description": job.description,
        "location": job.location,
        "location_type": job.location_type,
        "employment_type": job.employment_type,
        "experience_level": job.experience_level,
        "min_salary": job.min_salary,
        "max_salary": job.max_salary,
        "currency": job.currency,
        "skills": job.skills or [],
        "status": job.status,
        "view_count": job.view_count,
        "poster_id": str(job.poster_id),
        "company": {
            "id": str(job.company.id),
            "name": job.company.name,
            "logo_url": job.company.logo_url,
            "industry": job.company.industry,
            "size": job.company.size,
        } if job.company else None,
        "created_at": job.created_at,
    }
    if score is not None:
        data["aiMatchScore"] = score
    return data


def feed(
    db: Session,
    user: Optional[User],
    *,
    mode: str = "swipe",
    page: int = 1,
    limit: int = 20,
    search: str = "",
    location: str = "",
    location_types: Optional[List[str]] = None,
    employment_types: Optional[List[str]] = None,
    experience_levels: Optional[List[str]] = None,
    min_salary: int = 0,
    max_salary: int = 0,
) -> dict:
    """
    Active jobs matching the filters. In swipe mode the jobs the user has
    already decided on are left out and the page is ordered by skill overlap.
    """
    query = select(Job).join(Company, Job.company_id == Company.id).where(Job.status == "active")

    if search:
        pattern = f"%{search}%"
        query = query.where(or_(Job.title.ilike(pattern), Job.description.ilike(pattern), Company.name.ilike(pattern)))
    if location:
        query = query.where(Job.location.ilike(f"%{location}%"))
    if location_types:
        query = query.where(Job.location_type.in_(location_types))
    if employment_types:
        query = query.where(Job.employment_type.in_(employment_types))
    if experience_levels:
        query = query.where(Job.experience_level.in_(experience_levels))
    if min_salary > 0:
        query = query.where(Job.min_salary >= min_salary)
    if max_salary > 0:
        query = query.where(Job.max_salary <= max_salary)

    swipe_mode = mode == "swipe" and user is not None
    if swipe_mode:
        decided = select(Swipe.job_id).where(Swipe.sender_id == user.id)
        query = query.where(Job.id.not_in(decided))

    total = db.execute(select(func.count()).select_from(query.subquery())).scalar_one()

    jobs = db.execute(
        query.order_by(Job.created_at.desc()).offset((page - 1) * limit).limit(limit)
    ).scalars().all()

    if swipe_mode:
        scored = [(job, skill_match_score(user.skills, job.skills)) for job in jobs]
        scored.sort(key=lambda pair: pair[1], reverse=True)
        items = [serialize_job(job, score) for job, score in scored]
    else:
        items = [serialize_job(job) for job in jobs]

    return {
        "jobs": items,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit) if limit else 0,
        },
    }
