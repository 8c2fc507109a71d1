import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from ..db.session import get_db
from ..errors import Unexpected
from ..models.user import User
from ..schemas.profile import ProfileUpdate
from ..security.deps import require_user
from ..services.auth import home_path_for
from ..services.jobs import normalize_skills

logger = logging.getLogger(__name__)

router = APIRouter(tags=["me"])


def serialize_me(u: User) -> dict:
    s = u.subscription
    return {
        "id": str(u.id),
        "email": u.email,
        "name": u.name,
        "avatar_url": u.avatar_url,
        "role": u.role,
        "headline": u.headline,
        "skills": u.skills or [],
        "company_id": str(u.company_id) if u.company_id else None,
        "home": home_path_for(u.role_enum),
        "subscription": {
            "plan": s.plan,
            "status": s.status,
            "swipes_remaining": s.swipes_remaining if s.is_metered else None,
            "super_likes_remaining": s.super_likes_remaining,
        } if s else None,
    }


@router.get("/me")
def get_me(user: User = Depends(require_user)):
    return serialize_me(user)


@router.put("/me")
def update_me(
    body: ProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    """
    Updates the public profile fields matches get to see.
    """
    try:
        if body.name is not None:
            user.name = body.name.strip()
        if body.headline is not None:
            user.headline = body.headline.strip() or None
        if body.avatar_url is not None:
            user.avatar_url = body.avatar_url or None
        if body.skills is not None:
            user.skills = normalize_skills(body.skills)
        db.commit()
        db.refresh(user)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error updating profile for user {user.id}")
        raise Unexpected()

    return serialize_me(user)
