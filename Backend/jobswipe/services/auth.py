import logging
import uuid
from datetime import datetime, timezone
from authlib.integrations.starlette_client import OAuth
from sqlalchemy.orm import Session
from sqlalchemy import select

from ..config import settings
from ..models.user import User, Role
from ..models.subscription import Subscription, Plan
from . import events
from .activity import log_activity

logger = logging.getLogger(__name__)

oauth = OAuth()
oauth.register(
    name="google",
    client_id=settings.GOOGLE_CLIENT_ID,
    client_secret=settings.GOOGLE_CLIENT_SECRET,
    server_metadata_url="https://accounts.google.com/.well-known/openid-configuration",
    client_kwargs={"scope": "openid email profile"},
)

HOME_PATHS = {
    Role.JOBSEEKER: "/discover",
    Role.RECRUITER: "/recruiter",
}

def home_path_for(role: Role) -> str:
    """Where each kind of account lands after signing in."""
    return HOME_PATHS[role]

def parse_role(value: str | None) -> Role:
    try:
        return Role(value) if value else Role.JOBSEEKER
    except ValueError:
        return Role.JOBSEEKER

def provision_user(
    db: Session, *, email: str, name: str | None, avatar_url: str | None, role: Role = Role.JOBSEEKER
) -> tuple[User, bool]:
    """
    Creates a new user or updates an existing one with the latest login time
    and details. A new account also gets the free plan quota, a sign-up audit
    row and a queued welcome notification. The role only applies on creation.

    Returns the user and whether it was created. The caller commits.
    """
    user = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
    now = datetime.now(timezone.utc)

    if user is not None:
        if name: user.name = name
        if avatar_url: user.avatar_url = avatar_url
        user.last_login_at = now
        db.flush()
        return user, False

    user = User(
        id=uuid.uuid4(),
        email=email,
        name=name,
        avatar_url=avatar_url,
        role=role.value,
        skills=[],
        last_login_at=now,
    )
    db.add(user)
    db.flush()

    db.add(Subscription(
        user_id=user.id,
        plan=Plan.FREE.value,
        swipes_remaining=settings.FREE_SWIPES,
        super_likes_remaining=settings.FREE_SUPER_LIKES,
    ))
    log_activity(db, user.id, "signup", {"role": role.value})
    events.emit(db, events.USER_WELCOME, {"user_id": str(user.id)})
    db.flush()

    logger.info(f"Provisioned new {role.value} account {user.id}")
    return user, True
