# In backend/jobswipe/security/deps.py

import uuid

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from jobswipe.config import settings
from jobswipe.db.session import get_db
from jobswipe.errors import Unauthenticated, Forbidden
from jobswipe.models.user import User, Role
from .jwt import verify_jwt

def get_current_session(request: Request) -> dict:
    token = request.cookies.get(settings.COOKIE_NAME)
    if not token:
        raise Unauthenticated()
    return verify_jwt(token)

def require_user(claims: dict = Depends(get_current_session), db: Session = Depends(get_db)) -> User:
    """
    Resolves the session cookie to a User. Every failure (no cookie, bad
    token, unknown subject) is reported the same way: unauthenticated.
    """
    try:
        user_id = uuid.UUID(str(claims.get("sub")))
    except ValueError:
        raise Unauthenticated("Invalid token")

    user = db.get(User, user_id)
    if not user:
        raise Unauthenticated("User not found")
    return user

def require_recruiter(user: User = Depends(require_user)) -> User:
    if user.role_enum is not Role.RECRUITER:
        raise Forbidden("Only recruiters can do this")
    return user
