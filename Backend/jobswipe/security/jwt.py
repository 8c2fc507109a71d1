# backend/jobswipe/security/jwt.py

"""Signed session tokens, carried in an httpOnly cookie."""

import jwt
from datetime import datetime, timedelta, timezone
from fastapi import Response
from ..config import settings
from ..errors import Unauthenticated
from ..models.user import User

REQUIRED_CLAIMS = ["exp", "iat", "sub", "role"]


def issue_jwt(sub: str, role: str) -> str:
    """Signs a session token for user id ``sub`` acting as ``role``."""
    issued = datetime.now(timezone.utc)
    claims = {
        "sub": sub,
        "role": role,
        "iat": issued,
        "exp": issued + timedelta(minutes=settings.JWT_EXPIRATION_MINUTES),
    }
    return jwt.encode(claims, settings.JWT_PRIVATE_KEY, algorithm=settings.JWT_ALGORITHM)


def start_session(response: Response, user: User) -> str:
    """Issues a token for ``user`` and stores it in the session cookie."""
    token = issue_jwt(sub=str(user.id), role=user.role)
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=settings.JWT_EXPIRATION_MINUTES * 60,
        httponly=True,
        samesite="lax",
        # Plain http is only allowed on a dev box
        secure=settings.APP_ENV != "dev",
    )
    return token


def end_session(response: Response) -> None:
    response.delete_cookie(key=settings.COOKIE_NAME)


def verify_jwt(token: str) -> dict:
    """
    Decodes a session token. Any invalid token raises Unauthenticated, and
    an expired one says so.
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_PUBLIC_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError:
        raise Unauthenticated("Token has expired")
    except jwt.InvalidTokenError:
        raise Unauthenticated("Invalid token")
