# backend/jobswipe/routers/auth.py

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response
from starlette.responses import RedirectResponse
from sqlalchemy.orm import Session

from ..db.session import get_db, get_session_factory
from ..errors import InvalidInput
from ..services.auth import oauth, provision_user, parse_role, home_path_for
from ..services.events import dispatch_pending
from ..security.jwt import start_session, end_session
from ..config import settings

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.get("/google/login")
async def google_login(request: Request, role: str = "jobseeker"):
    """
    Kicks off the Google OAuth flow. The requested role is remembered in the
    session and applied if the callback creates a new account.
    """
    request.session["signup_role"] = parse_role(role).value
    return await oauth.google.authorize_redirect(request, settings.OAUTH_REDIRECT_URI)


@router.get("/google/callback")
async def google_callback(
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    session_factory=Depends(get_session_factory),
):
    """
    Handles the callback from Google after the user has authenticated.
    """
    token = await oauth.google.authorize_access_token(request)
    user_info = token.get('userinfo')
    if not user_info:
        raise InvalidInput("Could not retrieve user info from Google.")

    email = user_info.get("email")
    if not email:
        raise InvalidInput("Google profile is missing an email address.")

    role = parse_role(request.session.pop("signup_role", None))
    user, created = provision_user(
        db,
        email=email,
        name=user_info.get("name"),
        avatar_url=user_info.get("picture"),
        role=role,
    )
    db.commit()

    if created:
        background_tasks.add_task(dispatch_pending, session_factory)

    redirect_url = f"{settings.FRONTEND_BASE_URL}{home_path_for(user.role_enum)}"
    response = RedirectResponse(url=redirect_url, background=background_tasks)
    start_session(response, user)
    return response


@router.post("/logout")
def logout(response: Response):
    """
    Clears the session cookie.
    """
    end_session(response)
    return {"message": "Logged out"}
