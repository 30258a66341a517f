"""
Session endpoints for API v1.

The OAuth provider and the session cookie live in the web front end;
these routes only read the session token to show who is signed in and
decide where to go after sign-in.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse

from user_post_api.app.core.security import get_session_user, resolve_redirect
from user_post_api.app.schemas.session import SessionRead, SessionUser


router = APIRouter()


@router.get("/", response_model=SessionRead)
async def get_session(user: Optional[SessionUser] = Depends(get_session_user)) -> SessionRead:
    return SessionRead(user=user)


@router.get("/redirect")
async def redirect_after_sign_in(
    request: Request,
    url: str = Query("/dashboard", description="Where the caller wants to go"),
) -> RedirectResponse:
    """Redirect to ``url`` if it is relative or same-origin, else to the dashboard."""
    target = resolve_redirect(url, str(request.base_url))
    return RedirectResponse(target, status_code=302)
