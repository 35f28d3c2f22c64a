"""GitHub OAuth login routes."""

import secrets
from typing import Optional

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from shortage.common.logging_config import get_logger
from shortage.errors import BadRequestError, UnauthorizedError
from ..rendering import render_page, templates
from .dependencies import CSRF_STATE_KEY, NEXT_URL_KEY, USER_ID_KEY

router = APIRouter()

logger = get_logger("web.auth")


def _local_redirect_target(next_url: Optional[str]) -> str:
    # never bounce to another site after login
    if next_url and next_url.startswith("/") and not next_url.startswith("//"):
        return next_url
    return "/"


@router.get("/login", response_class=HTMLResponse, include_in_schema=False)
async def login(request: Request, next_url: Optional[str] = Query(None, alias="next")):
    """Start the OAuth flow: remember a CSRF state and link to the provider."""
    provider = request.app.state.identity_provider

    state = secrets.token_urlsafe(32)
    request.session[CSRF_STATE_KEY] = state
    if next_url:
        request.session[NEXT_URL_KEY] = next_url
    else:
        request.session.pop(NEXT_URL_KEY, None)

    return templates.TemplateResponse(
        request,
        "login.html",
        {"redirect_url": provider.authorize_url(state)},
    )


@router.get("/login/callback", include_in_schema=False)
async def oauth_callback(request: Request, code: str, state: str):
    """Finish the OAuth flow and log the user in."""
    old_state = request.session.pop(CSRF_STATE_KEY, None)
    if old_state is None:
        raise BadRequestError("no login in progress")

    if not secrets.compare_digest(old_state.encode(), state.encode()):
        raise UnauthorizedError("invalid CSRF state")

    user = await request.app.state.identity_provider.authenticate(code)

    request.app.state.users.add(user)
    request.session[USER_ID_KEY] = user.id
    logger.info(f"User {user.username} ({user.id}) logged in")

    next_url = request.session.pop(NEXT_URL_KEY, None)
    return RedirectResponse(url=_local_redirect_target(next_url), status_code=status.HTTP_302_FOUND)


@router.get("/logout", response_class=HTMLResponse, include_in_schema=False)
async def logout(request: Request):
    """Forget the logged-in user."""
    user_id = request.session.pop(USER_ID_KEY, None)
    if user_id is not None:
        logger.info(f"User {user_id} logged out")
    return render_page(request, "Logged out.")
