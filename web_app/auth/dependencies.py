"""Route dependencies that turn the session into a :class:`Caller`."""

from fastapi import Request

from shortage.common.logging_config import get_logger
from shortage.errors import InternalError, LoginRequiredError
from shortage.models import Caller

CSRF_STATE_KEY = "oauth.csrf-state"
NEXT_URL_KEY = "oauth.next-url"
USER_ID_KEY = "auth.user-id"

logger = get_logger("web.auth")


def login_required(request: Request) -> None:
    """Router-level guard: attach the caller to the request or refuse it.

    With authentication disabled every request acts as the anonymous caller.
    """
    config = request.app.state.config
    if not config.auth_enabled:
        request.state.user = None
        request.state.caller = Caller.anonymous()
        return

    user = request.app.state.users.get(request.session.get(USER_ID_KEY))
    if user is None:
        # only GET targets can be revisited after the login round trip
        next_url = "/"
        if request.method == "GET":
            next_url = request.url.path
            if request.url.query:
                next_url += f"?{request.url.query}"
        raise LoginRequiredError(next_url=next_url)

    request.state.user = user
    request.state.caller = Caller.for_user(user)


def current_caller(request: Request) -> Caller:
    """Return the caller attached by :func:`login_required`."""
    caller = getattr(request.state, "caller", None)
    if caller is None:
        logger.error(f"{request.method} {request.url.path} reached without an authenticated user")
        raise InternalError()
    return caller
