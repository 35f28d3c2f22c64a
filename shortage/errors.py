"""Errors reported to HTTP clients.

Every error carries the status code it maps to and a short, client-safe
detail string. The web layer turns them into JSON or HTML responses.
"""

from typing import Optional


class ShortageError(Exception):
    """Base class for errors surfaced as HTTP responses."""

    status_code = 500
    detail = "Internal Server Error"

    def __init__(self, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class NotFoundError(ShortageError):
    """Unknown short name, or a name the caller does not own.

    The two cases share one detail string so that non-owners cannot probe
    which names exist.
    """

    status_code = 404
    detail = "Not Found"

    def __init__(self, name: Optional[str] = None):
        super().__init__()
        self.name = name


class UnprocessableInputError(ShortageError, ValueError):
    """Malformed or missing request input."""

    status_code = 422
    detail = "Unprocessable Entity"


class InternalError(ShortageError):
    """A server-side failure that is not the client's fault."""


class NameGenerationError(InternalError):
    """Every random short name candidate collided with an existing one."""

    detail = "Could not generate a unique short name"


class IdentityProviderError(InternalError):
    """The OAuth identity provider rejected or failed a request."""

    detail = "Authentication failed"


class BadRequestError(ShortageError):
    status_code = 400
    detail = "Bad Request"


class UnauthorizedError(ShortageError):
    status_code = 401
    detail = "Unauthorized"


class LoginRequiredError(UnauthorizedError):
    """Raised by the login guard when the session carries no user."""

    detail = "Login required"

    def __init__(self, next_url: str = "/"):
        super().__init__()
        self.next_url = next_url
