"""Exception handlers turning service errors into HTTP responses."""

from urllib.parse import urlencode

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from shortage.common.logging_config import get_logger
from shortage.errors import InternalError, LoginRequiredError, ShortageError
from .rendering import render_page

logger = get_logger("web.errors")


def is_api_request(request: Request) -> bool:
    path = request.url.path
    return path == "/api" or path.startswith("/api/")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers on ``app``.

    API paths answer with JSON ``{"detail": ...}``, everything else with the
    HTML base page. Login failures on HTML paths redirect to the login page.
    """

    @app.exception_handler(ShortageError)
    async def shortage_error_handler(request: Request, exc: ShortageError):
        api = is_api_request(request)

        if isinstance(exc, LoginRequiredError) and not api:
            query = urlencode({"next": exc.next_url})
            return RedirectResponse(url=f"/login?{query}", status_code=status.HTTP_302_FOUND)

        detail = exc.detail
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
            detail = InternalError.detail

        if api:
            return JSONResponse(status_code=exc.status_code, content={"detail": detail})
        return render_page(request, f"{exc.status_code} {detail}", status_code=exc.status_code)
