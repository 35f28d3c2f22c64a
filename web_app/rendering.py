"""Jinja2 template rendering and short URL helpers shared by the routers."""

import os

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from shortage.common.headers import build_base_url
from shortage.common.url_builder import build_short_url

TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")

templates = Jinja2Templates(directory=TEMPLATE_DIR)


def render_page(request: Request, content: str, status_code: int = 200) -> HTMLResponse:
    """Render a one-line message inside the base layout."""
    return templates.TemplateResponse(
        request,
        "base.html",
        {"content": content},
        status_code=status_code,
    )


def short_url_for(request: Request, short_name: str) -> str:
    """Build the public short URL for ``short_name`` as seen by this client."""
    base_url = build_base_url(
        headers=request.headers,
        fallback_base_url=request.app.state.config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    return build_short_url(short_name, base_url)
