"""HTML form interface and the short link redirect."""

from .routes import redirect_router, router as web_router

__all__ = ["redirect_router", "web_router"]
