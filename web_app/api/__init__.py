"""JSON API for managing short links."""

from .routes import health_router, router as api_router

__all__ = ["api_router", "health_router"]
