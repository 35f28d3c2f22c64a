"""FastAPI web layer for the shortage service."""

from .app_factory import create_app

__all__ = ["create_app"]
