"""Middleware for the shortage web app."""

from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
