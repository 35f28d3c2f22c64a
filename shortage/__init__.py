"""Core logic for the shortage link shortener."""

__version__ = "0.1.0"

from .models import Caller, ShortenedUrl, User
from .registry import Registry
from .service import ShortenerService
from .shortcode import ShortCodeGenerator

__all__ = [
    "Caller",
    "Registry",
    "ShortCodeGenerator",
    "ShortenedUrl",
    "ShortenerService",
    "User",
]
