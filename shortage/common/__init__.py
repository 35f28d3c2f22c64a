"""Common utilities shared by the service and the web layer."""

from .dates import ensure_utc, parse_expiration
from .validators import is_valid_url, is_valid_short_name, parse_max_uses
from .headers import extract_forwarded_headers, build_base_url
from .url_builder import build_short_url
from .logging_config import setup_logging

__all__ = [
    "ensure_utc",
    "parse_expiration",
    "is_valid_url",
    "is_valid_short_name",
    "parse_max_uses",
    "extract_forwarded_headers",
    "build_base_url",
    "build_short_url",
    "setup_logging",
]
