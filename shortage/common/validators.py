"""Validation utilities for link registration."""

from urllib.parse import urlparse
from typing import Optional, Tuple, Union

from ..shortcode import ShortCodeGenerator


# Names that would be shadowed by a route and could never be redirected.
RESERVED_NAMES = frozenset({
    "api", "edit", "list", "login", "logout", "register", "remove",
})


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > 2048:
        return False, "URL is too long (max 2048 characters)"

    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"

    # Check if scheme is http or https
    if result.scheme not in ["http", "https"]:
        return False, "URL must use http or https protocol"

    # Check if netloc (domain) exists
    if not result.netloc:
        return False, "URL must have a valid domain"

    return True, ""


def is_valid_short_name(name: str, max_length: int = 64) -> Tuple[bool, str]:
    """Validate a caller-supplied short name.

    Args:
        name: The short name to validate
        max_length: Maximum length for the name

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not name or not isinstance(name, str):
        return False, "Short name is required"

    if len(name) > max_length:
        return False, f"Short name must be at most {max_length} characters"

    if not ShortCodeGenerator.is_valid_format(name):
        return False, "Short name can only contain letters, numbers, hyphens, and underscores"

    if name.lower() in RESERVED_NAMES:
        return False, f"'{name}' is a reserved word and cannot be used"

    return True, ""


def parse_max_uses(value: Union[str, int, None]) -> Tuple[Optional[int], str]:
    """Parse an optional use limit from a form field or JSON value.

    Blank strings mean "no limit".

    Returns:
        Tuple of (max_uses, error_message)
    """
    if value is None:
        return None, ""

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None, ""
        # str.isdigit also accepts digits like "²" that int() rejects
        if not (value.isascii() and value.isdigit()):
            return None, f"max_uses must be a non-negative integer, got '{value}'"
        try:
            return int(value), ""
        except ValueError:
            return None, "max_uses is too large"

    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None, f"max_uses must be a non-negative integer, got {value!r}"

    return value, ""
