"""Expiration timestamp parsing."""

import re
from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import TypeAdapter, ValidationError

from ..errors import UnprocessableInputError

# What an HTML <input type="datetime-local"> submits: no seconds, no offset.
_DATETIME_LOCAL = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}$")

# Same parser the JSON API applies to its request bodies
_DATETIME = TypeAdapter(datetime)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_expiration(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an optional expiration into a UTC datetime.

    Accepts RFC3339 strings, ``datetime-local`` form values (read as UTC)
    and ``datetime`` objects. ``None`` and blank strings mean "never".

    Raises:
        UnprocessableInputError: If the string is not a timestamp
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return ensure_utc(value)

    text = value.strip()
    if not text:
        return None

    if _DATETIME_LOCAL.match(text):
        text += ":00Z"
    elif text.endswith("z"):
        text = text[:-1] + "Z"

    try:
        parsed = _DATETIME.validate_python(text)
    except ValidationError as e:
        reason = e.errors()[0]["msg"]
        raise UnprocessableInputError(f"Could not parse expiration: {reason}") from e

    return ensure_utc(parsed)
