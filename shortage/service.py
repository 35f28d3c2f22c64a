"""Business logic service for the link shortener."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from .common.dates import parse_expiration
from .common.validators import is_valid_url, is_valid_short_name, parse_max_uses
from .errors import UnprocessableInputError
from .models import Caller, ShortenedUrl
from .registry import Registry


class ShortenerService:
    """Service layer between the HTTP handlers and the registry.

    Handlers hand over raw input (form strings or parsed JSON values); the
    service normalises and validates it, logs the operation and calls the
    registry.
    """

    def __init__(
        self,
        registry: Registry,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the service.

        Args:
            registry: Link registry
            logger: Optional logger
        """
        self.registry = registry
        self.logger = logger or logging.getLogger(__name__)

    def register(
        self,
        caller: Caller,
        target: str,
        name: Optional[str] = None,
        expiration: Union[str, datetime, None] = None,
        max_uses: Union[str, int, None] = None,
    ) -> str:
        """Register a new short link.

        Args:
            caller: Owner of the new link
            target: Destination URL
            name: Optional explicit short name; blank means generate one
            expiration: Optional expiration timestamp
            max_uses: Optional use limit

        Returns:
            The short name the link was stored under

        Raises:
            UnprocessableInputError: If any input is invalid
            NameGenerationError: If no free random name was found
        """
        record = self._build_record(caller, target, expiration, max_uses)
        name = _blank_to_none(name)

        if name is None:
            name = self.registry.insert_generated(record)
        else:
            is_valid, error = is_valid_short_name(name)
            if not is_valid:
                raise UnprocessableInputError(f"Invalid short name: {error}")
            self.registry.insert(name, record)

        self.logger.info(f"Registered short link: {name} -> {record.target}")
        return name

    def edit(
        self,
        caller: Caller,
        name: Optional[str],
        target: str,
        expiration: Union[str, datetime, None] = None,
        max_uses: Union[str, int, None] = None,
    ) -> ShortenedUrl:
        """Replace the target, expiration and use limit of an owned link.

        Raises:
            UnprocessableInputError: If ``name`` is missing or input is invalid
            NotFoundError: If the link is missing or owned by someone else
        """
        name = _blank_to_none(name)
        if name is None:
            raise UnprocessableInputError("field `name` is required")

        record = self._build_record(caller, target, expiration, max_uses)
        updated = self.registry.update(
            name,
            caller,
            target=record.target,
            expiration=record.expiration,
            max_uses=record.max_uses,
        )

        self.logger.info(f"Edited short link: {name} -> {updated.target}")
        return updated

    def remove(self, caller: Caller, name: str) -> None:
        """Delete an owned link.

        Raises:
            NotFoundError: If the link is missing or owned by someone else
        """
        self.registry.remove(name, caller)
        self.logger.info(f"Removed short link: {name}")

    def resolve(self, name: str) -> str:
        """Count a use of ``name`` and return the URL to redirect to.

        Raises:
            NotFoundError: If the link is missing or expired
        """
        target = self.registry.lookup(name)
        self.logger.debug(f"Resolved short link: {name} -> {target}")
        return target

    def list_links(self, caller: Caller) -> List[Tuple[str, ShortenedUrl]]:
        return self.registry.list(caller)

    def health(self) -> Dict[str, Any]:
        return {"links": len(self.registry)}

    def _build_record(
        self,
        caller: Caller,
        target: str,
        expiration: Union[str, datetime, None],
        max_uses: Union[str, int, None],
    ) -> ShortenedUrl:
        is_valid, error = is_valid_url(target)
        if not is_valid:
            raise UnprocessableInputError(f"Invalid URL: {error}")

        limit, error = parse_max_uses(max_uses)
        if error:
            raise UnprocessableInputError(error)

        return ShortenedUrl(
            target=target,
            owner=caller.owner,
            expiration=parse_expiration(expiration),
            max_uses=limit,
        )


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    # HTML forms submit empty strings for untouched inputs
    if value is None:
        return None
    value = value.strip()
    return value or None
