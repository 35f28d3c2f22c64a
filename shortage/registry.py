"""In-memory registry of short links.

The registry maps short names to :class:`ShortenedUrl` records. It lives for
the lifetime of the process and is lost on restart. All operations are
serialised through a single lock that is only ever held for dictionary work,
so they are atomic with respect to each other whether they are called from
the event loop or from a worker thread.

Example:
    >>> from shortage.models import Caller, ShortenedUrl
    >>> registry = Registry()
    >>> registry.insert("abc", ShortenedUrl(target="https://example.com"))
    >>> registry.lookup("abc")
    'https://example.com'
    >>> [(name, link.uses) for name, link in registry.list(Caller.anonymous())]
    [('abc', 1)]
"""

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from .errors import NameGenerationError, NotFoundError
from .models import Caller, ShortenedUrl
from .shortcode import ShortCodeGenerator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Registry:
    """Process-wide mapping from short name to link record."""

    def __init__(
        self,
        generator: Optional[ShortCodeGenerator] = None,
        max_name_attempts: int = 10,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize an empty registry.

        Args:
            generator: Random name generator (8 characters by default)
            max_name_attempts: Candidates tried before name generation fails
            clock: Returns the current UTC time; used for expiry checks
            logger: Optional logger
        """
        self.generator = generator or ShortCodeGenerator(default_length=8)
        self.max_name_attempts = max_name_attempts
        self.clock = clock or utc_now
        self.logger = logger or logging.getLogger(__name__)
        self._routes: Dict[str, ShortenedUrl] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._routes)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._routes

    def insert(self, name: str, record: ShortenedUrl) -> None:
        """Store ``record`` under ``name``, replacing any existing entry."""
        with self._lock:
            if name in self._routes:
                self.logger.debug(f"Overwriting short link: {name}")
            self._routes[name] = replace(record)
            self.logger.debug(f"Stored short link {name}: {record.to_dict()}")

    def generate_name(self) -> str:
        """Return a random name that is not currently registered.

        Raises:
            NameGenerationError: If every candidate collided
        """
        with self._lock:
            return self._generate_name()

    def insert_generated(self, record: ShortenedUrl) -> str:
        """Store ``record`` under a freshly generated name.

        Generation and insertion happen under one hold of the lock, so two
        concurrent registrations never end up with the same name.

        Returns:
            The generated name

        Raises:
            NameGenerationError: If every candidate collided
        """
        with self._lock:
            name = self._generate_name()
            self._routes[name] = replace(record)
            return name

    def update(
        self,
        name: str,
        caller: Caller,
        target: str,
        expiration: Optional[datetime] = None,
        max_uses: Optional[int] = None,
    ) -> ShortenedUrl:
        """Replace target, expiration and max_uses of an owned link.

        ``uses`` and ``owner`` are preserved.

        Returns:
            A copy of the updated record

        Raises:
            NotFoundError: If no link exists at ``name`` or ``caller`` does not own it
        """
        with self._lock:
            current = self._routes.get(name)
            if current is None or not caller.owns(current):
                raise NotFoundError(name)

            updated = ShortenedUrl(
                target=target,
                owner=current.owner,
                uses=current.uses,
                expiration=expiration,
                max_uses=max_uses,
            )
            self._routes[name] = updated
            return replace(updated)

    def remove(self, name: str, caller: Caller) -> None:
        """Delete an owned link.

        Raises:
            NotFoundError: If no link exists at ``name`` or ``caller`` does not own it
        """
        with self._lock:
            current = self._routes.get(name)
            if current is None or not caller.owns(current):
                raise NotFoundError(name)
            del self._routes[name]

    def lookup(self, name: str) -> str:
        """Count a use of ``name`` and return its target.

        The use is counted before the expiry check. A link found expired is
        deleted and reported as missing.

        Raises:
            NotFoundError: If the link does not exist or has expired
        """
        with self._lock:
            record = self._routes.get(name)
            if record is None:
                raise NotFoundError(name)

            record.uses += 1

            if record.is_expired(self.clock()):
                del self._routes[name]
                self.logger.info(f"Short link expired after {record.uses} uses: {name}")
                raise NotFoundError(name)

            return record.target

    def list(self, caller: Caller) -> List[Tuple[str, ShortenedUrl]]:
        """Return copies of all links owned by ``caller``, in insertion order."""
        with self._lock:
            return [
                (name, replace(record))
                for name, record in self._routes.items()
                if caller.owns(record)
            ]

    def _generate_name(self) -> str:
        # caller holds self._lock
        for attempt in range(self.max_name_attempts):
            name = self.generator.generate_random()
            if name not in self._routes:
                if attempt:
                    self.logger.debug(f"Generated name after {attempt + 1} attempts: {name}")
                return name

        self.logger.error(f"Unable to generate a unique short name after {self.max_name_attempts} attempts")
        raise NameGenerationError()
