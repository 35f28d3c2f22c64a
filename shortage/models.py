"""Data models for the link registry."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class ShortenedUrl:
    """A short link record.

    Attributes:
        target: Destination URL the short name redirects to.
        owner: Id of the user who registered the link, None when
            authentication is disabled.
        uses: Number of redirect lookups so far. Only ever increases.
        expiration: Optional UTC timestamp after which the link is dead.
        max_uses: Optional bound; the link dies once ``uses`` exceeds it.
    """

    target: str
    owner: Optional[int] = None
    uses: int = 0
    expiration: Optional[datetime] = None
    max_uses: Optional[int] = None

    def is_expired(self, now: datetime) -> bool:
        """Check expiry against ``now``, after ``uses`` was incremented."""
        if self.expiration is not None and self.expiration < now:
            return True
        return self.max_uses is not None and self.uses > self.max_uses

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "target": self.target,
            "owner": self.owner,
            "uses": self.uses,
            "expiration": self.expiration.isoformat() if self.expiration else None,
            "max_uses": self.max_uses,
        }


@dataclass
class User:
    """A user as reported by the identity provider."""

    id: int
    username: str
    access_token: str = field(default="", repr=False)


@dataclass(frozen=True)
class Caller:
    """Ownership capability passed into owner-aware registry operations.

    A caller built from a logged-in user owns the records carrying that
    user's id. The anonymous caller (authentication disabled) owns the
    records that have no owner, which in that deployment is all of them.
    """

    owner: Optional[int] = None

    @classmethod
    def for_user(cls, user: User) -> "Caller":
        return cls(owner=user.id)

    @classmethod
    def anonymous(cls) -> "Caller":
        return cls(owner=None)

    def owns(self, record: ShortenedUrl) -> bool:
        return record.owner == self.owner
