"""User store and OAuth identity providers."""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional
from urllib.parse import urlencode

import httpx

from . import __version__
from .errors import IdentityProviderError
from .models import User


class UserStore:
    """Volatile in-process store of users who logged in."""

    def __init__(self):
        self._users: Dict[int, User] = {}
        self._lock = threading.Lock()

    def add(self, user: User) -> None:
        with self._lock:
            self._users[user.id] = user

    def get(self, user_id: Optional[int]) -> Optional[User]:
        if user_id is None:
            return None
        with self._lock:
            return self._users.get(user_id)


class IdentityProvider(ABC):
    """Abstract base class for OAuth authorization-code identity providers."""

    @abstractmethod
    def authorize_url(self, state: str) -> str:
        """Build the URL the user visits to grant access.

        Args:
            state: Random CSRF token echoed back on the callback

        Returns:
            Absolute authorization URL
        """
        pass

    @abstractmethod
    async def authenticate(self, code: str) -> User:
        """Exchange an authorization code for the user it belongs to.

        Args:
            code: Authorization code from the callback

        Returns:
            The authenticated user

        Raises:
            IdentityProviderError: If the exchange or profile lookup failed
        """
        pass

    async def close(self) -> None:
        """Release provider resources."""
        pass


class GitHubIdentityProvider(IdentityProvider):
    """GitHub OAuth app login."""

    AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
    TOKEN_URL = "https://github.com/login/oauth/access_token"
    USER_URL = "https://api.github.com/user"
    API_VERSION = "2022-11-28"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        http_client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the provider.

        Args:
            client_id: OAuth app client id
            client_secret: OAuth app client secret
            http_client: Optional shared HTTP client (one is created if omitted)
            logger: Optional logger
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            headers={"User-Agent": f"shortage/{__version__}"},
            timeout=10.0,
        )
        self.logger = logger or logging.getLogger(__name__)

    def authorize_url(self, state: str) -> str:
        query = urlencode({"client_id": self.client_id, "state": state})
        return f"{self.AUTHORIZE_URL}?{query}"

    async def authenticate(self, code: str) -> User:
        try:
            token_response = await self.http_client.post(
                self.TOKEN_URL,
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "code": code,
                },
                headers={"Accept": "application/json"},
            )
            token_response.raise_for_status()
            token = token_response.json()

            access_token = token.get("access_token")
            if not access_token:
                # GitHub reports bad codes with a 200 and an "error" field
                raise IdentityProviderError(
                    f"Token exchange failed: {token.get('error', 'no access token returned')}"
                )

            user_response = await self.http_client.get(
                self.USER_URL,
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "X-GitHub-Api-Version": self.API_VERSION,
                },
            )
            user_response.raise_for_status()
            profile = user_response.json()

            user = User(id=profile["id"], username=profile["login"], access_token=access_token)
        except httpx.HTTPError as e:
            raise IdentityProviderError(f"GitHub request failed: {e}") from e
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            # non-JSON body or a profile without id/login
            raise IdentityProviderError(f"Unexpected GitHub response: {e!r}") from e

        self.logger.info(f"Authenticated GitHub user {user.username} ({user.id})")
        return user

    async def close(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()
