"""Pytest configuration and fixtures."""

from contextlib import AsyncExitStack
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from shortage.auth import IdentityProvider, UserStore
from shortage.common.logging_config import setup_logging
from shortage.errors import IdentityProviderError
from shortage.models import User
from shortage.registry import Registry
from shortage.service import ShortenerService
from shortage.shortcode import ShortCodeGenerator
from web_app import create_app


class FakeClock:
    """Settable clock for expiry tests."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class ScriptedGenerator(ShortCodeGenerator):
    """Generator that hands out a fixed sequence of names."""

    def __init__(self, names: Iterable[str]):
        super().__init__(default_length=8)
        self.names: List[str] = list(names)
        self.calls = 0

    def generate_random(self, length: Optional[int] = None) -> str:
        self.calls += 1
        return self.names.pop(0)


class FakeIdentityProvider(IdentityProvider):
    """Identity provider that accepts codes of the form ``code-<username>``."""

    USERS = {
        "code-alice": User(id=1, username="alice", access_token="token-alice"),
        "code-bob": User(id=2, username="bob", access_token="token-bob"),
    }

    def __init__(self):
        self.last_state: Optional[str] = None

    def authorize_url(self, state: str) -> str:
        self.last_state = state
        return f"https://id.example.com/authorize?state={state}"

    async def authenticate(self, code: str) -> User:
        try:
            return self.USERS[code]
        except KeyError:
            raise IdentityProviderError(f"unknown code {code}") from None


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(logger):
    """Create an empty registry."""
    return Registry(
        generator=ShortCodeGenerator(default_length=8),
        max_name_attempts=10,
        logger=logger,
    )


@pytest.fixture
def service(registry, logger) -> ShortenerService:
    """Create service instance."""
    return ShortenerService(registry, logger=logger)


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider()


@pytest.fixture
def users():
    return UserStore()


@pytest.fixture
def config():
    return Config(
        base_url="http://testserver",
        auth_enabled=True,
        session_secret="test-secret",
        _env_file=None,
    )


@pytest.fixture
def app(config, service, identity_provider, users):
    """Create test FastAPI app."""
    return create_app(
        config=config,
        service_instance=service,
        identity_provider=identity_provider,
        users=users,
    )


@pytest.fixture
async def client_factory(app):
    """Open any number of independent clients (one cookie jar each)."""
    async with AsyncExitStack() as stack:

        async def make_client() -> AsyncClient:
            return await stack.enter_async_context(
                AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")
            )

        yield make_client


@pytest.fixture
async def client(client_factory):
    """Create an anonymous test client."""
    return await client_factory()


async def login(client: AsyncClient, provider: FakeIdentityProvider, code: str):
    """Run the OAuth round trip for ``code`` on ``client``."""
    await client.get("/login")
    response = await client.get(
        "/login/callback",
        params={"code": code, "state": provider.last_state},
        follow_redirects=False,
    )
    assert response.status_code == 302
    return response


@pytest.fixture
async def alice(client_factory, identity_provider):
    """Client logged in as alice."""
    client = await client_factory()
    await login(client, identity_provider, "code-alice")
    return client


@pytest.fixture
async def bob(client_factory, identity_provider):
    """Client logged in as bob."""
    client = await client_factory()
    await login(client, identity_provider, "code-bob")
    return client


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456?answertab=votes#tab-top",
    ]


def expiration_in(seconds: int) -> str:
    """RFC3339 timestamp ``seconds`` from now (negative for the past)."""
    return (datetime.now(timezone.utc) + timedelta(seconds=seconds)).isoformat()


def form_fields(**fields) -> Dict[str, str]:
    """Form body with None fields sent as empty strings, like a browser does."""
    return {key: "" if value is None else str(value) for key, value in fields.items()}
