"""FastAPI application factory."""

import secrets
from typing import Optional

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from shortage import __version__
from shortage.auth import IdentityProvider, UserStore
from shortage.common.logging_config import get_logger
from shortage.service import ShortenerService
from .api import api_router, health_router
from .auth import auth_router
from .errors import register_exception_handlers
from .middleware.logging import LoggingMiddleware
from .web import redirect_router, web_router

logger = get_logger("web")


def create_app(
    config,
    service_instance: Optional[ShortenerService] = None,
    identity_provider: Optional[IdentityProvider] = None,
    users: Optional[UserStore] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        config: Configuration instance
        service_instance: Service instance (may be set later by the lifespan)
        identity_provider: OAuth identity provider, required when auth is enabled
        users: Store of logged-in users

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="shortage",
        description="Link shortener with expiring and use-limited links",
        version=__version__,
        docs_url="/api/docs",
        redoc_url=None,
        openapi_url="/api/openapi.json",
    )

    # Store instances in app state for access in routes
    app.state.config = config
    app.state.service = service_instance
    app.state.identity_provider = identity_provider
    app.state.users = users if users is not None else UserStore()

    session_secret = config.session_secret
    if not session_secret:
        logger.warning("SESSION_SECRET is not set; using a random key, sessions end with the process")
        session_secret = secrets.token_urlsafe(32)

    app.add_middleware(
        SessionMiddleware,
        secret_key=session_secret,
        max_age=config.session_max_age,
        same_site="lax",  # the OAuth callback is a cross-site navigation
        https_only=config.secure_cookies,
    )
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(health_router, prefix="/api", tags=["API"])
    app.include_router(api_router, prefix="/api", tags=["API"])
    if config.auth_enabled:
        app.include_router(auth_router, tags=["Auth"])
    app.include_router(web_router, tags=["Web"])
    app.include_router(redirect_router)

    return app
