#!/usr/bin/env python3
"""
Main entry point for the shortage link shortener.

Concurrency: one uvicorn process serves many connections through async I/O.
The link registry lives in this process's memory, so the service always
runs with a single worker and forgets every link on restart.

Usage:
    python app.py

Environment variables:
    HOST / PORT - Address to listen on (default 0.0.0.0:5000)
    BASE_URL - Fallback base URL for displayed short links
    AUTH_ENABLED - Set to 0 to run without logins (every link is public)
    GITHUB_CLIENT_ID / GITHUB_CLIENT_SECRET - GitHub OAuth app credentials
    SESSION_SECRET - Key for signing session cookies
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortage.auth import GitHubIdentityProvider
from shortage.common.logging_config import setup_logging
from shortage.registry import Registry
from shortage.service import ShortenerService
from shortage.shortcode import ShortCodeGenerator
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting shortage...")

    registry = Registry(
        generator=ShortCodeGenerator(default_length=config.short_name_length),
        max_name_attempts=config.max_name_attempts,
        logger=logger.getChild("registry"),
    )
    app.state.service = ShortenerService(registry, logger=logger.getChild("service"))

    if config.auth_enabled:
        app.state.identity_provider = GitHubIdentityProvider(
            client_id=config.github_client_id,
            client_secret=config.github_client_secret,
            logger=logger.getChild("auth"),
        )
    else:
        logger.warning("Authentication disabled: every link is visible to and editable by everyone")

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down shortage...")

    if app.state.identity_provider:
        await app.state.identity_provider.close()

    logger.info(f"Service stopped, {len(registry)} links discarded")


def check_config(config: Config) -> None:
    """Refuse to start with settings the service cannot run with."""
    if config.auth_enabled and not (config.github_client_id and config.github_client_secret):
        raise ValueError(
            "GITHUB_CLIENT_ID and GITHUB_CLIENT_SECRET are required unless AUTH_ENABLED=0"
        )


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("shortage link shortener")
    logger.info(f"Configuration: {config.safe_dump()}")

    try:
        check_config(config)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    app = create_app(config=config)
    app.state.logger = logger

    # Override lifespan
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,  # LoggingMiddleware logs every request
    )

    server = uvicorn.Server(uvicorn_config)

    # Setup signal handlers for graceful shutdown
    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
