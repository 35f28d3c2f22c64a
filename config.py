"""Configuration management for the shortage service."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=5000,
        description="Port to listen on"
    )

    base_url: str = Field(
        default="http://localhost:5000",
        description="Fallback base URL for displayed short links when the request carries no host"
    )

    # Registry settings
    short_name_length: int = Field(
        default=8,
        ge=1,
        description="Length of generated short names"
    )

    max_name_attempts: int = Field(
        default=10,
        ge=1,
        description="Random candidates tried before name generation fails"
    )

    # Authentication settings
    auth_enabled: bool = Field(
        default=True,
        description="Require a GitHub login for registering and managing links"
    )

    github_client_id: Optional[str] = Field(
        default=None,
        description="GitHub OAuth app client id"
    )

    github_client_secret: Optional[str] = Field(
        default=None,
        description="GitHub OAuth app client secret"
    )

    # Session settings
    session_secret: Optional[str] = Field(
        default=None,
        description="Key for signing session cookies (random per process if unset)"
    )

    session_max_age: int = Field(
        default=86400,
        ge=1,
        description="Session cookie lifetime in seconds"
    )

    secure_cookies: bool = Field(
        default=False,
        description="Only send the session cookie over HTTPS"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    def safe_dump(self) -> dict:
        """Dump settings with secrets masked, for startup logging."""
        data = self.model_dump()
        for key in ("github_client_secret", "session_secret"):
            if data.get(key):
                data[key] = "***"
        return data


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
