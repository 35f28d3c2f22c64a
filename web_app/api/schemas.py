"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from shortage.models import ShortenedUrl


class RegisterRequest(BaseModel):
    """Request to register a short link."""

    target: str = Field(..., description="The URL to redirect to", min_length=1, max_length=2048)
    name: Optional[str] = Field(None, description="Optional short name; a random one is generated if omitted", max_length=64)
    expiration: Optional[datetime] = Field(None, description="RFC3339 timestamp after which the link stops working")
    max_uses: Optional[int] = Field(None, description="Number of redirects the link allows", ge=0)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "target": "https://example.com/very/long/path/to/resource",
                },
                {
                    "target": "https://github.com/user/repo",
                    "name": "myrepo",
                    "expiration": "2030-01-01T12:00:00Z",
                    "max_uses": 10,
                }
            ]
        }
    }


class EditRequest(BaseModel):
    """Request to replace the fields of an owned short link."""

    target: str = Field(..., description="The new URL to redirect to", min_length=1, max_length=2048)
    name: str = Field(..., description="Short name of the link to edit", min_length=1)
    expiration: Optional[datetime] = Field(None, description="New expiration, or none")
    max_uses: Optional[int] = Field(None, description="New use limit, or none", ge=0)


class RegisterResponse(BaseModel):
    """Response after registering a short link."""

    name: str = Field(..., description="The assigned short name")
    short_url: str = Field(..., description="The complete short URL")
    target: str = Field(..., description="The URL the link redirects to")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "aZ3kP9qX",
                    "short_url": "https://short.link/aZ3kP9qX",
                    "target": "https://example.com/very/long/path",
                }
            ]
        }
    }


class LinkInfo(BaseModel):
    """A short link and its usage."""

    name: str
    short_url: str
    target: str
    owner: Optional[int] = None
    uses: int
    expiration: Optional[datetime] = None
    max_uses: Optional[int] = None

    @classmethod
    def from_record(cls, name: str, short_url: str, record: ShortenedUrl) -> "LinkInfo":
        return cls(
            name=name,
            short_url=short_url,
            target=record.target,
            owner=record.owner,
            uses=record.uses,
            expiration=record.expiration,
            max_uses=record.max_uses,
        )


class RemoveResponse(BaseModel):
    """Response after removing a short link."""

    name: str
    status: str = "removed"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    links: int = Field(..., description="Number of live short links")
    auth_enabled: bool = Field(..., description="Whether a login is required")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str = Field(..., description="Error message")
