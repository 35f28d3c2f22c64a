"""API routes implementation."""

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, Request, status

from shortage.models import Caller
from ..auth.dependencies import current_caller, login_required
from ..rendering import short_url_for
from .schemas import (
    EditRequest,
    ErrorResponse,
    HealthResponse,
    LinkInfo,
    RegisterRequest,
    RegisterResponse,
    RemoveResponse,
)

router = APIRouter(dependencies=[Depends(login_required)])
health_router = APIRouter()

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Short link not found"}}
_UNPROCESSABLE = {422: {"model": ErrorResponse, "description": "Invalid request"}}


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_UNPROCESSABLE,
        500: {"model": ErrorResponse, "description": "No free short name found"},
    },
    summary="Register short link",
    description="Register a short link. Optionally provide a name, an expiration and a use limit.",
)
async def register_link(
    request: Request,
    body: RegisterRequest,
    caller: Caller = Depends(current_caller),
):
    """Register a short link."""
    service = request.app.state.service

    name = service.register(
        caller,
        body.target,
        name=body.name,
        expiration=body.expiration,
        max_uses=body.max_uses,
    )

    return RegisterResponse(
        name=name,
        short_url=short_url_for(request, name),
        target=body.target,
    )


@router.patch(
    "/edit",
    response_model=LinkInfo,
    responses={**_NOT_FOUND, **_UNPROCESSABLE},
    summary="Edit short link",
    description="Replace target, expiration and use limit of a link you own. The use count is kept.",
)
async def edit_link(
    request: Request,
    body: EditRequest,
    caller: Caller = Depends(current_caller),
):
    """Edit an owned short link."""
    service = request.app.state.service
    name = body.name.strip()

    record = service.edit(
        caller,
        name,
        body.target,
        expiration=body.expiration,
        max_uses=body.max_uses,
    )

    return LinkInfo.from_record(name, short_url_for(request, name), record)


@router.delete(
    "/remove/{name}",
    response_model=RemoveResponse,
    responses=_NOT_FOUND,
    summary="Remove short link",
)
async def remove_link(
    request: Request,
    name: str,
    caller: Caller = Depends(current_caller),
):
    """Remove an owned short link."""
    request.app.state.service.remove(caller, name)
    return RemoveResponse(name=name)


@router.get(
    "/list",
    response_model=List[LinkInfo],
    summary="List short links",
    description="List the links you own (every link when authentication is disabled).",
)
async def list_links(
    request: Request,
    caller: Caller = Depends(current_caller),
):
    """List the caller's short links."""
    service = request.app.state.service
    return [
        LinkInfo.from_record(name, short_url_for(request, name), record)
        for name, record in service.list_links(caller)
    ]


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is up.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    health = request.app.state.service.health()

    return HealthResponse(
        status="healthy",
        links=health["links"],
        auth_enabled=request.app.state.config.auth_enabled,
        timestamp=datetime.now(timezone.utc),
    )
