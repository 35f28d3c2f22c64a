"""Web interface routes implementation."""

from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from shortage.models import Caller
from ..auth.dependencies import current_caller, login_required
from ..rendering import render_page, short_url_for, templates

router = APIRouter(dependencies=[Depends(login_required)])

# Must be included last: it answers every GET path the other routers leave.
redirect_router = APIRouter()


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the homepage with the register, edit and remove forms."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"user": request.state.user},
    )


@router.post("/register", response_class=HTMLResponse, include_in_schema=False)
async def register_web(
    request: Request,
    target: str = Form(...),
    name: Optional[str] = Form(None),
    expiration: Optional[str] = Form(None),
    max_uses: Optional[str] = Form(None),
    caller: Caller = Depends(current_caller),
):
    """Handle the registration form."""
    service = request.app.state.service

    short_name = service.register(
        caller,
        target,
        name=name,
        expiration=expiration,
        max_uses=max_uses,
    )

    return templates.TemplateResponse(
        request,
        "registered.html",
        {
            "short_name": short_name,
            "short_url": short_url_for(request, short_name),
            "target": target,
        },
    )


@router.post("/edit", response_class=HTMLResponse, include_in_schema=False)
async def edit_web(
    request: Request,
    target: str = Form(...),
    name: Optional[str] = Form(None),
    expiration: Optional[str] = Form(None),
    max_uses: Optional[str] = Form(None),
    caller: Caller = Depends(current_caller),
):
    """Handle the edit form."""
    request.app.state.service.edit(
        caller,
        name,
        target,
        expiration=expiration,
        max_uses=max_uses,
    )
    return render_page(request, "Successfully edited!")


@router.post("/remove", response_class=HTMLResponse, include_in_schema=False)
async def remove_web(
    request: Request,
    name: str = Form(...),
    caller: Caller = Depends(current_caller),
):
    """Handle the remove form."""
    request.app.state.service.remove(caller, name)
    return render_page(request, "Successfully removed!")


@router.get("/list", response_class=HTMLResponse, include_in_schema=False)
async def list_web(
    request: Request,
    caller: Caller = Depends(current_caller),
):
    """Show the caller's links."""
    links = [
        {"name": name, "short_url": short_url_for(request, name), "record": record}
        for name, record in request.app.state.service.list_links(caller)
    ]
    return templates.TemplateResponse(
        request,
        "list.html",
        {"links": links, "user": request.state.user},
    )


@redirect_router.get("/{short_name:path}", include_in_schema=False)
async def redirect_to_target(request: Request, short_name: str):
    """Redirect to the target of a short link (this counts as a use)."""
    target = request.app.state.service.resolve(short_name)

    # 302 so browsers do not cache a link that may expire
    return RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)
