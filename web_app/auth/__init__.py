"""Login flow and login guard."""

from .dependencies import current_caller, login_required
from .routes import router as auth_router

__all__ = ["auth_router", "current_caller", "login_required"]
