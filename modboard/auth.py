"""Session-based authentication helpers for server-rendered routes."""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse, RedirectResponse

from modboard.models import User
from modboard.models.account import STAFF_ROLES

ROLE_LANDING: dict[str, str] = {
    "ADMIN": "/admin/reports",
    "MODERATOR": "/admin/reports",
    "USER": "/settings/featured_tags",
}


SessionUser = dict[str, Any]


def role_landing(role: str | None) -> str:
    """Resolve role landing path with settings page fallback."""
    return ROLE_LANDING.get(str(role), "/settings/featured_tags")


def start_session(request: Request, user: User) -> None:
    request.session.clear()
    request.session["user_id"] = user.id
    request.session["username"] = user.username
    request.session["role"] = user.role
    request.session["account_id"] = user.account_id


def get_current_user(request: Request) -> SessionUser | None:
    """Return current authenticated user snapshot from session."""
    user_id = request.session.get("user_id")
    role = request.session.get("role")
    username = request.session.get("username")
    account_id = request.session.get("account_id")
    if user_id and role and username and account_id:
        return {"user_id": user_id, "role": role, "username": username, "account_id": account_id}
    return None


def require_login(request: Request) -> SessionUser | RedirectResponse:
    """Require an authenticated session for page access."""
    current = get_current_user(request)
    if current is None:
        return RedirectResponse(url="/login", status_code=303)
    return current


def forbidden_page() -> HTMLResponse:
    return HTMLResponse("<!doctype html><html><body><h1>403 Forbidden</h1><p>Staff access required.</p></body></html>", status_code=403)


def require_staff(request: Request) -> SessionUser | RedirectResponse | HTMLResponse:
    """Require a moderator or admin session; others get a 403 page."""
    current = require_login(request)
    if isinstance(current, RedirectResponse):
        return current
    if str(current.get("role", "")).upper() not in STAFF_ROLES:
        return forbidden_page()
    return current
