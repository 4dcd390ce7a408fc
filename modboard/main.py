"""FastAPI entrypoint for the moderation dashboard and account settings."""

from __future__ import annotations

import logging
from collections.abc import Callable
from html import escape
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session
from starlette.middleware.sessions import SessionMiddleware

from modboard.api.v1.api import api_router
from modboard.api.v2.api import api_router as api_v2_router
from modboard.auth import get_current_user, require_login, require_staff, role_landing, start_session
from modboard.core.config import settings
from modboard.core.exceptions import FeaturedTagError, InvalidParametersError, ReportNotFoundError
from modboard.core.log_config import configure_logging
from modboard.db.base import Base
from modboard.db.session import SessionLocal, engine
from modboard.models import Account, Report
from modboard.services.account_service import authenticate_user, ensure_default_admin
from modboard.services.audit_service import recent_logs
from modboard.services.featured_tag_service import create_featured_tag, delete_featured_tag, list_featured_tags
from modboard.services.report_service import ReportLifecycleManager
from modboard.utils.params import parse_query_and_body, permit_params, require_params

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, debug=settings.debug)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    same_site="lax",
    https_only=False,
    max_age=60 * 60 * 24 * 7,
)
app.include_router(api_router, prefix="/api/v1")
app.include_router(api_v2_router, prefix="/api/v2")
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

ReportOperation = Callable[[ReportLifecycleManager], Callable[[Report, Account], Report]]


def inject_globals(request: Request) -> dict[str, Any]:
    """Inject common session-derived values for Jinja templates."""
    return {
        "session": request.session,
        "current_user_role": request.session.get("role"),
        "current_username": request.session.get("username"),
    }


def render_template(request: Request, name: str, context: dict | None = None, status_code: int = 200):
    """Render a template with required request object and shared global context."""
    payload = {"request": request, **inject_globals(request)}
    if context:
        payload.update(context)
    return templates.TemplateResponse(request, name, payload, status_code=status_code)


@app.on_event("startup")
def startup() -> None:
    configure_logging()
    if settings.session_secret == "dev-session-secret-change-me":
        logger.warning("SESSION_SECRET not set; using development fallback secret.")
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        try:
            admin_present = ensure_default_admin(session)
            logger.info("[BOOTSTRAP] default admin present: %s", "yes" if admin_present else "no")
        except Exception:
            logger.exception("[BOOTSTRAP] Admin bootstrap failed; continuing startup.")


@app.exception_handler(InvalidParametersError)
async def handle_invalid_parameters(request: Request, exc: InvalidParametersError):
    logger.info("[PARAMS] %s %s rejected: %s", request.method, request.url.path, exc.msg)
    if request.url.path.startswith("/api/"):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.msg})
    return HTMLResponse(
        f"<!doctype html><html><body><h1>400 Bad Request</h1><p>{escape(exc.msg)}</p></body></html>",
        status_code=exc.status_code,
    )


async def _request_params(request: Request) -> dict[str, Any]:
    """Query string and url-encoded body folded into one nested params hash."""
    content_type = request.headers.get("content-type", "")
    body = b""
    if not content_type or content_type.startswith("application/x-www-form-urlencoded"):
        body = await request.body()
    return parse_query_and_body(request.url.query, body)


def _not_found_page(what: str) -> HTMLResponse:
    return HTMLResponse(
        f"<!doctype html><html><body><h1>404 Not Found</h1><p>{escape(what)} not found.</p></body></html>",
        status_code=404,
    )


def _session_account(request: Request, db: Session, current: dict[str, Any]) -> Account | None:
    account = db.get(Account, int(current["account_id"]))
    if account is None:
        request.session.clear()
    return account


@app.get("/", response_class=RedirectResponse)
def root(request: Request):
    current = get_current_user(request)
    if current is None:
        return RedirectResponse(url="/login", status_code=303)
    return RedirectResponse(url=role_landing(str(current["role"])), status_code=303)


@app.get("/login", response_class=HTMLResponse)
def login_page(request: Request, error: str | None = None):
    current = get_current_user(request)
    if current:
        return RedirectResponse(url=role_landing(str(current["role"])), status_code=303)
    return render_template(request, "login.html", {"error": error})


@app.post("/login", response_class=RedirectResponse)
async def login_submit(request: Request):
    params = await _request_params(request)
    username = params.get("username", "")
    password = params.get("password", "")
    if not isinstance(username, str) or not isinstance(password, str):
        raise InvalidParametersError("username and password must be plain values")

    with SessionLocal() as db:
        user = authenticate_user(db, username, password)
        if user is None:
            logger.info("[AUTH] Login rejected for username=%s", username.strip())
            return login_page(request, error="Invalid username or password")
        start_session(request, user)
        role = user.role

    return RedirectResponse(url=role_landing(role), status_code=303)


@app.post("/logout", response_class=RedirectResponse)
def logout(request: Request):
    request.session.clear()
    return RedirectResponse(url="/login", status_code=303)


@app.get("/logout", response_class=RedirectResponse)
def logout_get(request: Request):
    return logout(request)


@app.get("/admin/reports", response_class=HTMLResponse)
def admin_reports(request: Request, resolved: str | None = None, target_account_id: int | None = None):
    current = require_staff(request)
    if isinstance(current, (RedirectResponse, HTMLResponse)):
        return current
    show_resolved = resolved in {"1", "true", "on"}
    with SessionLocal() as db:
        reports = ReportLifecycleManager(db).list_reports(resolved=show_resolved, target_account_id=target_account_id)
        return render_template(
            request,
            "admin_reports.html",
            {"reports": reports, "resolved": show_resolved, "target_account_id": target_account_id},
        )


@app.get("/admin/reports/{report_id}", response_class=HTMLResponse)
def admin_report_show(request: Request, report_id: int):
    current = require_staff(request)
    if isinstance(current, (RedirectResponse, HTMLResponse)):
        return current
    with SessionLocal() as db:
        manager = ReportLifecycleManager(db)
        try:
            report = manager.get_report(report_id)
        except ReportNotFoundError:
            return _not_found_page("Report")
        return render_template(
            request,
            "admin_report.html",
            {"report": report, "history": manager.history(report), "current_account_id": int(current["account_id"])},
        )


def _report_transition(request: Request, report_id: int, operation: ReportOperation, redirect_to: str):
    current = require_staff(request)
    if isinstance(current, (RedirectResponse, HTMLResponse)):
        return current
    with SessionLocal() as db:
        account = _session_account(request, db, current)
        if account is None:
            return RedirectResponse(url="/login", status_code=303)
        manager = ReportLifecycleManager(db)
        try:
            report = manager.get_report(report_id)
        except ReportNotFoundError:
            return _not_found_page("Report")
        operation(manager)(report, account)
    return RedirectResponse(url=redirect_to, status_code=303)


@app.put("/admin/reports/{report_id}/resolve", response_class=RedirectResponse)
@app.post("/admin/reports/{report_id}/resolve", response_class=RedirectResponse)
def admin_report_resolve(request: Request, report_id: int):
    return _report_transition(request, report_id, lambda manager: manager.resolve, "/admin/reports")


@app.put("/admin/reports/{report_id}/reopen", response_class=RedirectResponse)
@app.post("/admin/reports/{report_id}/reopen", response_class=RedirectResponse)
def admin_report_reopen(request: Request, report_id: int):
    return _report_transition(request, report_id, lambda manager: manager.reopen, f"/admin/reports/{report_id}")


@app.put("/admin/reports/{report_id}/assign_to_self", response_class=RedirectResponse)
@app.post("/admin/reports/{report_id}/assign_to_self", response_class=RedirectResponse)
def admin_report_assign_to_self(request: Request, report_id: int):
    return _report_transition(request, report_id, lambda manager: manager.assign_to_self, f"/admin/reports/{report_id}")


@app.put("/admin/reports/{report_id}/unassign", response_class=RedirectResponse)
@app.post("/admin/reports/{report_id}/unassign", response_class=RedirectResponse)
def admin_report_unassign(request: Request, report_id: int):
    return _report_transition(request, report_id, lambda manager: manager.unassign, f"/admin/reports/{report_id}")


@app.get("/admin/action_logs", response_class=HTMLResponse)
def admin_action_logs(request: Request):
    current = require_staff(request)
    if isinstance(current, (RedirectResponse, HTMLResponse)):
        return current
    with SessionLocal() as db:
        return render_template(request, "admin_action_logs.html", {"logs": recent_logs(db)})


def _featured_tags_page(request: Request, db: Session, account: Account, error: str | None = None, name: str = ""):
    return render_template(
        request,
        "featured_tags.html",
        {
            "tags": list_featured_tags(db, account),
            "error": error,
            "message": request.query_params.get("message"),
            "name": name,
            "limit": settings.featured_tags_limit,
        },
    )


@app.get("/settings/featured_tags", response_class=HTMLResponse)
def featured_tags_index(request: Request):
    current = require_login(request)
    if isinstance(current, RedirectResponse):
        return current
    with SessionLocal() as db:
        account = _session_account(request, db, current)
        if account is None:
            return RedirectResponse(url="/login", status_code=303)
        return _featured_tags_page(request, db, account)


@app.post("/settings/featured_tags", response_class=RedirectResponse)
async def featured_tags_create(request: Request):
    current = require_login(request)
    if isinstance(current, RedirectResponse):
        return current
    params = await _request_params(request)
    featured_tag = permit_params(require_params(params, "featured_tag"), "name")
    name = featured_tag.get("name", "")

    with SessionLocal() as db:
        account = _session_account(request, db, current)
        if account is None:
            return RedirectResponse(url="/login", status_code=303)
        try:
            create_featured_tag(db, account, name)
        except FeaturedTagError as exc:
            return _featured_tags_page(request, db, account, error=str(exc), name=name)

    return RedirectResponse(url="/settings/featured_tags?message=Hashtag+featured", status_code=303)


@app.delete("/settings/featured_tags/{tag_id}", response_class=RedirectResponse)
@app.post("/settings/featured_tags/{tag_id}/delete", response_class=RedirectResponse)
def featured_tags_destroy(request: Request, tag_id: int):
    current = require_login(request)
    if isinstance(current, RedirectResponse):
        return current
    with SessionLocal() as db:
        account = _session_account(request, db, current)
        if account is None:
            return RedirectResponse(url="/login", status_code=303)
        if not delete_featured_tag(db, account, tag_id):
            return _not_found_page("Featured tag")
    return RedirectResponse(url="/settings/featured_tags?message=Hashtag+removed", status_code=303)
