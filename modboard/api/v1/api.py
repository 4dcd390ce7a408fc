"""API v1 router composition."""

from fastapi import APIRouter

from modboard.api.v1.endpoints import accounts, admin_reports, auth, reports, suggestions

api_router: APIRouter = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(admin_reports.router, prefix="/admin/reports", tags=["admin"])
api_router.include_router(suggestions.router, prefix="/suggestions", tags=["suggestions"])
