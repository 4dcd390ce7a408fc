"""API v2 router composition."""

from fastapi import APIRouter

from modboard.api.v2.endpoints import suggestions

api_router: APIRouter = APIRouter()
api_router.include_router(suggestions.router, prefix="/suggestions", tags=["suggestions"])
