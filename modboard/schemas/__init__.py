"""Schema exports."""

from modboard.schemas.account import AccountRead, RelationshipRead, SuggestionRead
from modboard.schemas.auth import AuthUserResponse, LoginRequest, TokenResponse
from modboard.schemas.report import ReportCreate, ReportRead

__all__ = [
    "AccountRead",
    "RelationshipRead",
    "SuggestionRead",
    "AuthUserResponse",
    "LoginRequest",
    "TokenResponse",
    "ReportCreate",
    "ReportRead",
]
