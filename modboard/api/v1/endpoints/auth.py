"""Authentication endpoints (API JWT)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from modboard.core.security import create_access_token, get_current_user
from modboard.db.session import get_db
from modboard.models import User
from modboard.schemas.auth import AuthUserResponse, LoginRequest, TokenResponse
from modboard.services.account_service import authenticate_user

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> TokenResponse:
    user: User | None = authenticate_user(db, payload.username, payload.password)
    if user is None:
        logger.info("[AUTH] API login rejected for username=%s", payload.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect username or password")
    return TokenResponse(access_token=create_access_token(user.id))


@router.get("/me", response_model=AuthUserResponse)
def me(current_user: User = Depends(get_current_user)) -> AuthUserResponse:
    return AuthUserResponse.model_validate(current_user)
