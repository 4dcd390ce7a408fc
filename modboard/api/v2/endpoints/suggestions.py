"""Follow suggestions listing."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from modboard.core.security import get_current_user
from modboard.db.session import get_db
from modboard.models import User
from modboard.schemas.account import SuggestionRead
from modboard.services.suggestion_service import get_suggestions

router: APIRouter = APIRouter()


@router.get("", response_model=list[SuggestionRead])
def list_suggestions(
    limit: int | None = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[dict]:
    return get_suggestions(db, current_user.account, limit)
