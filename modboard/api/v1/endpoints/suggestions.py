"""Suggestion dismissal endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from modboard.core.security import get_current_user
from modboard.db.session import get_db
from modboard.models import User
from modboard.services.suggestion_service import dismiss_suggestion

router: APIRouter = APIRouter()


@router.delete("/{account_id}")
def delete_suggestion(account_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)) -> dict:
    dismiss_suggestion(db, current_user.account, account_id)
    return {}
