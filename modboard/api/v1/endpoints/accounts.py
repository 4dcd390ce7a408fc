"""Account relationship lookups."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from modboard.core.security import get_current_user
from modboard.db.session import get_db
from modboard.models import User
from modboard.schemas.account import RelationshipRead
from modboard.services.suggestion_service import relationships

router: APIRouter = APIRouter()


@router.get("/relationships", response_model=list[RelationshipRead])
def get_relationships(
    ids: list[int] = Query(default=[], alias="id[]"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[dict]:
    return relationships(db, current_user.account, ids)
