"""Report filing endpoint for regular accounts."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from modboard.core.exceptions import ReportValidationError
from modboard.core.security import get_current_user
from modboard.db.session import get_db
from modboard.models import Report, User
from modboard.schemas.report import ReportCreate, ReportRead
from modboard.services.report_service import ReportLifecycleManager

router: APIRouter = APIRouter()


@router.post("", response_model=ReportRead, status_code=status.HTTP_201_CREATED)
def create_report(
    payload: ReportCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Report:
    try:
        return ReportLifecycleManager(db).file_report(current_user.account, payload.account_id, payload.comment)
    except ReportValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
