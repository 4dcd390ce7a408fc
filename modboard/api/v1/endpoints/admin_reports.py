"""Staff report moderation endpoints."""

from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from modboard.core.exceptions import ReportNotFoundError
from modboard.core.security import get_moderator_account
from modboard.db.session import get_db
from modboard.models import Account, Report
from modboard.schemas.report import ReportRead
from modboard.services.report_service import ReportLifecycleManager

router: APIRouter = APIRouter()


def _load(manager: ReportLifecycleManager, report_id: int) -> Report:
    try:
        return manager.get_report(report_id)
    except ReportNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Report not found") from exc


def _transition(
    report_id: int,
    moderator: Account,
    db: Session,
    operation: Callable[[ReportLifecycleManager], Callable[[Report, Account], Report]],
) -> Report:
    manager = ReportLifecycleManager(db)
    report = _load(manager, report_id)
    return operation(manager)(report, moderator)


@router.get("", response_model=list[ReportRead])
def list_reports(
    resolved: bool = False,
    target_account_id: int | None = None,
    moderator: Account = Depends(get_moderator_account),
    db: Session = Depends(get_db),
) -> list[Report]:
    return ReportLifecycleManager(db).list_reports(resolved=resolved, target_account_id=target_account_id)


@router.get("/{report_id}", response_model=ReportRead)
def get_report(report_id: int, moderator: Account = Depends(get_moderator_account), db: Session = Depends(get_db)) -> Report:
    return _load(ReportLifecycleManager(db), report_id)


@router.post("/{report_id}/resolve", response_model=ReportRead)
def resolve_report(report_id: int, moderator: Account = Depends(get_moderator_account), db: Session = Depends(get_db)) -> Report:
    return _transition(report_id, moderator, db, lambda manager: manager.resolve)


@router.post("/{report_id}/reopen", response_model=ReportRead)
def reopen_report(report_id: int, moderator: Account = Depends(get_moderator_account), db: Session = Depends(get_db)) -> Report:
    return _transition(report_id, moderator, db, lambda manager: manager.reopen)


@router.post("/{report_id}/assign_to_self", response_model=ReportRead)
def assign_report_to_self(report_id: int, moderator: Account = Depends(get_moderator_account), db: Session = Depends(get_db)) -> Report:
    return _transition(report_id, moderator, db, lambda manager: manager.assign_to_self)


@router.post("/{report_id}/unassign", response_model=ReportRead)
def unassign_report(report_id: int, moderator: Account = Depends(get_moderator_account), db: Session = Depends(get_db)) -> Report:
    return _transition(report_id, moderator, db, lambda manager: manager.unassign)
