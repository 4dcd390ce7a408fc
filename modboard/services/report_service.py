"""Moderation report lifecycle: resolve, reopen, assign and unassign."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from modboard.core.config import settings
from modboard.core.exceptions import ReportNotFoundError, ReportValidationError
from modboard.models import Account, ActionLog, Report
from modboard.services.audit_service import log_action, logs_for_target

logger = logging.getLogger(__name__)

ReportMutation = Callable[[Report, Account], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReportLifecycleManager:
    """Owns report state transitions and writes one action log row per transition.

    Every transition runs in a single transaction on the bound session: the
    report row is re-read with ``FOR UPDATE`` so concurrent operations on the
    same report serialize, the change and its log row are committed together,
    and any failure rolls both back.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = _utcnow) -> None:
        self.db = db
        self.clock = clock

    def get_report(self, report_id: int) -> Report:
        report = self.db.scalar(
            select(Report)
            .options(
                joinedload(Report.account),
                joinedload(Report.target_account),
                joinedload(Report.action_taken_by_account),
                joinedload(Report.assigned_account),
            )
            .where(Report.id == report_id)
        )
        if report is None:
            raise ReportNotFoundError(report_id)
        return report

    def list_reports(self, *, resolved: bool = False, target_account_id: int | None = None) -> list[Report]:
        query = select(Report).options(joinedload(Report.target_account), joinedload(Report.assigned_account))
        if resolved:
            query = query.where(Report.action_taken_at.is_not(None))
        else:
            query = query.where(Report.action_taken_at.is_(None))
        if target_account_id is not None:
            query = query.where(Report.target_account_id == target_account_id)
        return list(self.db.scalars(query.order_by(Report.id.desc())).all())

    def history(self, report: Report) -> list[ActionLog]:
        return logs_for_target(self.db, report)

    def file_report(self, reporter: Account, target_account_id: int, comment: str = "") -> Report:
        comment = (comment or "").strip()
        if len(comment) > settings.report_comment_max_length:
            raise ReportValidationError(
                f"Comment must be at most {settings.report_comment_max_length} characters."
            )
        if self.db.get(Account, target_account_id) is None:
            raise ReportValidationError("Reported account does not exist.")

        report = Report(account_id=reporter.id, target_account_id=target_account_id, comment=comment)
        self.db.add(report)
        self.db.commit()
        self.db.refresh(report)
        logger.info("[REPORTS] filed report_id=%s by account_id=%s", report.id, reporter.id)
        return report

    def resolve(self, report: Report, acting_account: Account) -> Report:
        def _mutate(locked: Report, actor: Account) -> None:
            locked.action_taken_at = self.clock()
            locked.action_taken_by_account_id = actor.id

        return self._transition(report, acting_account, "resolve", _mutate)

    def reopen(self, report: Report, acting_account: Account) -> Report:
        def _mutate(locked: Report, actor: Account) -> None:
            locked.action_taken_at = None
            locked.action_taken_by_account_id = None

        return self._transition(report, acting_account, "reopen", _mutate)

    def assign_to_self(self, report: Report, acting_account: Account) -> Report:
        def _mutate(locked: Report, actor: Account) -> None:
            locked.assigned_account_id = actor.id

        return self._transition(report, acting_account, "assign_to_self", _mutate)

    def unassign(self, report: Report, acting_account: Account) -> Report:
        def _mutate(locked: Report, actor: Account) -> None:
            locked.assigned_account_id = None

        return self._transition(report, acting_account, "unassign", _mutate)

    def _lock(self, report_id: int) -> Report:
        locked = self.db.scalar(
            select(Report)
            .where(Report.id == report_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        if locked is None:
            raise ReportNotFoundError(report_id)
        return locked

    def _transition(self, report: Report, actor: Account, action: str, mutate: ReportMutation) -> Report:
        report_id = report.id
        try:
            locked = self._lock(report_id)
            mutate(locked, actor)
            log_action(self.db, actor=actor, action=action, target=locked)
            self.db.commit()
        except ReportNotFoundError:
            self.db.rollback()
            raise
        except Exception:
            self.db.rollback()
            logger.exception("[REPORTS] %s failed for report_id=%s", action, report_id)
            raise

        self.db.refresh(locked)
        logger.info("[REPORTS] %s report_id=%s by account_id=%s", action, locked.id, actor.id)
        return locked
