"""Audit log helpers."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from modboard.db.base import Base
from modboard.models import Account, ActionLog
from modboard.models.action_log import ACTION_KINDS


def log_action(db: Session, *, actor: Account, action: str, target: Base) -> ActionLog:
    """Stage an action log row in the caller's transaction."""
    if action not in ACTION_KINDS:
        raise ValueError(f"Unknown action kind: {action}")

    entry = ActionLog(
        account_id=actor.id,
        action=action,
        target_type=type(target).__name__,
        target_id=target.id,
    )
    db.add(entry)
    return entry


def logs_for_target(db: Session, target: Base) -> list[ActionLog]:
    return list(
        db.scalars(
            select(ActionLog)
            .options(joinedload(ActionLog.account))
            .where(ActionLog.target_type == type(target).__name__, ActionLog.target_id == target.id)
            .order_by(ActionLog.id.desc())
        ).all()
    )


def recent_logs(db: Session, limit: int = 100) -> list[ActionLog]:
    return list(
        db.scalars(select(ActionLog).options(joinedload(ActionLog.account)).order_by(ActionLog.id.desc()).limit(limit)).all()
    )
