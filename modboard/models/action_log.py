"""Immutable moderation audit trail."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modboard.db.base import Base
from modboard.models.account import Account

ACTION_KINDS = ("resolve", "reopen", "assign_to_self", "unassign")


class ActionLog(Base):
    """One row per moderator action on a target record."""

    __tablename__ = "action_logs"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"), nullable=False)
    action: Mapped[str] = mapped_column(String(32), nullable=False)
    target_type: Mapped[str] = mapped_column(String(64), nullable=False)
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    account: Mapped[Account] = relationship()

    __table_args__ = (Index("ix_action_logs_target", "target_type", "target_id"),)
