"""Moderation report model."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modboard.db.base import Base
from modboard.models.account import Account


class Report(Base):
    """User complaint about an account, triaged by staff.

    ``action_taken_at`` and ``action_taken_by_account_id`` are set and cleared
    together; an open report has both set to ``None``.
    """

    __tablename__ = "reports"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"), nullable=False)
    target_account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"), nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False, default="")
    action_taken_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    action_taken_by_account_id: Mapped[int | None] = mapped_column(ForeignKey("accounts.id"), nullable=True)
    assigned_account_id: Mapped[int | None] = mapped_column(ForeignKey("accounts.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    account: Mapped[Account] = relationship(foreign_keys=[account_id])
    target_account: Mapped[Account] = relationship(foreign_keys=[target_account_id])
    action_taken_by_account: Mapped[Account | None] = relationship(foreign_keys=[action_taken_by_account_id])
    assigned_account: Mapped[Account | None] = relationship(foreign_keys=[assigned_account_id])

    __table_args__ = (
        Index("ix_reports_action_taken_at", "action_taken_at"),
        Index("ix_reports_target_account_id", "target_account_id"),
    )

    @property
    def action_taken(self) -> bool:
        return self.action_taken_at is not None
