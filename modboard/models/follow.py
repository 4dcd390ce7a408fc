"""Follow graph and follow recommendations."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modboard.db.base import Base
from modboard.models.account import Account

SUGGESTION_SOURCES = ("staff", "global", "past_interactions", "friends_of_friends")


class Follow(Base):
    """``account`` follows ``target_account``."""

    __tablename__ = "follows"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"), nullable=False)
    target_account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (UniqueConstraint("account_id", "target_account_id", name="uq_follows_pair"),)


class FollowRecommendation(Base):
    """Suggested account; ``account_id`` is NULL for recommendations shown to everybody."""

    __tablename__ = "follow_recommendations"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int | None] = mapped_column(ForeignKey("accounts.id"), nullable=True)
    target_account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"), nullable=False)
    source: Mapped[str] = mapped_column(String(32), nullable=False, default="global")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    target_account: Mapped[Account] = relationship(foreign_keys=[target_account_id])

    __table_args__ = (Index("ix_follow_recommendations_account_id", "account_id"),)


class FollowRecommendationMute(Base):
    """Hides a dismissed target from one account's suggestions."""

    __tablename__ = "follow_recommendation_mutes"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"), nullable=False)
    target_account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (UniqueConstraint("account_id", "target_account_id", name="uq_follow_recommendation_mutes_pair"),)
