"""Hashtags an account pins to its profile."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modboard.db.base import Base


class FeaturedTag(Base):
    __tablename__ = "featured_tags"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    account: Mapped["Account"] = relationship(back_populates="featured_tags")

    __table_args__ = (Index("ix_featured_tags_account_id", "account_id"),)
