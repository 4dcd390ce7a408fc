"""Account and login user ORM models."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modboard.db.base import Base

USER_ROLES = ("ADMIN", "MODERATOR", "USER")
STAFF_ROLES = frozenset({"ADMIN", "MODERATOR"})


def normalize_user_role(role: str | None) -> str:
    """Return canonical upper-case role or raise for unknown values."""
    normalized = str(role or "").strip().upper()
    if normalized not in USER_ROLES:
        raise ValueError(f"Unknown role: {role!r}")
    return normalized


class Account(Base):
    """Public identity that reports, follows and featured tags point at."""

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    display_name: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    note: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    user: Mapped["User | None"] = relationship(back_populates="account", uselist=False)
    featured_tags: Mapped[list["FeaturedTag"]] = relationship(back_populates="account", cascade="all, delete-orphan")


class User(Base):
    """Local login bound to exactly one account."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(Enum(*USER_ROLES, name="user_role"), nullable=False, default="USER")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    account: Mapped[Account] = relationship(back_populates="user")

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES
