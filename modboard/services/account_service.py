"""Account provisioning and login helpers."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from modboard.core.config import settings
from modboard.core.security import get_password_hash, verify_password
from modboard.models import Account, User
from modboard.models.account import normalize_user_role

logger = logging.getLogger(__name__)


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.scalar(select(User).where(User.username == username).limit(1))


def create_user(
    db: Session,
    username: str,
    hashed_password: str,
    role: str,
    email: str | None = None,
    display_name: str = "",
) -> User:
    """Create a login together with the account it acts as."""
    canonical_role = normalize_user_role(role)
    account = Account(username=username, display_name=display_name or username)
    db.add(account)
    db.flush()

    user = User(
        username=username,
        password_hash=hashed_password,
        role=canonical_role,
        email=email,
        is_active=True,
        account_id=account.id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def ensure_default_admin(db: Session) -> bool:
    """Ensure the bootstrap admin user exists and is active.

    Returns:
        bool: True when the admin user existed before this call.
    """
    username = settings.admin_user or "admin"
    existing_admin = get_user_by_username(db, username)
    if existing_admin is not None:
        if not existing_admin.is_active:
            existing_admin.is_active = True
            db.commit()
            logger.info("[BOOTSTRAP] Admin exists but was inactive; account re-activated.")
        logger.info("[BOOTSTRAP] Admin exists")
        return True

    password = settings.admin_pass or "123"
    create_user(db, username=username, hashed_password=get_password_hash(password), role="ADMIN")
    if not settings.admin_pass:
        logger.warning("[SECURITY] Default admin account created: %s/123. Change default password immediately.", username)
    return False


def authenticate_user(db: Session, username: str, password: str) -> User | None:
    user = get_user_by_username(db, username.strip())
    if user is None or not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return user
