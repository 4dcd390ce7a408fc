"""Featured hashtag settings for an account profile."""

from __future__ import annotations

import logging
import re

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from modboard.core.config import settings
from modboard.core.exceptions import FeaturedTagError
from modboard.models import Account, FeaturedTag

logger = logging.getLogger(__name__)

# Word characters with at least one non-digit, as hashtags are matched in posts.
HASHTAG_NAME_RE = re.compile(r"^\w*[^\W\d]\w*$")
HASHTAG_MAX_LENGTH = 255


def normalize_tag_name(raw: str) -> str:
    name = (raw or "").strip()
    if name.startswith("#"):
        name = name[1:]
    return name


def list_featured_tags(db: Session, account: Account) -> list[FeaturedTag]:
    return list(
        db.scalars(select(FeaturedTag).where(FeaturedTag.account_id == account.id).order_by(FeaturedTag.id.asc())).all()
    )


def create_featured_tag(db: Session, account: Account, raw_name: str) -> FeaturedTag:
    name = normalize_tag_name(raw_name)
    if not name:
        raise FeaturedTagError("Hashtag can't be blank.")
    if len(name) > HASHTAG_MAX_LENGTH or not HASHTAG_NAME_RE.match(name):
        raise FeaturedTagError("Hashtag is invalid.")

    duplicate = db.scalar(
        select(FeaturedTag)
        .where(FeaturedTag.account_id == account.id, func.lower(FeaturedTag.name) == name.lower())
        .limit(1)
    )
    if duplicate is not None:
        raise FeaturedTagError("Hashtag is already featured.")

    count = db.scalar(select(func.count(FeaturedTag.id)).where(FeaturedTag.account_id == account.id)) or 0
    if count >= settings.featured_tags_limit:
        raise FeaturedTagError(f"You can feature at most {settings.featured_tags_limit} hashtags.")

    tag = FeaturedTag(account_id=account.id, name=name)
    db.add(tag)
    db.commit()
    db.refresh(tag)
    logger.info("[FEATURED_TAGS] account_id=%s featured #%s", account.id, name)
    return tag


def delete_featured_tag(db: Session, account: Account, tag_id: int) -> bool:
    """Delete one of the account's tags; returns False when it is not theirs."""
    tag = db.scalar(select(FeaturedTag).where(FeaturedTag.id == tag_id, FeaturedTag.account_id == account.id).limit(1))
    if tag is None:
        return False
    db.delete(tag)
    db.commit()
    return True
