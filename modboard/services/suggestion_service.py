"""Follow suggestions and relationship lookups."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import delete, or_, select
from sqlalchemy.orm import Session, joinedload

from modboard.core.config import settings
from modboard.models import Account, Follow, FollowRecommendation, FollowRecommendationMute


def clamp_limit(limit: int | None) -> int:
    if limit is None:
        return settings.suggestions_default_limit
    return max(1, min(int(limit), settings.suggestions_max_limit))


def get_suggestions(db: Session, account: Account, limit: int | None = None) -> list[dict[str, Any]]:
    """Return ``{"source", "sources", "account"}`` entries, personal recommendations first."""
    followed = select(Follow.target_account_id).where(Follow.account_id == account.id)
    muted = select(FollowRecommendationMute.target_account_id).where(FollowRecommendationMute.account_id == account.id)

    rows = db.scalars(
        select(FollowRecommendation)
        .options(joinedload(FollowRecommendation.target_account))
        .where(
            or_(FollowRecommendation.account_id == account.id, FollowRecommendation.account_id.is_(None)),
            FollowRecommendation.target_account_id != account.id,
            FollowRecommendation.target_account_id.not_in(followed),
            FollowRecommendation.target_account_id.not_in(muted),
        )
        .order_by(FollowRecommendation.account_id.is_(None), FollowRecommendation.id.asc())
    ).all()

    entries: dict[int, dict[str, Any]] = {}
    for row in rows:
        entry = entries.get(row.target_account_id)
        if entry is None:
            entries[row.target_account_id] = {"source": row.source, "sources": [row.source], "account": row.target_account}
        elif row.source not in entry["sources"]:
            entry["sources"].append(row.source)

    return list(entries.values())[: clamp_limit(limit)]


def dismiss_suggestion(db: Session, account: Account, target_account_id: int) -> None:
    """Drop personal recommendations of the target and hide global ones."""
    db.execute(
        delete(FollowRecommendation).where(
            FollowRecommendation.account_id == account.id,
            FollowRecommendation.target_account_id == target_account_id,
        )
    )
    existing = db.scalar(
        select(FollowRecommendationMute)
        .where(
            FollowRecommendationMute.account_id == account.id,
            FollowRecommendationMute.target_account_id == target_account_id,
        )
        .limit(1)
    )
    if existing is None and db.get(Account, target_account_id) is not None:
        db.add(FollowRecommendationMute(account_id=account.id, target_account_id=target_account_id))
    db.commit()


def relationships(db: Session, account: Account, account_ids: Iterable[int]) -> list[dict[str, Any]]:
    requested = list(dict.fromkeys(account_ids))
    if not requested:
        return []

    existing = set(db.scalars(select(Account.id).where(Account.id.in_(requested))).all())
    following = set(
        db.scalars(
            select(Follow.target_account_id).where(Follow.account_id == account.id, Follow.target_account_id.in_(requested))
        ).all()
    )
    followed_by = set(
        db.scalars(
            select(Follow.account_id).where(Follow.target_account_id == account.id, Follow.account_id.in_(requested))
        ).all()
    )
    return [
        {"id": account_id, "following": account_id in following, "followed_by": account_id in followed_by}
        for account_id in requested
        if account_id in existing
    ]
