"""Application models package."""

from modboard.models.account import Account, User
from modboard.models.action_log import ActionLog
from modboard.models.featured_tag import FeaturedTag
from modboard.models.follow import Follow, FollowRecommendation, FollowRecommendationMute
from modboard.models.report import Report

__all__ = [
    "Account", "User", "ActionLog", "FeaturedTag", "Follow", "FollowRecommendation", "FollowRecommendationMute",
    "Report",
]
