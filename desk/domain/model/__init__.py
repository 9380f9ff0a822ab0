"""Domain models for the review desk."""

from desk.domain.model.comment import Comment
from desk.domain.model.material import (
    Material,
    MaterialFilter,
    MaterialStats,
    StateCount,
)
from desk.domain.model.profile import CurrentUser, Profile
from desk.domain.model.review_state import ReviewState
from desk.domain.model.session import Lock, ReviewSession
from desk.domain.model.tag import Tag, TagGroup, TagGroupWithTags

__all__ = [
    "Comment",
    "CurrentUser",
    "Lock",
    "Material",
    "MaterialFilter",
    "MaterialStats",
    "Profile",
    "ReviewSession",
    "ReviewState",
    "StateCount",
    "Tag",
    "TagGroup",
    "TagGroupWithTags",
]
