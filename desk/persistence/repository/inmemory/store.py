"""Shared in-memory tables for the in-memory repositories.

Repositories built on the same store see each other's writes, the way
PostgreSQL repositories share one database. Cascades and SET NULL rules
of the schema are applied by hand.
"""

from dataclasses import dataclass, field

from desk.domain.model import Comment, Material, Profile, ReviewState, Tag, TagGroup
from desk.domain.value import (
    CommentId,
    MaterialId,
    ReviewStateId,
    TagGroupId,
    TagId,
    UserId,
)


@dataclass
class InMemoryDatabase:
    """Tables keyed by primary key."""

    materials: dict[MaterialId, Material] = field(default_factory=dict)
    review_states: dict[ReviewStateId, ReviewState] = field(default_factory=dict)
    tag_groups: dict[TagGroupId, TagGroup] = field(default_factory=dict)
    tags: dict[TagId, Tag] = field(default_factory=dict)
    material_tags: set[tuple[MaterialId, TagId]] = field(default_factory=set)
    comments: dict[CommentId, Comment] = field(default_factory=dict)
    profiles: dict[UserId, Profile] = field(default_factory=dict)
