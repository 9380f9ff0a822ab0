"""Comment entity.

Comments form an append-only review trail per material. They are never
edited. Only an admin may delete one.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from desk.domain.model.common import DomainModel, utcnow
from desk.domain.value import (
    MAX_COMMENT_LENGTH,
    CommentId,
    MaterialId,
    ReviewStateId,
    UserId,
)


class Comment(DomainModel):
    """Comment left on a material.

    `review_state_id` is a snapshot of the state chosen when the comment was
    written, kept for history only.
    """

    id: CommentId
    material_id: MaterialId
    author_id: UserId
    author_email: Optional[str] = None
    content: str = Field(min_length=1, max_length=MAX_COMMENT_LENGTH)
    review_state_id: Optional[ReviewStateId] = None
    created_at: datetime = Field(default_factory=utcnow)
