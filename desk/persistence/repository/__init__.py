"""PostgreSQL repository implementations."""

from desk.persistence.repository.comment import PostgresCommentRepository
from desk.persistence.repository.material import PostgresMaterialRepository
from desk.persistence.repository.profile import PostgresProfileRepository
from desk.persistence.repository.review_state import PostgresReviewStateRepository
from desk.persistence.repository.tag import PostgresTagRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresMaterialRepository",
    "PostgresProfileRepository",
    "PostgresReviewStateRepository",
    "PostgresTagRepository",
]
