"""Repository interfaces for the review desk domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from desk.domain.repository.comment import CommentRepository
from desk.domain.repository.material import MaterialRepository
from desk.domain.repository.profile import ProfileRepository
from desk.domain.repository.review_session import ReviewSessionRepository
from desk.domain.repository.review_state import ReviewStateRepository
from desk.domain.repository.tag import TagRepository

__all__ = [
    "CommentRepository",
    "MaterialRepository",
    "ProfileRepository",
    "ReviewSessionRepository",
    "ReviewStateRepository",
    "TagRepository",
]
