"""In-memory repository implementations for testing."""

from desk.persistence.repository.inmemory.comment import InMemoryCommentRepository
from desk.persistence.repository.inmemory.material import InMemoryMaterialRepository
from desk.persistence.repository.inmemory.profile import InMemoryProfileRepository
from desk.persistence.repository.inmemory.review_state import (
    InMemoryReviewStateRepository,
)
from desk.persistence.repository.inmemory.store import InMemoryDatabase
from desk.persistence.repository.inmemory.tag import InMemoryTagRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryDatabase",
    "InMemoryMaterialRepository",
    "InMemoryProfileRepository",
    "InMemoryReviewStateRepository",
    "InMemoryTagRepository",
]
