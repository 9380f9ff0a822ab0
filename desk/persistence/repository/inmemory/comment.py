"""In-memory implementation of Comment repository for testing."""

from typing import Optional

from desk.domain.model.comment import Comment
from desk.domain.repository.comment import CommentRepository
from desk.domain.value import CommentId, MaterialId
from desk.persistence.repository.inmemory.store import InMemoryDatabase


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, store: Optional[InMemoryDatabase] = None) -> None:
        """Initialize repository on a shared or fresh store."""
        self.store = store or InMemoryDatabase()

    async def add(self, comment: Comment) -> Comment:
        """Insert a comment."""
        if comment.id in self.store.comments:
            raise ValueError(f"Comment {comment.id} already exists")
        self.store.comments[comment.id] = comment
        return comment

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find comment by ID."""
        return self.store.comments.get(comment_id)

    async def find_by_material(self, material_id: MaterialId) -> list[Comment]:
        """Find comments on a material, newest first."""
        comments = [
            c for c in self.store.comments.values() if c.material_id == material_id
        ]
        return sorted(comments, key=lambda c: c.created_at, reverse=True)

    async def count_by_materials(
        self, material_ids: list[MaterialId]
    ) -> dict[MaterialId, int]:
        """Count comments per material."""
        counts = {material_id: 0 for material_id in material_ids}
        for comment in self.store.comments.values():
            if comment.material_id in counts:
                counts[comment.material_id] += 1
        return counts

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        self.store.comments.pop(comment_id, None)
