"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from desk.domain.model.comment import Comment
from desk.domain.value import CommentId, MaterialId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Comments are append-only: there is no update operation.
    """

    @abstractmethod
    async def add(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: Comment to insert

        Returns:
            The stored comment
        """
        pass

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_material(self, material_id: MaterialId) -> list[Comment]:
        """Find all comments on a material, newest first.

        Args:
            material_id: Material to look up

        Returns:
            List of comments
        """
        pass

    @abstractmethod
    async def count_by_materials(
        self, material_ids: list[MaterialId]
    ) -> dict[MaterialId, int]:
        """Count comments per material.

        Args:
            material_ids: Materials to count for

        Returns:
            Mapping of material ID to comment count (0 when none)
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment.

        Args:
            comment_id: Comment to delete
        """
        pass
