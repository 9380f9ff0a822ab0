"""Comment domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from desk.domain.error import NotFoundError, ValidationError
from desk.domain.model.comment import Comment
from desk.domain.model.common import utcnow
from desk.domain.model.profile import CurrentUser
from desk.domain.repository import CommentRepository
from desk.domain.value import MAX_COMMENT_LENGTH, CommentId, MaterialId, ReviewStateId

from .base import Service


def normalize_content(content: Optional[str]) -> str:
    """Trim comment text and check its length.

    Returns:
        The trimmed text, possibly empty

    Raises:
        ValidationError: If the trimmed text is too long
    """
    trimmed = (content or "").strip()
    if len(trimmed) > MAX_COMMENT_LENGTH:
        raise ValidationError(
            f"Comment cannot exceed {MAX_COMMENT_LENGTH} characters"
        )
    return trimmed


class CommentService(Service):
    """Domain service for the append-only comment trail."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def create_comment(
        self,
        material_id: MaterialId,
        author: CurrentUser,
        content: str,
        review_state_id: Optional[ReviewStateId] = None,
    ) -> Comment:
        """Append a comment to a material.

        Args:
            material_id: Material ID
            author: Signed-in author
            content: Comment text
            review_state_id: State snapshot stored with the comment

        Returns:
            Created comment

        Raises:
            ValidationError: If the text is empty or too long
        """
        with logfire.span(
            "comment_service.create_comment",
            material_id=str(material_id),
            author_id=str(author.id),
        ):
            text = normalize_content(content)
            if not text:
                raise ValidationError("Comment cannot be empty")

            comment = Comment(
                id=CommentId(uuid4()),
                material_id=material_id,
                author_id=author.id,
                author_email=author.email,
                content=text,
                review_state_id=review_state_id,
                created_at=utcnow(),
            )

            saved = await self.comment_repository.add(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                material_id=str(material_id),
                author_id=str(author.id),
            )
            return saved

    async def get_comments(self, material_id: MaterialId) -> list[Comment]:
        """Get all comments on a material, newest first."""
        with logfire.span(
            "comment_service.get_comments", material_id=str(material_id)
        ):
            comments = await self.comment_repository.find_by_material(material_id)
            logfire.info(
                "Comments retrieved", material_id=str(material_id), count=len(comments)
            )
            return comments

    async def count_comments(
        self, material_ids: list[MaterialId]
    ) -> dict[MaterialId, int]:
        """Count comments for several materials at once."""
        if not material_ids:
            return {}
        return await self.comment_repository.count_by_materials(material_ids)

    async def delete_comment(self, comment_id: CommentId) -> None:
        """Remove a comment. Reserved for admins.

        Does not touch the material's state or tags.

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span("comment_service.delete_comment", comment_id=str(comment_id)):
            if not await self.comment_repository.find_by_id(comment_id):
                raise NotFoundError("Comment", str(comment_id))
            await self.comment_repository.delete(comment_id)
            logfire.warn("Comment deleted by admin", comment_id=str(comment_id))
