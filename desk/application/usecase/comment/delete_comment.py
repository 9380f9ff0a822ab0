"""Delete comment use case."""

from uuid import UUID

from desk.application.usecase.dto import AuthenticatedRequest
from desk.domain.service import CommentService, ProfileService
from desk.domain.value import CommentId, UserId


class DeleteCommentRequest(AuthenticatedRequest):
    """Delete comment request."""

    comment_id: str  # UUID string


class DeleteCommentUseCase:
    """Use case for an admin removing a comment."""

    def __init__(
        self, comment_service: CommentService, profile_service: ProfileService
    ) -> None:
        self.comment_service = comment_service
        self.profile_service = profile_service

    async def execute(self, request: DeleteCommentRequest) -> None:
        """Execute delete comment flow.

        Raises:
            NotAuthorizedError: If the user is not an admin
            NotFoundError: If the comment does not exist
        """
        user = await self.profile_service.resolve_current_user(
            UserId(UUID(request.user_id)), request.email
        )
        self.profile_service.require_admin(user, "delete comments")
        await self.comment_service.delete_comment(CommentId(UUID(request.comment_id)))
