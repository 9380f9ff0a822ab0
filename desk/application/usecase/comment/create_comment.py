"""Create comment use case."""

from uuid import UUID

from desk.application.usecase.dto import AuthenticatedRequest, CommentInfo
from desk.domain.service import CommentService, MaterialService, ProfileService
from desk.domain.value import MaterialId, UserId


class CreateCommentRequest(AuthenticatedRequest):
    """Create comment request."""

    material_id: str  # UUID string
    content: str


class CreateCommentUseCase:
    """Use case for commenting on a material outside of a review."""

    def __init__(
        self,
        comment_service: CommentService,
        material_service: MaterialService,
        profile_service: ProfileService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            material_service: Material domain service
            profile_service: Profile domain service
        """
        self.comment_service = comment_service
        self.material_service = material_service
        self.profile_service = profile_service

    async def execute(self, request: CreateCommentRequest) -> CommentInfo:
        """Execute create comment flow.

        Steps:
        1. Verify the material exists
        2. Create the comment stamped with the material's current state

        Raises:
            NotFoundError: If the material does not exist
            ValidationError: If the text is empty or too long
        """
        material_id = MaterialId(UUID(request.material_id))
        material = await self.material_service.get_material(material_id)
        author = await self.profile_service.resolve_current_user(
            UserId(UUID(request.user_id)), request.email
        )

        comment = await self.comment_service.create_comment(
            material_id=material_id,
            author=author,
            content=request.content,
            review_state_id=material.review_state_id,
        )
        return CommentInfo.from_domain(comment)
