"""Get comments use case."""

from uuid import UUID

from pydantic import BaseModel

from desk.application.usecase.dto import CommentInfo
from desk.domain.service import CommentService, MaterialService
from desk.domain.value import MaterialId


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    material_id: str  # UUID string


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    comments: list[CommentInfo]  # Newest first
    count: int


class GetCommentsUseCase:
    """Use case for reading a material's comment history."""

    def __init__(
        self, comment_service: CommentService, material_service: MaterialService
    ) -> None:
        self.comment_service = comment_service
        self.material_service = material_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Raises:
            NotFoundError: If the material does not exist
        """
        material_id = MaterialId(UUID(request.material_id))
        await self.material_service.get_material(material_id)
        comments = await self.comment_service.get_comments(material_id)
        return GetCommentsResponse(
            comments=[CommentInfo.from_domain(c) for c in comments],
            count=len(comments),
        )
