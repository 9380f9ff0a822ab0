"""Get material use case."""

from uuid import UUID

from pydantic import BaseModel

from desk.application.usecase.dto import MaterialInfo
from desk.domain.service import CommentService, MaterialService, ReviewStateService
from desk.domain.value import MaterialId


class GetMaterialRequest(BaseModel):
    """Get material request."""

    material_id: str  # UUID string


class GetMaterialResponse(BaseModel):
    """Get material response."""

    material: MaterialInfo
    tag_ids: list[str]
    comment_count: int


class GetMaterialUseCase:
    """Use case for reading one material with its tags and comment count."""

    def __init__(
        self,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
        comment_service: CommentService,
    ) -> None:
        self.material_service = material_service
        self.review_state_service = review_state_service
        self.comment_service = comment_service

    async def execute(self, request: GetMaterialRequest) -> GetMaterialResponse:
        """Execute get material flow.

        Raises:
            NotFoundError: If the material does not exist
        """
        material_id = MaterialId(UUID(request.material_id))
        material = await self.material_service.get_material(material_id)
        state = await self.review_state_service.find_state(material.review_state_id)
        tag_ids = await self.material_service.get_tag_ids(material_id)
        counts = await self.comment_service.count_comments([material_id])

        return GetMaterialResponse(
            material=MaterialInfo.from_domain(material, state),
            tag_ids=[str(t) for t in tag_ids],
            comment_count=counts.get(material_id, 0),
        )
