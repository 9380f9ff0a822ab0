"""List materials use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from desk.application.usecase.dto import MaterialInfo
from desk.domain.model import MaterialFilter
from desk.domain.service import CommentService, MaterialService, ReviewStateService
from desk.domain.value import ExpectedCategory, MaterialFormat, ReviewStateId


class ListMaterialsRequest(BaseModel):
    """List materials request."""

    category: Optional[ExpectedCategory] = None
    format: Optional[MaterialFormat] = None
    review_state_id: Optional[str] = None
    search: Optional[str] = None
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)


class MaterialListItem(BaseModel):
    """Material row in the list view."""

    material: MaterialInfo
    comment_count: int


class ListMaterialsResponse(BaseModel):
    """List materials response."""

    materials: list[MaterialListItem]


class ListMaterialsUseCase:
    """Use case for the filtered material list."""

    def __init__(
        self,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
        comment_service: CommentService,
    ) -> None:
        self.material_service = material_service
        self.review_state_service = review_state_service
        self.comment_service = comment_service

    async def execute(self, request: ListMaterialsRequest) -> ListMaterialsResponse:
        """Execute list materials flow.

        Materials come newest first, each with its state and comment count.
        """
        material_filter = MaterialFilter(
            category=request.category,
            format=request.format,
            review_state_id=ReviewStateId(UUID(request.review_state_id))
            if request.review_state_id
            else None,
            search=request.search.strip() if request.search else None,
        )
        materials = await self.material_service.list_materials(
            material_filter, limit=request.limit, offset=request.offset
        )

        states = {s.id: s for s in await self.review_state_service.list_states()}
        counts = await self.comment_service.count_comments([m.id for m in materials])

        return ListMaterialsResponse(
            materials=[
                MaterialListItem(
                    material=MaterialInfo.from_domain(
                        material,
                        states.get(material.review_state_id)
                        if material.review_state_id
                        else None,
                    ),
                    comment_count=counts.get(material.id, 0),
                )
                for material in materials
            ]
        )
