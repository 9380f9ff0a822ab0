"""Get analysis data use case."""

from uuid import UUID

from pydantic import BaseModel

from desk.application.usecase.dto import (
    CommentInfo,
    MaterialInfo,
    ReviewStateInfo,
    TagGroupInfo,
)
from desk.domain.service import (
    CommentService,
    MaterialService,
    ReviewStateService,
    TagService,
)
from desk.domain.value import MaterialId


class GetAnalysisDataRequest(BaseModel):
    """Get analysis data request."""

    material_id: str  # UUID string


class AnalysisDataResponse(BaseModel):
    """Everything the analysis form shows for one material."""

    material: MaterialInfo
    comments: list[CommentInfo]  # Newest first
    tag_ids: list[str]  # Currently assigned tags
    tag_groups: list[TagGroupInfo]
    review_states: list[ReviewStateInfo]


async def load_analysis_data(
    material_id: MaterialId,
    material_service: MaterialService,
    review_state_service: ReviewStateService,
    tag_service: TagService,
    comment_service: CommentService,
) -> AnalysisDataResponse:
    """Assemble the analysis form data for a material.

    Raises:
        NotFoundError: If the material does not exist
    """
    material = await material_service.get_material(material_id)
    states = await review_state_service.list_states()
    states_by_id = {state.id: state for state in states}
    comments = await comment_service.get_comments(material_id)
    tag_ids = await material_service.get_tag_ids(material_id)
    groups = await tag_service.list_groups_with_tags()

    return AnalysisDataResponse(
        material=MaterialInfo.from_domain(
            material,
            states_by_id.get(material.review_state_id)
            if material.review_state_id
            else None,
        ),
        comments=[CommentInfo.from_domain(c) for c in comments],
        tag_ids=[str(t) for t in tag_ids],
        tag_groups=[TagGroupInfo.from_domain(g.group, g.tags) for g in groups],
        review_states=[ReviewStateInfo.from_domain(s) for s in states],
    )


class GetAnalysisDataUseCase:
    """Use case for loading the analysis form of a material."""

    def __init__(
        self,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
        tag_service: TagService,
        comment_service: CommentService,
    ) -> None:
        self.material_service = material_service
        self.review_state_service = review_state_service
        self.tag_service = tag_service
        self.comment_service = comment_service

    async def execute(self, request: GetAnalysisDataRequest) -> AnalysisDataResponse:
        """Execute get analysis data flow.

        Raises:
            NotFoundError: If the material does not exist
        """
        return await load_analysis_data(
            MaterialId(UUID(request.material_id)),
            self.material_service,
            self.review_state_service,
            self.tag_service,
            self.comment_service,
        )
