"""Submit analysis use case."""

from uuid import UUID

from pydantic import BaseModel

from desk.application.usecase.dto import (
    AuthenticatedRequest,
    CommentInfo,
    MaterialInfo,
)
from desk.domain.service import (
    AnalysisService,
    ProfileService,
    ReviewStateService,
    ReviewWorkflowService,
)
from desk.domain.value import (
    MaterialId,
    ReviewSessionId,
    ReviewStateId,
    TagId,
    UserId,
)


class SubmitAnalysisRequest(AuthenticatedRequest):
    """Submit analysis request."""

    material_id: str  # UUID string
    comment: str | None = None
    review_state_id: str | None = None  # None clears the state
    tag_ids: list[str] = []  # Complete desired tag set
    session_id: str | None = None  # Session opened by the start review call


class SubmitAnalysisResponse(BaseModel):
    """Submit analysis response."""

    material: MaterialInfo
    comment: CommentInfo | None
    tag_ids: list[str]


class SubmitAnalysisUseCase:
    """Use case for saving the outcome of a review."""

    def __init__(
        self,
        analysis_service: AnalysisService,
        workflow_service: ReviewWorkflowService,
        review_state_service: ReviewStateService,
        profile_service: ProfileService,
    ) -> None:
        """Initialize submit analysis use case.

        Args:
            analysis_service: Analysis domain service
            workflow_service: Review workflow service
            review_state_service: Review state domain service
            profile_service: Profile domain service
        """
        self.analysis_service = analysis_service
        self.workflow_service = workflow_service
        self.review_state_service = review_state_service
        self.profile_service = profile_service

    async def execute(self, request: SubmitAnalysisRequest) -> SubmitAnalysisResponse:
        """Execute submit analysis flow.

        Steps:
        1. Resolve the author and check the session, if one is given
        2. Validate and write comment, state and tags
        3. Close the session

        Raises:
            ValidationError: If the comment or chosen state is invalid
            InvalidReferenceError: If the state or a tag does not exist
            NotFoundError: If the material or session does not exist
            NotAuthorizedError: If the session belongs to another editor
            SubmissionFailedError: If a write fails part-way
        """
        material_id = MaterialId(UUID(request.material_id))
        author = await self.profile_service.resolve_current_user(
            UserId(UUID(request.user_id)), request.email
        )

        session = None
        if request.session_id:
            session = await self.workflow_service.get_session(
                ReviewSessionId(UUID(request.session_id)),
                request.email,
                material_id,
            )

        result = await self.analysis_service.submit(
            material_id=material_id,
            author=author,
            comment=request.comment,
            review_state_id=ReviewStateId(UUID(request.review_state_id))
            if request.review_state_id
            else None,
            tag_ids=[TagId(UUID(t)) for t in request.tag_ids],
        )

        if session:
            await self.workflow_service.complete_session(session)

        state = await self.review_state_service.find_state(
            result.material.review_state_id
        )
        return SubmitAnalysisResponse(
            material=MaterialInfo.from_domain(result.material, state),
            comment=CommentInfo.from_domain(result.comment) if result.comment else None,
            tag_ids=[str(t) for t in result.tag_ids],
        )
