"""Cancel review use case."""

from uuid import UUID

from desk.application.usecase.dto import AuthenticatedRequest, MaterialInfo
from desk.domain.service import ReviewStateService, ReviewWorkflowService
from desk.domain.value import MaterialId, ReviewSessionId


class CancelReviewRequest(AuthenticatedRequest):
    """Cancel review request."""

    material_id: str  # UUID string
    session_id: str  # UUID string


class CancelReviewUseCase:
    """Use case for closing the analysis form without saving."""

    def __init__(
        self,
        workflow_service: ReviewWorkflowService,
        review_state_service: ReviewStateService,
    ) -> None:
        self.workflow_service = workflow_service
        self.review_state_service = review_state_service

    async def execute(self, request: CancelReviewRequest) -> MaterialInfo:
        """Execute cancel review flow.

        Returns:
            The material restored to its prior state

        Raises:
            NotFoundError: If the session does not exist or expired
            NotAuthorizedError: If the session belongs to another editor
        """
        material = await self.workflow_service.cancel_session(
            ReviewSessionId(UUID(request.session_id)),
            request.email,
            MaterialId(UUID(request.material_id)),
        )
        state = await self.review_state_service.find_state(material.review_state_id)
        return MaterialInfo.from_domain(material, state)
