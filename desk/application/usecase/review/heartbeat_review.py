"""Heartbeat review use case."""

from uuid import UUID

from desk.application.usecase.dto import AuthenticatedRequest, SessionInfo
from desk.domain.service import ReviewWorkflowService
from desk.domain.value import MaterialId, ReviewSessionId


class HeartbeatReviewRequest(AuthenticatedRequest):
    """Heartbeat review request."""

    material_id: str  # UUID string
    session_id: str  # UUID string


class HeartbeatReviewUseCase:
    """Use case for keeping an open review session alive."""

    def __init__(self, workflow_service: ReviewWorkflowService) -> None:
        self.workflow_service = workflow_service

    async def execute(self, request: HeartbeatReviewRequest) -> SessionInfo:
        session = await self.workflow_service.heartbeat(
            ReviewSessionId(UUID(request.session_id)),
            request.email,
            MaterialId(UUID(request.material_id)),
        )
        return SessionInfo.from_domain(session)
