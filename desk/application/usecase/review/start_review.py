"""Start review use case."""

from uuid import UUID, uuid4

from pydantic import BaseModel

from desk.application.usecase.dto import AuthenticatedRequest, SessionInfo
from desk.domain.error import ValidationError
from desk.domain.service import (
    CommentService,
    MaterialService,
    PresenceRegistry,
    ReviewStateService,
    ReviewWorkflowService,
    TagService,
)
from desk.domain.value import Editor, MaterialId, UserId

from .get_analysis_data import AnalysisDataResponse, load_analysis_data


class StartReviewRequest(AuthenticatedRequest):
    """Start review request."""

    material_id: str  # UUID string
    presence_key: str | None = None  # Key of the caller's presence connection


class StartReviewResponse(BaseModel):
    """Start review response."""

    session: SessionInfo
    analysis: AnalysisDataResponse


class StartReviewUseCase:
    """Use case for opening the analysis form on a material."""

    def __init__(
        self,
        workflow_service: ReviewWorkflowService,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
        tag_service: TagService,
        comment_service: CommentService,
        presence_registry: PresenceRegistry,
    ) -> None:
        """Initialize start review use case.

        Args:
            workflow_service: Review workflow service
            material_service: Material domain service
            review_state_service: Review state domain service
            tag_service: Tag domain service
            comment_service: Comment domain service
            presence_registry: Registry that issued the presence keys
        """
        self.workflow_service = workflow_service
        self.material_service = material_service
        self.review_state_service = review_state_service
        self.tag_service = tag_service
        self.comment_service = comment_service
        self.presence_registry = presence_registry

    async def execute(self, request: StartReviewRequest) -> StartReviewResponse:
        """Execute start review flow.

        Steps:
        1. Open a session (lock check, prior state capture, in-progress marker)
        2. Load the form data with the material in its new state

        Editors without a presence connection get a key of their own, so
        the lock is still published for the length of the session. A key
        passed by the client must belong to an open presence connection of
        the same editor.

        Raises:
            NotFoundError: If the material does not exist
            MaterialLockedError: If another editor holds the material
            ValidationError: If the presence key was not issued to the caller
        """
        material_id = MaterialId(UUID(request.material_id))
        if (
            request.presence_key is not None
            and self.presence_registry.key_owner(request.presence_key) != request.email
        ):
            raise ValidationError("Presence key was not issued to this editor")

        editor = Editor(
            identity=request.email,
            key=request.presence_key or f"http-{uuid4()}",
        )

        session = await self.workflow_service.start_session(
            material_id, editor, UserId(UUID(request.user_id))
        )
        analysis = await load_analysis_data(
            material_id,
            self.material_service,
            self.review_state_service,
            self.tag_service,
            self.comment_service,
        )

        return StartReviewResponse(
            session=SessionInfo.from_domain(session),
            analysis=analysis,
        )
