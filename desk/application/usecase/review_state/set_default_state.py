"""Set default review state use case."""

from uuid import UUID

from desk.application.usecase.dto import AuthenticatedRequest, ReviewStateInfo
from desk.domain.service import ProfileService, ReviewStateService
from desk.domain.value import ReviewStateId, UserId


class SetDefaultStateRequest(AuthenticatedRequest):
    """Set default review state request."""

    state_id: str  # UUID string


class SetDefaultStateUseCase:
    """Use case for an admin choosing the state new materials start in."""

    def __init__(
        self,
        review_state_service: ReviewStateService,
        profile_service: ProfileService,
    ) -> None:
        self.review_state_service = review_state_service
        self.profile_service = profile_service

    async def execute(self, request: SetDefaultStateRequest) -> ReviewStateInfo:
        user = await self.profile_service.resolve_current_user(
            UserId(UUID(request.user_id)), request.email
        )
        self.profile_service.require_admin(user, "manage review states")

        state = await self.review_state_service.set_default_state(
            ReviewStateId(UUID(request.state_id))
        )
        return ReviewStateInfo.from_domain(state)
