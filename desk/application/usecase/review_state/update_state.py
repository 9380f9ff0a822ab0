"""Update review state use case."""

from typing import Optional
from uuid import UUID

from desk.application.usecase.dto import AuthenticatedRequest, ReviewStateInfo
from desk.domain.service import ProfileService, ReviewStateService
from desk.domain.value import ReviewStateId, UserId


class UpdateStateRequest(AuthenticatedRequest):
    """Update review state request. Unset fields are left unchanged."""

    state_id: str  # UUID string
    name: Optional[str] = None
    color: Optional[str] = None
    display_order: Optional[int] = None


class UpdateStateUseCase:
    """Use case for an admin renaming, recoloring or reordering a state."""

    def __init__(
        self,
        review_state_service: ReviewStateService,
        profile_service: ProfileService,
    ) -> None:
        self.review_state_service = review_state_service
        self.profile_service = profile_service

    async def execute(self, request: UpdateStateRequest) -> ReviewStateInfo:
        user = await self.profile_service.resolve_current_user(
            UserId(UUID(request.user_id)), request.email
        )
        self.profile_service.require_admin(user, "manage review states")

        state = await self.review_state_service.update_state(
            ReviewStateId(UUID(request.state_id)),
            name=request.name,
            color=request.color,
            display_order=request.display_order,
        )
        return ReviewStateInfo.from_domain(state)
