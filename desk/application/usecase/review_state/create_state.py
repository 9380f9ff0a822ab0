"""Create review state use case."""

from uuid import UUID

from desk.application.usecase.dto import AuthenticatedRequest, ReviewStateInfo
from desk.domain.service import ProfileService, ReviewStateService
from desk.domain.value import UserId


class CreateStateRequest(AuthenticatedRequest):
    """Create review state request."""

    name: str
    color: str  # "#RRGGBB"


class CreateStateUseCase:
    """Use case for an admin adding a review state."""

    def __init__(
        self,
        review_state_service: ReviewStateService,
        profile_service: ProfileService,
    ) -> None:
        self.review_state_service = review_state_service
        self.profile_service = profile_service

    async def execute(self, request: CreateStateRequest) -> ReviewStateInfo:
        """Execute create review state flow.

        Raises:
            NotAuthorizedError: If the user is not an admin
            ValidationError: If name or color are invalid
            BusinessRuleViolationError: If the name is taken
        """
        user = await self.profile_service.resolve_current_user(
            UserId(UUID(request.user_id)), request.email
        )
        self.profile_service.require_admin(user, "manage review states")

        state = await self.review_state_service.create_state(request.name, request.color)
        return ReviewStateInfo.from_domain(state)
