"""Delete review state use case."""

from uuid import UUID

from desk.application.usecase.dto import AuthenticatedRequest
from desk.domain.service import ProfileService, ReviewStateService
from desk.domain.value import ReviewStateId, UserId


class DeleteStateRequest(AuthenticatedRequest):
    """Delete review state request."""

    state_id: str  # UUID string


class DeleteStateUseCase:
    """Use case for an admin removing a review state."""

    def __init__(
        self,
        review_state_service: ReviewStateService,
        profile_service: ProfileService,
    ) -> None:
        self.review_state_service = review_state_service
        self.profile_service = profile_service

    async def execute(self, request: DeleteStateRequest) -> None:
        """Execute delete review state flow.

        Materials and comments in the state keep no state afterwards.

        Raises:
            NotAuthorizedError: If the user is not an admin
            NotFoundError: If the state does not exist
            BusinessRuleViolationError: If the state is the default or
                drives the workflow
        """
        user = await self.profile_service.resolve_current_user(
            UserId(UUID(request.user_id)), request.email
        )
        self.profile_service.require_admin(user, "manage review states")
        await self.review_state_service.delete_state(ReviewStateId(UUID(request.state_id)))
