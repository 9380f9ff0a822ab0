"""Get current user use case."""

from uuid import UUID

from pydantic import BaseModel

from desk.application.usecase.dto import AuthenticatedRequest
from desk.domain.service import ProfileService
from desk.domain.value import UserId, UserRole


class GetCurrentUserRequest(AuthenticatedRequest):
    """Get current user request."""

    pass


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    user_id: str
    email: str
    role: UserRole
    is_admin: bool


class GetCurrentUserUseCase:
    """Use case for resolving the signed-in user and their role."""

    def __init__(self, profile_service: ProfileService) -> None:
        """Initialize get current user use case.

        Args:
            profile_service: Profile domain service
        """
        self.profile_service = profile_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Args:
            request: Get current user request

        Returns:
            Current user with role
        """
        user = await self.profile_service.resolve_current_user(
            UserId(UUID(request.user_id)), request.email
        )
        return GetCurrentUserResponse(
            user_id=str(user.id),
            email=user.email,
            role=user.role,
            is_admin=user.is_admin,
        )
